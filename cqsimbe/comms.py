"""Link between the host and the device thread that runs control operations."""

from __future__ import annotations

import threading
from typing import Any

from cqsimbe.control import dispatch
from cqsimbe.datatypes import CqStatus, CQError, CtrlCode

_POLL_SECONDS = 0.1


class DeviceLink:
    """Posts control operations to a device thread and waits for them."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._new_op_condition = threading.Condition(self._lock)
        self._op_complete_condition = threading.Condition(self._lock)
        self._thread: threading.Thread | None = None
        self._result: Any = None
        self._error: BaseException | None = None
        self.run_device = False
        self.new_op = False
        self.ctrl_op_complete = False
        self.op: CtrlCode | None = None
        self.op_params: Any = None

    def _thread_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def initialise(self, verbosity: int = 0) -> CqStatus:
        """Start the device thread and initialise the simulator on it."""
        if self._thread_alive():
            raise CQError("device is already running")
        if verbosity > 0:
            print("Initialising device.")
        with self._lock:
            self.run_device = True
            self.new_op = False
        self._thread = threading.Thread(
            target=self._control_loop, name="cq-device", daemon=True
        )
        self._thread.start()
        self.send(CtrlCode.INIT, verbosity)
        return self.wait()

    def send(self, op: CtrlCode | int, params: Any = None) -> None:
        """Post a control operation to the device without waiting for it."""
        try:
            code = CtrlCode(op)
        except ValueError:
            raise CQError(f"unknown control operation {op!r}") from None
        if not self._thread_alive():
            raise CQError("device is not running")
        with self._lock:
            self.op = code
            self.op_params = params
            self.new_op = True
            self.ctrl_op_complete = False
            self._result = None
            self._error = None
            self._new_op_condition.notify()

    def wait(self) -> Any:
        """Wait for the posted operation; return its result or raise its error."""
        with self._lock:
            while not self.ctrl_op_complete:
                if not self._thread_alive():
                    raise CQError("device stopped before completing the operation")
                self._op_complete_condition.wait(_POLL_SECONDS)
            error, self._error = self._error, None
            if error is not None:
                raise error
            return self._result

    def _control_loop(self) -> None:
        with self._lock:
            while self.run_device:
                while not self.new_op:
                    self._new_op_condition.wait()
                op, params = self.op, self.op_params
                self.new_op = False
                try:
                    self._result = dispatch(op, params)
                except Exception as exc:
                    self._result = None
                    self._error = exc
                self.ctrl_op_complete = True
                self._op_complete_condition.notify_all()

    def finalise(self, verbosity: int = 0) -> CqStatus:
        """Finalise the simulator and stop the device thread."""
        if not self._thread_alive():
            raise CQError("device is not running")
        if verbosity > 0:
            print("Finalising device.")
        with self._lock:
            self.run_device = False
        self.send(CtrlCode.FINALISE, verbosity)
        thread = self._thread
        thread.join()
        self._thread = None
        with self._lock:
            error, self._error = self._error, None
            if error is not None:
                raise error
            return self._result


dev_ctrl = DeviceLink()


def initialise_device(verbosity: int = 0) -> CqStatus:
    return dev_ctrl.initialise(verbosity)


def host_send_ctrl_op(op: CtrlCode | int, params: Any = None) -> None:
    dev_ctrl.send(op, params)


def host_wait_ctrl_op() -> Any:
    return dev_ctrl.wait()


def finalise_device(verbosity: int = 0) -> CqStatus:
    return dev_ctrl.finalise(verbosity)