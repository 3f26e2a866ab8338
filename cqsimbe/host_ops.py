"""Host-side management of quantum registers and execution of kernels."""

from __future__ import annotations

from typing import Any, Iterable, Iterator, MutableSequence

from cqsimbe.comms import host_send_ctrl_op, host_wait_ctrl_op
from cqsimbe.control import KernelParams
from cqsimbe.datatypes import CqStatus, CQError, CtrlCode, Qubit
from cqsimbe.kernels import Kernel, find_qkern_name
from cqsimbe.resources import AllocParams


class Qureg:
    """The host's handle to a quantum register held by the device."""

    def __init__(self, qubits: Iterable[Qubit]) -> None:
        self._qubits = tuple(qubits)
        self._freed = False

    def __len__(self) -> int:
        return len(self._qubits)

    def __getitem__(self, index: int) -> Qubit:
        if self._freed:
            raise CQError("quantum register has been freed")
        return self._qubits[index]

    def __iter__(self) -> Iterator[Qubit]:
        if self._freed:
            raise CQError("quantum register has been freed")
        return iter(self._qubits)

    @property
    def freed(self) -> bool:
        """True once the register has been released on the device."""
        return self._freed

    def _mark_freed(self) -> None:
        self._freed = True


def alloc_qureg(n: int) -> Qureg:
    """Allocate an ``n``-qubit register on the device.

    Raises CQError if the device cannot allocate it.
    """
    params = AllocParams(num_qubits=n)
    host_send_ctrl_op(CtrlCode.ALLOC, params)
    host_wait_ctrl_op()
    if params.status != CqStatus.SUCCESS:
        raise CQError(f"device failed to allocate a {n}-qubit register", params.status)
    return Qureg(
        Qubit(registry_index=params.qregistry_idx, offset=offset, n=n)
        for offset in range(n)
    )


def free_qureg(qureg: Qureg | None) -> CqStatus:
    """Release ``qureg`` on the device.

    Returns WARNING if there is nothing to free; raises CQError if the device
    refuses.
    """
    if qureg is None or qureg.freed or len(qureg) == 0:
        return CqStatus.WARNING
    params = AllocParams(num_qubits=0, qregistry_idx=qureg[0].registry_index)
    host_send_ctrl_op(CtrlCode.DEALLOC, params)
    host_wait_ctrl_op()
    if params.status != CqStatus.SUCCESS:
        raise CQError("device failed to free the quantum register", params.status)
    qureg._mark_freed()
    return CqStatus.SUCCESS


def init_creg(length: int, init_val: int) -> list[int]:
    """Return a classical register of ``length`` entries, all ``init_val``."""
    return [init_val] * length


def sm_qrun(
    kernel: Kernel | None,
    qreg: Qureg | None,
    nqubits: int,
    creg: MutableSequence[Any] | None,
    nmeasure: int,
    nshots: int,
) -> CqStatus:
    """Run a registered kernel ``nshots`` times, synchronously.

    Shot ``k`` writes its measurements to ``creg[k*nmeasure:(k+1)*nmeasure]``.
    Raises CQError for a missing or freed register, a missing classical
    register when measurements are expected, or an unregistered kernel.
    """
    if nshots == 0:
        return CqStatus.SUCCESS
    if qreg is None or qreg.freed:
        raise CQError("kernel run on a missing or freed quantum register")
    if nmeasure != 0 and creg is None:
        raise CQError("kernel measures but no classical register was given")
    fname = find_qkern_name(kernel)

    for shot in range(nshots):
        start = shot * nmeasure
        shot_creg = None if creg is None else list(creg[start:start + nmeasure])
        params = KernelParams(fname=fname, nqubits=nqubits, qreg=qreg, creg=shot_creg)
        host_send_ctrl_op(CtrlCode.RUN_QKERNEL, params)
        host_wait_ctrl_op()
        if creg is not None and nmeasure:
            creg[start:start + nmeasure] = shot_creg[:nmeasure]
    return CqStatus.SUCCESS