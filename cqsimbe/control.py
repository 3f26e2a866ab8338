"""Control operations run by the simulated device on request from the host."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, MutableSequence, Sequence

from cqsimbe.datatypes import CqStatus, CQError, CtrlCode, Qubit
from cqsimbe.kernels import find_pqkern_pointer, find_qkern_pointer
from cqsimbe.resources import (
    DEVICE_MAX_NUM_QUREGS,
    clear_qregistry,
    device_alloc_qureg,
    device_dealloc_qureg,
    init_qregistry,
)


@dataclass
class KernelParams:
    """What the device needs to run a registered kernel once."""

    fname: str
    nqubits: int
    qreg: Sequence[Qubit]
    creg: MutableSequence[int] | None
    params: Any = None


@dataclass
class Flag:
    """A mutable boolean the device can set, used to check the control link."""

    value: bool = False


def initialise_simulator(verbosity: int = 0) -> CqStatus:
    """Bring up the simulator and empty the register registry."""
    if verbosity > 0:
        print("Initialising simulator.")
        print(
            "Simulator: state-vector backend, "
            f"up to {DEVICE_MAX_NUM_QUREGS} quantum registers."
        )
        print("Initialising quantum resource registry.")
    init_qregistry()
    return CqStatus.SUCCESS


def abort_current_kernel(params: Any = None) -> CqStatus:
    return CqStatus.SUCCESS


def finalise_simulator(verbosity: int = 0) -> CqStatus:
    """Release every register held by the simulator."""
    if verbosity > 0:
        print("Finalising simulator.")
    clear_qregistry()
    return CqStatus.SUCCESS


def run_qkernel(params: KernelParams) -> CqStatus:
    """Run the kernel registered under ``params.fname``.

    Raises CQError if no kernel is registered under that name.
    """
    kernel = find_qkern_pointer(params.fname)
    kernel(params.nqubits, params.qreg, params.creg)
    return CqStatus.SUCCESS


def run_pqkernel(params: KernelParams) -> CqStatus:
    """Run the parameterised kernel registered under ``params.fname``."""
    kernel = find_pqkern_pointer(params.fname)
    kernel(params.nqubits, params.qreg, params.creg, params.params)
    return CqStatus.SUCCESS


def test_control_fn(flag: Flag) -> CqStatus:
    """Set ``flag``; report WARNING if it was already set."""
    if flag.value:
        return CqStatus.WARNING
    flag.value = True
    return CqStatus.SUCCESS


_CONTROL_REGISTRY: dict[CtrlCode, Callable[[Any], CqStatus]] = {
    CtrlCode.INIT: initialise_simulator,
    CtrlCode.ABORT: abort_current_kernel,
    CtrlCode.FINALISE: finalise_simulator,
    CtrlCode.ALLOC: device_alloc_qureg,
    CtrlCode.DEALLOC: device_dealloc_qureg,
    CtrlCode.RUN_QKERNEL: run_qkernel,
    CtrlCode.RUN_PQKERNEL: run_pqkernel,
    CtrlCode.TEST: test_control_fn,
}


def dispatch(op: CtrlCode | int, params: Any) -> CqStatus:
    """Run the control operation ``op`` with ``params`` and return its status."""
    try:
        code = CtrlCode(op)
    except ValueError:
        raise CQError(f"unknown control operation {op!r}") from None
    return _CONTROL_REGISTRY[code](params)