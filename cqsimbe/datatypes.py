"""Core data types shared by the host and the simulated device."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

MAX_NUM_QKERN = 256
MAX_QKERN_NAME_LENGTH = 1024


class CqStatus(IntEnum):
    """Outcome of an operation, as reported between host and device."""

    ERROR = -1
    SUCCESS = 0
    WARNING = 1


class CQError(Exception):
    """Raised when an operation on the backend fails."""

    def __init__(self, message: str, status: CqStatus = CqStatus.ERROR) -> None:
        super().__init__(message)
        self.status = status


class CtrlCode(IntEnum):
    """Control operations the host can post to the device."""

    INIT = 0
    ABORT = 1
    FINALISE = 2
    ALLOC = 3
    DEALLOC = 4
    RUN_QKERNEL = 5
    RUN_PQKERNEL = 6
    TEST = 7


@dataclass(frozen=True)
class Qubit:
    """Handle to one qubit of a register held by the device."""

    registry_index: int
    offset: int
    n: int