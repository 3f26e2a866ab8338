"""State preparation and measurement of registers held by the device."""

from __future__ import annotations

from typing import MutableSequence, Sequence

from cqsimbe.datatypes import Qubit
from cqsimbe.device_utils import qindex_to_cstate
from cqsimbe.resources import qregistry


def set_qureg(qreg: Sequence[Qubit], state_index: int, n: int) -> None:
    """Put the register holding ``qreg`` into basis state ``state_index``."""
    qregistry[qreg[0].registry_index].init_classical_state(state_index)


def measure_qureg(
    qreg: Sequence[Qubit], nqubits: int, creg: MutableSequence[int] | None
) -> list[int]:
    """Measure the first ``nqubits`` qubits of the register.

    The bits are returned with the last qubit first and, when ``creg`` is
    given, also stored in its first ``nqubits`` entries.
    """
    register = qregistry[qreg[0].registry_index]
    outcome = register.measure(range(nqubits))
    bits = qindex_to_cstate(outcome, nqubits)
    if creg is not None:
        creg[:nqubits] = bits
    return bits