"""Quantum gates applied to qubits of registers held by the device."""

from __future__ import annotations

from cqsimbe.datatypes import CQError, Qubit
from cqsimbe.resources import qregistry


def _require(*qubits: Qubit | None) -> None:
    if any(qubit is None for qubit in qubits):
        raise CQError("gate applied to a missing qubit")


def _require_distinct(a: Qubit, b: Qubit) -> None:
    if a is b or a == b:
        raise CQError("gate needs two distinct qubits")


def hadamard(qubit: Qubit | None) -> None:
    _require(qubit)
    qregistry[qubit.registry_index].apply_hadamard(qubit.offset)


def cphase(ctrl: Qubit | None, target: Qubit | None, theta: float) -> None:
    """Apply a phase of exp(i*theta) where both ``ctrl`` and ``target`` are 1."""
    _require(ctrl, target)
    _require_distinct(ctrl, target)
    qregistry[ctrl.registry_index].apply_two_qubit_phase_shift(
        ctrl.offset, target.offset, theta
    )


def swap(a: Qubit | None, b: Qubit | None) -> None:
    _require(a, b)
    _require_distinct(a, b)
    qregistry[a.registry_index].apply_swap(a.offset, b.offset)