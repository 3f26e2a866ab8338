"""Quantum registers held by the simulated device and the registry of them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import numpy as np

from cqsimbe.datatypes import CqStatus, CQError

DEVICE_MAX_NUM_QUREGS = 64


class QuantumRegister:
    """A state-vector simulation of ``num_qubits`` qubits, starting in |0...0>.

    Qubit ``k`` corresponds to bit ``k`` of the basis-state index.
    """

    def __init__(self, num_qubits: int, rng: np.random.Generator | None = None) -> None:
        if num_qubits < 1:
            raise CQError(f"a register needs at least one qubit, got {num_qubits}")
        self.num_qubits = num_qubits
        self._rng = rng if rng is not None else np.random.default_rng()
        self._indices = np.arange(1 << num_qubits)
        self._amps = np.zeros(1 << num_qubits, dtype=complex)
        self._amps[0] = 1.0

    def amplitudes(self) -> np.ndarray:
        """Return a copy of the state vector."""
        return self._amps.copy()

    def _check_qubit(self, qubit: int) -> None:
        if not 0 <= qubit < self.num_qubits:
            raise CQError(
                f"qubit {qubit} out of range for a {self.num_qubits}-qubit register"
            )

    def _check_pair(self, qubit_a: int, qubit_b: int) -> None:
        self._check_qubit(qubit_a)
        self._check_qubit(qubit_b)
        if qubit_a == qubit_b:
            raise CQError(f"qubits must be distinct, got {qubit_a} twice")

    def init_classical_state(self, index: int) -> None:
        """Set the register to the computational basis state ``index``."""
        if not 0 <= index < self._amps.size:
            raise CQError(
                f"state {index} out of range for a {self.num_qubits}-qubit register"
            )
        self._amps[:] = 0.0
        self._amps[index] = 1.0

    def apply_hadamard(self, target: int) -> None:
        self._check_qubit(target)
        mask = 1 << target
        low = self._indices[(self._indices & mask) == 0]
        high = low | mask
        a = self._amps[low]
        b = self._amps[high]
        self._amps[low] = (a + b) / np.sqrt(2.0)
        self._amps[high] = (a - b) / np.sqrt(2.0)

    def apply_two_qubit_phase_shift(self, qubit_a: int, qubit_b: int, theta: float) -> None:
        """Multiply by exp(i*theta) every amplitude where both qubits are 1."""
        self._check_pair(qubit_a, qubit_b)
        mask = (1 << qubit_a) | (1 << qubit_b)
        selected = (self._indices & mask) == mask
        self._amps[selected] *= np.exp(1j * theta)

    def apply_swap(self, qubit_a: int, qubit_b: int) -> None:
        self._check_pair(qubit_a, qubit_b)
        mask_a = 1 << qubit_a
        mask_b = 1 << qubit_b
        only_a = self._indices[
            ((self._indices & mask_a) != 0) & ((self._indices & mask_b) == 0)
        ]
        only_b = only_a ^ mask_a ^ mask_b
        self._amps[only_a], self._amps[only_b] = (
            self._amps[only_b].copy(),
            self._amps[only_a].copy(),
        )

    def measure(self, targets: Iterable[int]) -> int:
        """Measure the target qubits and collapse the state.

        Returns an outcome whose bit ``i`` is the result for ``targets[i]``.
        """
        targets = tuple(targets)
        if not targets:
            raise CQError("at least one qubit must be measured")
        for target in targets:
            self._check_qubit(target)
        if len(set(targets)) != len(targets):
            raise CQError("measured qubits must be distinct")

        outcome_of = np.zeros_like(self._indices)
        for bit, target in enumerate(targets):
            outcome_of |= ((self._indices >> target) & 1) << bit

        probs = np.abs(self._amps) ** 2
        outcome_probs = np.bincount(outcome_of, weights=probs, minlength=1 << len(targets))
        outcome_probs /= outcome_probs.sum()
        outcome = int(self._rng.choice(outcome_probs.size, p=outcome_probs))

        keep = outcome_of == outcome
        self._amps[~keep] = 0.0
        self._amps /= np.sqrt(outcome_probs[outcome] * probs.sum())
        return outcome


@dataclass
class AllocParams:
    """Request and reply for allocating or freeing a register on the device."""

    num_qubits: int
    qregistry_idx: int = 0
    status: CqStatus = CqStatus.ERROR


class QuantumRegistry:
    """Fixed number of slots, each holding at most one quantum register."""

    def __init__(self) -> None:
        self._rng = np.random.default_rng()
        self._slots: list[QuantumRegister | None] = []
        self.init()

    def init(self) -> None:
        """Mark every slot as available."""
        self._slots = [None] * DEVICE_MAX_NUM_QUREGS

    def clear(self) -> None:
        """Release every allocated register."""
        self.init()

    @property
    def num_registers(self) -> int:
        return sum(slot is not None for slot in self._slots)

    def is_available(self, index: int) -> bool:
        return self._slots[index] is None

    def next_available_slot(self) -> int:
        """Return the lowest free slot; raise CQError if the registry is full."""
        for index, slot in enumerate(self._slots):
            if slot is None:
                return index
        raise CQError("no quantum register slots available")

    def alloc(self, num_qubits: int) -> int:
        """Create a register in the next free slot and return the slot index."""
        index = self.next_available_slot()
        self._slots[index] = QuantumRegister(num_qubits, self._rng)
        return index

    def dealloc(self, index: int) -> None:
        if not 0 <= index < len(self._slots) or self._slots[index] is None:
            raise CQError(f"quantum register {index} is not allocated")
        self._slots[index] = None

    def __getitem__(self, index: int) -> QuantumRegister:
        if not 0 <= index < len(self._slots):
            raise IndexError(f"registry slot {index} out of range")
        register = self._slots[index]
        if register is None:
            raise CQError(f"quantum register {index} is not allocated")
        return register


qregistry = QuantumRegistry()


def init_qregistry() -> None:
    qregistry.init()


def clear_qregistry() -> None:
    qregistry.clear()


def get_next_available_qregistry_slot() -> int:
    return qregistry.next_available_slot()


def device_alloc_qureg(params: AllocParams) -> CqStatus:
    """Control operation: allocate a register, reporting through ``params``."""
    try:
        params.qregistry_idx = qregistry.alloc(params.num_qubits)
    except CQError:
        params.status = CqStatus.ERROR
    else:
        params.status = CqStatus.SUCCESS
    return params.status


def device_dealloc_qureg(params: AllocParams) -> CqStatus:
    """Control operation: free a register, reporting through ``params``."""
    try:
        qregistry.dealloc(params.qregistry_idx)
    except CQError:
        params.status = CqStatus.ERROR
    else:
        params.status = CqStatus.SUCCESS
    return params.status