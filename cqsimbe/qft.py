"""Quantum Fourier transform kernels and a command that runs them."""

from __future__ import annotations

import argparse
import math
from typing import MutableSequence, Sequence

from cqsimbe.datatypes import Qubit
from cqsimbe.device_ops import measure_qureg, set_qureg
from cqsimbe.env import cq_finalise, cq_init
from cqsimbe.gates import cphase, hadamard, swap
from cqsimbe.host_ops import alloc_qureg, free_qureg, init_creg, sm_qrun
from cqsimbe.kernels import qkernel, register_qkern


def qft_circuit(nqubits: int, qreg: Sequence[Qubit]) -> None:
    """Apply the QFT gate sequence to the first ``nqubits`` qubits."""
    for i in range(nqubits):
        hadamard(qreg[i])
        for j in range(i + 1, nqubits):
            cphase(qreg[j], qreg[i], math.pi / 2**j)

    for i in range(nqubits // 2):
        swap(qreg[i], qreg[nqubits - (i + 1)])


@qkernel
def zero_init_full_qft(
    nqubits: int, qreg: Sequence[Qubit], creg: MutableSequence[int] | None
) -> None:
    """Prepare |0...0>, run the QFT and measure every qubit."""
    set_qureg(qreg, 0, nqubits)
    qft_circuit(nqubits, qreg)
    measure_qureg(qreg, nqubits, creg)


@qkernel
def equal_superposition_full_qft(
    nqubits: int, qreg: Sequence[Qubit], creg: MutableSequence[int] | None
) -> None:
    """Prepare the equal superposition, run the QFT and measure every qubit."""
    set_qureg(qreg, 0, nqubits)
    for qubit in qreg[:nqubits] if isinstance(qreg, list) else list(qreg)[:nqubits]:
        hadamard(qubit)
    qft_circuit(nqubits, qreg)
    measure_qureg(qreg, nqubits, creg)


def report_results(creg: Sequence[int], nmeasure: int, nshots: int) -> None:
    """Print the measurements of each shot on its own line."""
    print("Reporting measurement outcomes:")
    for shot in range(nshots):
        bits = creg[shot * nmeasure:(shot + 1) * nmeasure]
        print(f"Shot [{shot}]: " + "".join(f"{bit} " for bit in bits))


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Run two QFT circuits on the simulated quantum device."
    )
    parser.add_argument("--qubits", type=int, default=10, help="number of qubits")
    parser.add_argument("--shots", type=int, default=10, help="number of shots")
    args = parser.parse_args(argv)

    nqubits = args.qubits
    nshots = args.shots
    nmeasure = nqubits

    cq_init(0)
    try:
        qreg = alloc_qureg(nqubits)
        try:
            creg = init_creg(nmeasure * nshots, -1)
            register_qkern(zero_init_full_qft)
            register_qkern(equal_superposition_full_qft)

            print("Running first QFT circuit on quantum device.")
            sm_qrun(zero_init_full_qft, qreg, nqubits, creg, nmeasure, nshots)
            report_results(creg, nmeasure, nshots)

            print("Running second QFT circuit on quantum device.")
            sm_qrun(equal_superposition_full_qft, qreg, nqubits, creg, nmeasure, nshots)
            report_results(creg, nmeasure, nshots)
        finally:
            free_qureg(qreg)
    finally:
        cq_finalise(0)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())