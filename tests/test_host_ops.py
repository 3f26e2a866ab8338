import pytest

from cqsimbe.comms import finalise_device, initialise_device
from cqsimbe.datatypes import CqStatus, CQError
from cqsimbe.device_ops import measure_qureg, set_qureg
from cqsimbe.gates import hadamard
from cqsimbe.host_ops import Qureg, alloc_qureg, free_qureg, init_creg, sm_qrun
from cqsimbe.kernels import find_qkern_name, qkernel, register_qkern
from cqsimbe.qft import qft_circuit

NQUBITS = 5
CR_INIT_VAL = -1


@qkernel
def host_ops_qft_from_zero(nqubits, qreg, creg):
    set_qureg(qreg, 0, nqubits)
    qft_circuit(nqubits, qreg)
    measure_qureg(qreg, nqubits, creg)


@qkernel
def host_ops_qft_from_plus(nqubits, qreg, creg):
    set_qureg(qreg, 0, nqubits)
    for qubit in list(qreg)[:nqubits]:
        hadamard(qubit)
    qft_circuit(nqubits, qreg)
    measure_qureg(qreg, nqubits, creg)


@qkernel
def host_ops_all_site_hadamard(nqubits, qreg, creg):
    set_qureg(qreg, 0, nqubits)
    for qubit in list(qreg)[:nqubits]:
        hadamard(qubit)
    measure_qureg(qreg, nqubits, creg)


@qkernel
def host_ops_measure_first_site(nqubits, qreg, creg):
    set_qureg(qreg, 0, nqubits)
    hadamard(qreg[0])
    measure_qureg(qreg, 1, creg)


@qkernel
def host_ops_no_measure(nqubits, qreg, creg):
    pass


@qkernel
def host_ops_basis_five(nqubits, qreg, creg):
    set_qureg(qreg, 5, nqubits)
    measure_qureg(qreg, nqubits, creg)


def host_ops_unregistered(nqubits, qreg, creg):
    raise AssertionError("an unregistered kernel must never run")


@pytest.fixture(scope="module", autouse=True)
def device():
    started = False
    try:
        initialise_device(0)
        started = True
    except CQError:
        pass
    for kernel in (
        host_ops_qft_from_zero,
        host_ops_qft_from_plus,
        host_ops_all_site_hadamard,
        host_ops_measure_first_site,
        host_ops_no_measure,
        host_ops_basis_five,
    ):
        register_qkern(kernel)
    yield
    if started:
        finalise_device(0)


def _all_bits(values):
    return all(value in (0, 1) for value in values)


def test_first_alloc_and_free_qureg():
    qreg = alloc_qureg(1)
    assert len(qreg) == 1
    assert not qreg.freed
    assert free_qureg(qreg) == CqStatus.SUCCESS
    assert qreg.freed


@pytest.mark.parametrize("nqubits", [1, 2, 3])
def test_alloc_and_free_qureg(nqubits):
    qreg = alloc_qureg(nqubits)
    assert [qubit.offset for qubit in qreg] == list(range(nqubits))
    assert all(qubit.n == nqubits for qubit in qreg)
    assert len({qubit.registry_index for qubit in qreg}) == 1
    assert free_qureg(qreg) == CqStatus.SUCCESS
    assert qreg.freed


def test_double_free_qureg():
    qreg = alloc_qureg(3)
    assert free_qureg(qreg) == CqStatus.SUCCESS
    assert free_qureg(qreg) == CqStatus.WARNING


def test_free_missing_qureg():
    assert free_qureg(None) == CqStatus.WARNING


def test_freed_qureg_cannot_be_indexed():
    qreg = alloc_qureg(2)
    assert qreg[0].offset == 0
    assert free_qureg(qreg) == CqStatus.SUCCESS
    assert qreg.freed is True
    with pytest.raises(CQError):
        qreg[0]


def test_alloc_zero_qubits_fails():
    with pytest.raises(CQError):
        alloc_qureg(0)


def test_separate_registers_get_separate_slots():
    first = alloc_qureg(2)
    second = alloc_qureg(2)
    try:
        assert first[0].registry_index != second[0].registry_index
    finally:
        free_qureg(first)
        free_qureg(second)


def test_init_creg():
    assert init_creg(1, -1) == [-1]
    assert init_creg(2, -1) == [-1, -1]
    assert init_creg(10, -1) == [-1] * 10
    assert init_creg(10, 10) == [10] * 10
    assert init_creg(0, 3) == []


@pytest.fixture
def qreg():
    register = alloc_qureg(NQUBITS)
    yield register
    free_qureg(register)


def test_first_run(qreg):
    nmeasure = NQUBITS
    nshots = 1

    for kernel in (
        host_ops_qft_from_zero,
        host_ops_qft_from_plus,
        host_ops_all_site_hadamard,
    ):
        creg = init_creg(nmeasure * nshots, CR_INIT_VAL)
        assert sm_qrun(kernel, qreg, NQUBITS, creg, nmeasure, nshots) == CqStatus.SUCCESS
        assert _all_bits(creg)

    creg = init_creg(nmeasure * nshots, CR_INIT_VAL)
    assert (
        sm_qrun(host_ops_measure_first_site, qreg, NQUBITS, creg, 1, nshots)
        == CqStatus.SUCCESS
    )
    assert creg[0] in (0, 1)
    assert creg[1:] == [CR_INIT_VAL] * (nmeasure - 1)

    creg = init_creg(nmeasure * nshots, CR_INIT_VAL)
    assert (
        sm_qrun(host_ops_no_measure, qreg, NQUBITS, creg, nmeasure, nshots)
        == CqStatus.SUCCESS
    )
    assert creg == [CR_INIT_VAL] * nmeasure


def test_plus_state_qft_measures_zero(qreg):
    creg = init_creg(NQUBITS * 3, CR_INIT_VAL)
    assert sm_qrun(host_ops_qft_from_plus, qreg, NQUBITS, creg, NQUBITS, 3) == CqStatus.SUCCESS
    assert creg == [0] * (NQUBITS * 3)


def test_basis_state_written_per_shot(qreg):
    creg = init_creg(NQUBITS * 3, CR_INIT_VAL)
    assert sm_qrun(host_ops_basis_five, qreg, NQUBITS, creg, NQUBITS, 3) == CqStatus.SUCCESS
    assert creg == [0, 0, 1, 0, 1] * 3


def test_nmeasure(qreg):
    nshots = 2

    assert sm_qrun(host_ops_no_measure, qreg, NQUBITS, None, 0, nshots) == CqStatus.SUCCESS

    creg = init_creg(nshots, CR_INIT_VAL)
    assert (
        sm_qrun(host_ops_measure_first_site, qreg, NQUBITS, creg, 1, nshots)
        == CqStatus.SUCCESS
    )
    assert _all_bits(creg)

    creg = init_creg(NQUBITS * nshots, CR_INIT_VAL)
    assert (
        sm_qrun(host_ops_all_site_hadamard, qreg, NQUBITS, creg, NQUBITS, nshots)
        == CqStatus.SUCCESS
    )
    assert _all_bits(creg)


def test_nshots(qreg):
    assert sm_qrun(host_ops_qft_from_zero, None, NQUBITS, None, NQUBITS, 0) == CqStatus.SUCCESS

    nshots = 4
    creg = init_creg(nshots * NQUBITS, CR_INIT_VAL)
    assert (
        sm_qrun(host_ops_qft_from_zero, qreg, NQUBITS, creg, NQUBITS, nshots)
        == CqStatus.SUCCESS
    )
    assert len(creg) == nshots * NQUBITS
    assert _all_bits(creg)


def test_missing_or_unregistered_kernel():
    with pytest.raises(CQError):
        sm_qrun(None, Qureg([]), NQUBITS, None, 0, 2)
    qreg = alloc_qureg(NQUBITS)
    try:
        with pytest.raises(CQError):
            sm_qrun(None, qreg, NQUBITS, None, 0, 2)
        with pytest.raises(CQError):
            sm_qrun(host_ops_unregistered, qreg, NQUBITS, None, 0, 2)
    finally:
        free_qureg(qreg)


def test_missing_qureg_leaves_creg_untouched():
    creg = init_creg(NQUBITS * 2, CR_INIT_VAL)
    with pytest.raises(CQError):
        sm_qrun(host_ops_all_site_hadamard, None, NQUBITS, creg, NQUBITS, 2)
    assert creg == [CR_INIT_VAL] * (NQUBITS * 2)


def test_freed_qureg_rejected():
    qreg = alloc_qureg(NQUBITS)
    free_qureg(qreg)
    creg = init_creg(NQUBITS * 2, CR_INIT_VAL)
    with pytest.raises(CQError):
        sm_qrun(host_ops_all_site_hadamard, qreg, NQUBITS, creg, NQUBITS, 2)
    assert creg == [CR_INIT_VAL] * (NQUBITS * 2)


def test_missing_creg_rejected(qreg):
    with pytest.raises(CQError):
        sm_qrun(host_ops_all_site_hadamard, qreg, NQUBITS, None, NQUBITS, 2)


def test_registered_name_is_function_name():
    assert find_qkern_name(host_ops_basis_five) == "host_ops_basis_five"