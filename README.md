# cqsimbe

A small simulated quantum backend. The host sends control operations to a
device thread. The device thread keeps a registry of up to 64 state-vector
registers, built on numpy, and runs registered quantum kernels on them.

## Install

```
pip install .
pip install ".[test]"   # with the test dependencies
```

## Use

```python
from cqsimbe.env import cq_init, cq_finalise
from cqsimbe.host_ops import alloc_qureg, free_qureg, init_creg, sm_qrun
from cqsimbe.kernels import qkernel, register_qkern
from cqsimbe.gates import hadamard
from cqsimbe.device_ops import set_qureg, measure_qureg


@qkernel
def all_site_hadamard(nqubits, qreg, creg):
    set_qureg(qreg, 0, nqubits)
    for qubit in qreg:
        hadamard(qubit)
    measure_qureg(qreg, nqubits, creg)


cq_init(0)
register_qkern(all_site_hadamard)

qreg = alloc_qureg(4)
creg = init_creg(4 * 3, -1)
sm_qrun(all_site_hadamard, qreg, 4, creg, 4, 3)   # 3 shots, 4 bits per shot
print(creg)

free_qureg(qreg)
cq_finalise(0)
```

### Environment (`cqsimbe.env`)

- `cq_init(verbosity)` starts the device thread. A second call returns
  `CqStatus.WARNING`. Calling it after `cq_finalise` raises `CQError`, so a
  process can only run one session.
- `cq_finalise(verbosity)` stops the device thread. A second call returns
  `CqStatus.WARNING`.

### Kernels (`cqsimbe.kernels`)

A kernel is a function `(nqubits, qreg, creg)` decorated with `@qkernel`,
which records its name. `register_qkern` adds it to the registry and returns
`CqStatus.SUCCESS`, or `CqStatus.WARNING` if it was already registered. It
raises `CQError` for `None`, for a function not marked with `@qkernel`, for a
name of 1023 characters or more, or when 256 kernels are already registered.
`find_qkern_name` and `find_qkern_pointer` look kernels up in either
direction and raise `CQError` when there is no match.

### Registers and runs (`cqsimbe.host_ops`)

- `alloc_qureg(n)` returns a `Qureg`, a sequence of `Qubit` handles
  (`registry_index`, `offset`, `n`). It raises `CQError` when all 64 device
  slots are in use.
- `free_qureg(qureg)` releases it and returns `CqStatus.SUCCESS`. It returns
  `CqStatus.WARNING` for `None` or a register already freed. Indexing or
  iterating a freed `Qureg` raises `CQError`.
- `init_creg(length, init_val)` returns a list of `length` copies of
  `init_val`.
- `sm_qrun(kernel, qreg, nqubits, creg, nmeasure, nshots)` runs a registered
  kernel `nshots` times and waits for each shot. Shot `k` writes into
  `creg[k*nmeasure:(k+1)*nmeasure]`. With `nshots == 0` it returns at once.
  It raises `CQError` for a missing or freed register, for a missing `creg`
  when `nmeasure` is non-zero, and for an unregistered kernel.

### Gates and measurement

- `cqsimbe.gates`: `hadamard(qubit)`, `cphase(ctrl, target, theta)` and
  `swap(a, b)`. Passing `None`, or the same qubit twice, raises `CQError`.
- `cqsimbe.device_ops`: `set_qureg(qreg, state_index, n)` prepares a basis
  state. `measure_qureg(qreg, nqubits, creg)` measures the first `nqubits`
  qubits, collapses the state, and returns the bits with the highest qubit
  first. It also writes them into `creg` when one is given.
- `cqsimbe.device_utils.qindex_to_cstate(state, bit_width)` expands an index
  into bits, most significant first. It raises `CQError` if the index does
  not fit.

## Example command

`cqsimbe.qft` holds quantum Fourier transform kernels
(`zero_init_full_qft`, `equal_superposition_full_qft`) and a command that
runs both and prints each shot's outcome:

```
cqsimbe-qft                      # 10 qubits, 10 shots
cqsimbe-qft --qubits 4 --shots 3
```

## What it does not do

- Only the synchronous, multi-shot runner `sm_qrun` exists. There is no
  asynchronous execution and no choice of backend.
- Parameterised kernels are not supported. `register_pqkern` always raises
  `CQError`.
- The gate set is limited to `hadamard`, `cphase` and `swap`.
- Measurement always covers the leading qubits of a register. You cannot
  measure an arbitrary subset.

## Tests

```
pytest
```