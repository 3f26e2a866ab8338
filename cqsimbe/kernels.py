"""Registration of quantum kernels and lookup between kernels and their names."""

from __future__ import annotations

from typing import Any, Callable

from cqsimbe.datatypes import MAX_NUM_QKERN, MAX_QKERN_NAME_LENGTH, CqStatus, CQError

Kernel = Callable[..., Any]

_NAME_ATTR = "qkernel_name"


def qkernel(fn: Kernel) -> Kernel:
    """Mark ``fn`` as a quantum kernel that can be registered under its own name.

    A name too long to be stored is recorded as empty, and registering such a
    kernel fails.
    """
    name = fn.__name__
    fits = len(name) + 1 < MAX_QKERN_NAME_LENGTH
    setattr(fn, _NAME_ATTR, name if fits else "")
    return fn


def _describe(kernel: Kernel) -> str:
    return repr(getattr(kernel, "__name__", kernel))


class KernelRegistry:
    """Ordered table of kernels, each stored with the name it is run by."""

    def __init__(self, capacity: int = MAX_NUM_QKERN) -> None:
        self.capacity = capacity
        self._entries: list[tuple[str, Kernel]] = []

    def __len__(self) -> int:
        return len(self._entries)

    def register(self, kernel: Kernel | None) -> CqStatus:
        """Add ``kernel`` to the registry.

        Returns SUCCESS when added and WARNING when it was already present.
        Raises CQError for a missing kernel, a full registry, or a kernel
        without a usable name.
        """
        if kernel is None:
            raise CQError("cannot register a missing kernel")
        if len(self._entries) >= self.capacity:
            raise CQError(f"kernel registry is full ({self.capacity} kernels)")
        if any(fn is kernel for _, fn in self._entries):
            return CqStatus.WARNING
        name = getattr(kernel, _NAME_ATTR, "")
        if not name:
            raise CQError(f"{_describe(kernel)} is not a registrable quantum kernel")
        self._entries.append((name, kernel))
        return CqStatus.SUCCESS

    def find_pointer(self, fname: str) -> Kernel:
        """Return the first kernel registered under ``fname``."""
        for name, fn in self._entries:
            if name == fname:
                return fn
        raise CQError(f"no kernel registered under the name {fname!r}")

    def find_name(self, kernel: Kernel) -> str:
        """Return the name ``kernel`` was registered under."""
        for name, fn in self._entries:
            if fn is kernel:
                return name
        raise CQError(f"{_describe(kernel)} is not registered")


qk_reg = KernelRegistry()
pqk_reg = KernelRegistry()


def register_qkern(kernel: Kernel | None) -> CqStatus:
    """Register a quantum kernel in the global registry."""
    return qk_reg.register(kernel)


def register_pqkern(kernel: Kernel | None) -> CqStatus:
    """Parameterised kernels are not supported; registration always raises CQError."""
    if kernel is None:
        raise CQError("cannot register a missing parameterised kernel")
    raise CQError(
        f"{_describe(kernel)} cannot be registered: parameterised kernels are not supported"
    )


def find_qkern_pointer(fname: str) -> Kernel:
    """Return the registered kernel called ``fname``."""
    return qk_reg.find_pointer(fname)


def find_qkern_name(kernel: Kernel) -> str:
    """Return the name ``kernel`` is registered under."""
    return qk_reg.find_name(kernel)


def find_pqkern_pointer(fname: str) -> Kernel:
    """Return the registered parameterised kernel called ``fname``."""
    return pqk_reg.find_pointer(fname)


def find_pqkern_name(kernel: Kernel) -> str:
    """Return the name the parameterised ``kernel`` is registered under."""
    return pqk_reg.find_name(kernel)