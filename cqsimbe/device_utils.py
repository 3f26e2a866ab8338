"""Helpers used by the simulated device."""

from __future__ import annotations

from cqsimbe.datatypes import CQError


def qindex_to_cstate(state: int, bit_width: int) -> list[int]:
    """Expand a basis-state index into classical bits, most significant first.

    Raises CQError if the index does not fit in ``bit_width`` bits.
    """
    if bit_width < 0:
        raise CQError(f"bit width must be non-negative, got {bit_width}")
    if state < 0 or state >> bit_width:
        raise CQError(f"state {state} does not fit in {bit_width} bits")
    return [(state >> shift) & 1 for shift in reversed(range(bit_width))]