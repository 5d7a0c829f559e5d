"""Random sampling helpers on top of a NumPy ``Generator``."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from numpy.random import Generator


def rand_int(rng: Generator, low: int, high: int) -> int:
    """Return an integer in ``[low, high)``.

    An empty range yields ``low`` instead of raising, so callers can
    draw from a degenerate range without a special case.

    Args:
        rng: Seeded random generator.
        low: Inclusive lower bound.
        high: Exclusive upper bound.
    """
    if high <= low:
        return low
    return int(rng.integers(low, high))
