"""Tests for plasmodium.simulation.sampling."""

from numpy.random import Generator

from plasmodium.simulation.sampling import rand_int


def test_degenerate_range_returns_low(rng: Generator) -> None:
    assert rand_int(rng, 5, 5) == 5


def test_values_within_range(rng: Generator) -> None:
    draws = {rand_int(rng, 0, 8) for _ in range(500)}
    assert draws <= set(range(8))
    assert len(draws) == 8
