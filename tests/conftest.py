"""Shared fixtures for the plasmodium test suite."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.random import Generator

from plasmodium.grid.grid import Grid
from plasmodium.simulation.config import ModelConstants, SimulationConfig


@pytest.fixture
def rng() -> Generator:
    """A deterministic random generator for reproducible tests."""
    return np.random.default_rng(seed=12345)


@pytest.fixture
def constants() -> ModelConstants:
    """Default model constants."""
    return ModelConstants()


@pytest.fixture
def small_grid(constants: ModelConstants) -> Grid:
    """An empty 5x5 grid for fast tests."""
    return Grid(width=5, height=5, constants=constants)


@pytest.fixture
def default_config() -> SimulationConfig:
    """Default simulation config (no YAML file needed)."""
    return SimulationConfig()


@pytest.fixture
def small_config() -> SimulationConfig:
    """A 16x16 run that stalls quickly."""
    return SimulationConfig(
        seed=777,
        grid_width=16,
        grid_height=16,
        food_prob=0.05,
        obstacle_prob=0.02,
        stale_limit=5,
    )
