"""SimulationEngine — owns one run and advances it step by step.

Builds the grid from the config, seeds the starting organism next to a
food source in the middle of the grid, and drives the Metropolis engine.
A run is considered stalled once ``stale_limit`` steps have gone by
without any cell changing; after that ``step`` does nothing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np
from numpy.random import Generator

from plasmodium.grid import topology
from plasmodium.grid.cell import Cell, OccupancyState, Position
from plasmodium.grid.grid import Grid
from plasmodium.simulation.config import SimulationConfig
from plasmodium.simulation.metropolis import MetropolisEngine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunStats:
    """Summary of a run at one point in time."""

    tick: int
    volume: int
    connected_food_sources: int
    active_cells: int
    stale_remaining: int


@dataclass
class SimulationEngine:
    """Drives the simulation forward step by step.

    Attributes:
        config: Loaded simulation configuration.
        grid: The simulation grid.
        metropolis: Stepping engine sharing ``rng``.
        rng: Master seeded random generator.
        tick: Steps taken since the last reset.
        stale_remaining: Unchanged steps left before the run stalls.
    """

    config: SimulationConfig
    grid: Grid = field(init=False)
    metropolis: MetropolisEngine = field(init=False)
    rng: Generator = field(init=False)
    tick: int = 0
    stale_remaining: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        """Build the first run from config."""
        self.reset()

    def reset(self) -> None:
        """Start a fresh run with a generator re-seeded from config."""
        cfg = self.config
        self.rng = np.random.default_rng(cfg.seed)
        self.grid = Grid(
            width=cfg.grid_width,
            height=cfg.grid_height,
            constants=cfg.model,
        )
        self.grid.make_random(cfg.food_prob, cfg.obstacle_prob, self.rng)
        self._seed_organism()
        self.metropolis = MetropolisEngine(constants=cfg.model, rng=self.rng)
        self.tick = 0
        self.stale_remaining = cfg.stale_limit
        logger.info(
            "New %dx%d run (seed=%d, food=%d cells, obstacles=%d cells)",
            cfg.grid_width,
            cfg.grid_height,
            cfg.seed,
            self._count(OccupancyState.FOOD, OccupancyState.CONNECTED_FOOD),
            self._count(OccupancyState.OBSTACLE),
        )

    @property
    def is_stalled(self) -> bool:
        """True once the run has gone ``stale_limit`` steps without change."""
        return self.stale_remaining <= 0

    def step(self) -> bool:
        """Advance the simulation by one Metropolis step.

        Returns:
            True if any cell changed.  Always False once stalled.
        """
        if self.is_stalled:
            return False

        changed = self.metropolis.step(self.grid)
        self.tick += 1
        if not changed:
            self.stale_remaining -= 1
            if self.is_stalled:
                logger.info(
                    "Run stalled at tick %d (volume=%d, connected food=%d)",
                    self.tick,
                    self.grid.volume,
                    self.grid.connected_food_sources,
                )
        return changed

    def run(self, max_ticks: int) -> int:
        """Step until the run stalls or ``max_ticks`` steps have been taken.

        Args:
            max_ticks: Upper bound on steps to take.

        Returns:
            Number of steps actually taken.
        """
        taken = 0
        while taken < max_ticks and not self.is_stalled:
            self.step()
            taken += 1
        return taken

    def stats(self) -> RunStats:
        """Return the current run summary."""
        return RunStats(
            tick=self.tick,
            volume=self.grid.volume,
            connected_food_sources=self.grid.connected_food_sources,
            active_cells=len(self.grid.get_active_positions()),
            stale_remaining=self.stale_remaining,
        )

    def _seed_organism(self) -> None:
        """Place a food source at the centre and an organism cell to its left."""
        cx = self.grid.width // 2
        cy = self.grid.height // 2
        self.grid.set_cell(Cell(Position(cx, cy), OccupancyState.FOOD))
        start = Position(cx - 1, cy)
        if topology.is_in_range(self.grid, start):
            self.grid.set_cell(Cell(start, OccupancyState.ORGANISM))

    def _count(self, *states: OccupancyState) -> int:
        return sum(1 for row in self.grid.cells for cell in row if cell.state in states)
