"""MetropolisEngine — one stochastic update pass over the active cells.

For every active cell the engine proposes copying the state of one
randomly chosen neighbour, scores the proposal with the energy model
and accepts it with the Metropolis probability.  Only organism and
unoccupied cells take part; food, connected food and obstacles are
never copied from or into.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

import numpy as np
from numpy.random import Generator

from plasmodium.energy.hamiltonian import EnergyModel
from plasmodium.grid import topology
from plasmodium.grid.cell import FIXED_STATES, Cell, OccupancyState
from plasmodium.grid.grid import Grid
from plasmodium.simulation.config import ModelConstants
from plasmodium.simulation.sampling import rand_int

logger = logging.getLogger(__name__)


@dataclass
class MetropolisEngine:
    """Runs Metropolis steps over a Grid.

    Attributes:
        constants: Acceptance-rule tunables.  Must be the ModelConstants
            of the grid being stepped; ``SimulationEngine`` hands one
            instance to both.
        rng: Seeded random generator for neighbour picks and acceptance.
        energy_model: Scores candidate changes.  Built from
            ``constants`` when not supplied.
    """

    constants: ModelConstants = field(default_factory=ModelConstants)
    rng: Generator = field(default_factory=np.random.default_rng)
    energy_model: EnergyModel | None = None

    def __post_init__(self) -> None:
        """Share the constants with a default energy model."""
        if self.energy_model is None:
            self.energy_model = EnergyModel(constants=self.constants)

    def accept_probability(self, orig_energy: float, candidate_energy: float) -> float:
        """Return the acceptance weight of moving between two energies.

        Drops larger than ``yield_offset`` are always accepted.  Other
        changes get ``exp(-(delta + yield_offset) / fluctuation_amplitude)``.
        The result is not clamped; it is only ever compared against a
        uniform draw, so anything >= 1 means certain acceptance.

        Args:
            orig_energy: Energy recorded on the current cell.
            candidate_energy: Energy of the proposed replacement.

        Returns:
            A non-negative acceptance weight.
        """
        delta = candidate_energy - orig_energy
        offset = self.constants.yield_offset
        if delta < -offset:
            return 1.0
        return math.exp(-(delta + offset) / self.constants.fluctuation_amplitude)

    def should_accept(self, probability: float) -> bool:
        """Draw ``u`` in ``[0, 1)`` and accept if ``u <= probability``."""
        return float(self.rng.random()) <= probability

    def step_cell(self, grid: Grid, target: Cell) -> bool:
        """Propose and maybe apply one neighbour-copy at ``target``.

        Args:
            grid: Grid to update.
            target: The active cell being updated.

        Returns:
            True if the grid was changed.
        """
        neighbours = topology.neighbor_cells(grid, target)
        neighbour = neighbours[rand_int(self.rng, 0, len(neighbours))]
        if neighbour is None:
            return False

        new_state = neighbour.state
        if (
            new_state is target.state
            or new_state in FIXED_STATES
            or target.state in FIXED_STATES
        ):
            return False

        candidate = Cell(target.position, new_state, neighbour.energy)
        candidate_energy = self.energy_model.energy_if_change(
            grid,
            target.position,
            candidate,
        )

        probability = self.accept_probability(target.energy, candidate_energy)
        if not self.should_accept(probability):
            return False

        if (
            self.constants.preserve_connectivity
            and target.state is OccupancyState.ORGANISM
            and topology.will_break_if_lost(grid, target)
        ):
            return False

        grid.replace_cell(target, Cell(target.position, new_state, candidate_energy))
        return True

    def step(self, grid: Grid) -> bool:
        """Run ``step_cell`` once for every currently active cell.

        The active cells are snapshotted first and visited in the
        grid's active-list order; cells activated during the pass wait
        for the next step.

        Args:
            grid: Grid to update.

        Returns:
            True if any cell changed.
        """
        changes = 0
        for cell in topology.active_cells(grid):
            if self.step_cell(grid, cell):
                changes += 1
        logger.debug("Metropolis step changed %d cells", changes)
        return changes > 0
