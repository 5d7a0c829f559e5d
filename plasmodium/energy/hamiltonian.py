"""Hamiltonian — energy of a candidate organism/vacancy change.

The chemical field already folds in the influence of neighbouring
organism, food and obstacle cells, so the "interaction" terms here
are just field reads.  On top of that the model adds a volume term
that pulls the organism toward ``ideal_volume`` cells per connected
food source.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from plasmodium.errors import InvalidStateTransitionError
from plasmodium.grid.cell import FIXED_STATES, Cell, OccupancyState, Position
from plasmodium.simulation.config import ModelConstants

if TYPE_CHECKING:
    from plasmodium.grid.grid import Grid

_VACANCY_BIAS = 0.1


@dataclass
class EnergyModel:
    """Scores organism <-> unoccupied transitions on a Grid.

    Attributes:
        constants: Volume target and weight.  Must be the ModelConstants
            of the grids being scored.
    """

    constants: ModelConstants = field(default_factory=ModelConstants)

    def inter_cell_energy(self, grid: Grid, cell: Cell) -> float:
        """Return the field value at the cell's position."""
        return grid.get_chemical_field_val(cell.position)

    def intra_cell_energy(self, grid: Grid, cell: Cell) -> float:
        """Return the self term: half of the inter-cell energy."""
        return self.inter_cell_energy(grid, cell) / 2

    def adjust_for_volume(
        self,
        pos: Position,
        state: OccupancyState,
        raw_energy: float,
        grid: Grid,
    ) -> float:
        """Add the volume-constraint term to a raw energy.

        Args:
            pos: Position that would change.
            state: State it would change to.
            raw_energy: Field-derived energy of the candidate.
            grid: Grid supplying volume and connected food counts.

        Returns:
            The adjusted energy.
        """
        volume = grid.get_volume_if(pos, state)
        target = self.constants.ideal_volume * grid.connected_food_sources
        ideal_delta = volume - target
        adjusted = raw_energy + self.constants.volume_weight * ideal_delta
        if state is OccupancyState.UNOCCUPIED:
            adjusted -= _VACANCY_BIAS
        return adjusted

    def energy_if_change(self, grid: Grid, pos: Position, candidate: Cell) -> float:
        """Return the energy of putting ``candidate``'s state at ``pos``.

        Removing an organism cell returns the negated adjusted energy,
        adding one returns it as is, and a change that keeps the
        occupancy class returns 0.

        Args:
            grid: Grid the change would apply to.
            pos: Position that would change.
            candidate: Cell carrying the proposed state.

        Returns:
            Signed energy of the change.

        Raises:
            InvalidStateTransitionError: If the current or proposed
                state is food, connected food or an obstacle.
        """
        current_state = grid.get_cell(pos).state
        new_state = candidate.state
        if current_state in FIXED_STATES or new_state in FIXED_STATES:
            msg = (
                f"cannot score {current_state.name} -> {new_state.name} at {pos}; "
                "only organism/unoccupied changes have an energy"
            )
            raise InvalidStateTransitionError(msg)

        raw = self.inter_cell_energy(grid, candidate) + self.intra_cell_energy(
            grid,
            candidate,
        )
        adjusted = self.adjust_for_volume(pos, new_state, raw, grid)

        if (
            current_state is OccupancyState.ORGANISM
            and new_state is OccupancyState.UNOCCUPIED
        ):
            return -adjusted
        if (
            current_state is OccupancyState.UNOCCUPIED
            and new_state is OccupancyState.ORGANISM
        ):
            return adjusted
        return 0.0

    def energy(self, grid: Grid, candidate: Cell) -> float:
        """Return ``energy_if_change`` at the candidate's own position."""
        return self.energy_if_change(grid, candidate.position, candidate)
