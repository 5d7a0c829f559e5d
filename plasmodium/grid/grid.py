"""Grid — the mutable state container of a simulation run.

The Grid owns the cell matrix, the chemical field, the record of
active positions and the organism counters.  All state changes go
through ``replace_cell`` (or its ``set_cell`` shorthand), which keeps
these structures consistent with each other:

- the chemical field gains or loses the falloff contribution of the
  old and new occupant,
- ``volume`` always equals the number of organism cells,
- food touched by a new organism cell becomes connected food and
  ``connected_food_sources`` grows,
- the new organism cell and its neighbours become active.

``set_cell_no_chem`` is the single escape hatch that writes a cell
without any of the above.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from plasmodium.errors import PositionMismatchError
from plasmodium.field.chemical import ChemicalField
from plasmodium.field.falloff import deposit_pyramid
from plasmodium.grid import topology
from plasmodium.grid.cell import Cell, OccupancyState, Position
from plasmodium.simulation.config import ModelConstants

if TYPE_CHECKING:
    from numpy.random import Generator

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Grid:
    """A 2D grid holding one slime-mold simulation.

    Attributes:
        width: Number of columns in the grid.
        height: Number of rows in the grid.
        constants: Field contributions used when cells change.  Any
            EnergyModel or MetropolisEngine stepping this grid must be
            given the same ModelConstants, or energies are scored
            against a field built from different values.
        cells: 2D list of Cell objects indexed as ``cells[y][x]``.
        chemical: The chemical field, same shape as the grid.
    """

    width: int
    height: int
    constants: ModelConstants = field(default_factory=ModelConstants)
    cells: list[list[Cell]] = field(init=False, repr=False)
    chemical: ChemicalField = field(init=False, repr=False)
    _active: NDArray[np.bool_] = field(init=False, repr=False)
    _active_listing: list[Position] | None = field(init=False, repr=False)
    _volume: int = field(init=False, default=0)
    _connected_food_sources: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        """Allocate storage and start from an empty grid."""
        if self.width <= 0 or self.height <= 0:
            msg = f"grid dimensions must be positive, got {self.width}x{self.height}"
            raise ValueError(msg)
        self.chemical = ChemicalField(width=self.width, height=self.height)
        self._active = np.zeros((self.height, self.width), dtype=np.bool_)
        self.make_empty()

    def make_empty(self) -> None:
        """Reset counters, field and active record; fill with UNOCCUPIED."""
        self._volume = 0
        self._connected_food_sources = 0
        self.chemical.clear()
        self.clear_active_record()
        self.cells = [
            [Cell(Position(x, y)) for x in range(self.width)]
            for y in range(self.height)
        ]

    def make_random(
        self,
        food_prob: float,
        obstacle_prob: float,
        rng: Generator,
    ) -> None:
        """Empty the grid, then scatter food and obstacles.

        One uniform draw decides each tile: at or below ``food_prob`` it
        becomes food, within the next ``obstacle_prob`` of probability
        mass an obstacle, otherwise it stays unoccupied.  Tiles are
        committed through ``replace_cell`` so the chemical field picks
        up every placement.

        Args:
            food_prob: Chance that a tile starts as food.
            obstacle_prob: Chance that a tile starts as an obstacle.
            rng: Seeded random generator.
        """
        self.make_empty()
        for y in range(self.height):
            for x in range(self.width):
                state = _draw_state(float(rng.random()), food_prob, obstacle_prob)
                old = self.cells[y][x]
                self.replace_cell(old, Cell(old.position, state))
        logger.debug(
            "Randomised %dx%d grid (food_prob=%s, obstacle_prob=%s)",
            self.width,
            self.height,
            food_prob,
            obstacle_prob,
        )

    @property
    def x_size(self) -> int:
        """Number of columns (alias of ``width``)."""
        return self.width

    @property
    def y_size(self) -> int:
        """Number of rows (alias of ``height``)."""
        return self.height

    @property
    def volume(self) -> int:
        """Number of cells currently in the ORGANISM state."""
        return self._volume

    @property
    def connected_food_sources(self) -> int:
        """Food cells ever reached by the organism.  Never decreases."""
        return self._connected_food_sources

    @property
    def chemical_field(self) -> NDArray[np.float64]:
        """Read-only view of the chemical field, indexed ``[y, x]``."""
        view = self.chemical.values.view()
        view.flags.writeable = False
        return view

    def get_cell(self, pos: Position) -> Cell:
        """Return the cell at ``pos``.

        Raises:
            IndexError: If ``pos`` is out of bounds.
        """
        return self.get_cell_by_coord(pos.x, pos.y)

    def get_cell_by_coord(self, x: int, y: int) -> Cell:
        """Return the cell at grid coordinates ``(x, y)``.

        Args:
            x: Column index.
            y: Row index.

        Raises:
            IndexError: If coordinates are out of bounds.
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            msg = f"({x}, {y}) out of bounds for {self.width}x{self.height}"
            raise IndexError(msg)
        return self.cells[y][x]

    def get_volume_if(self, pos: Position, state: OccupancyState) -> int:
        """Return the volume the grid would have after a hypothetical change.

        Args:
            pos: Position that would be replaced.
            state: State the replacement would have.

        Returns:
            The projected organism volume.  The grid is not modified.
        """
        old_state = self.get_cell(pos).state
        if state is old_state:
            return self._volume
        if state is OccupancyState.ORGANISM:
            return self._volume + 1
        if old_state is OccupancyState.ORGANISM:
            return self._volume - 1
        return self._volume

    def get_chemical_field_val(self, pos: Position) -> float:
        """Return the chemical field value at ``pos``."""
        return self.chemical.read(pos.x, pos.y)

    def get_chemical_field_val_coord(self, x: int, y: int) -> float:
        """Return the chemical field value at ``(x, y)``."""
        return self.chemical.read(x, y)

    def set_cell_no_chem(self, cell: Cell) -> None:
        """Write ``cell`` into place, skipping field and bookkeeping updates."""
        self.cells[cell.position.y][cell.position.x] = cell

    def set_cell(self, cell: Cell) -> None:
        """Replace whatever occupies ``cell.position`` with ``cell``."""
        self.replace_cell(self.get_cell(cell.position), cell)

    def replace_cell(self, old: Cell, new: Cell) -> None:
        """Swap ``old`` for ``new`` and propagate the change.

        Food next to a new organism cell is converted to connected food
        by a nested call; that call cannot recurse further because
        connected food triggers nothing.

        Args:
            old: The cell being replaced.
            new: The replacement, at the same position.

        Raises:
            PositionMismatchError: If the two cells are at different
                positions.
        """
        if old.position != new.position:
            msg = (
                f"cannot replace cell at {old.position} "
                f"with a cell at {new.position}"
            )
            raise PositionMismatchError(msg)

        pos = new.position
        self.set_cell_no_chem(new)
        self._update_field_for(old.state, new.state, pos)

        if new.state is OccupancyState.ORGANISM:
            if old.state is not OccupancyState.ORGANISM:
                self._volume += 1
            for neighbour in topology.neighbor_cells(self, new):
                if neighbour is None:
                    continue
                if neighbour.state is OccupancyState.FOOD:
                    self._connected_food_sources += 1
                    logger.debug(
                        "Organism at %s reached food at %s",
                        pos,
                        neighbour.position,
                    )
                    self.replace_cell(
                        neighbour,
                        Cell(neighbour.position, OccupancyState.CONNECTED_FOOD),
                    )
                self.set_active(neighbour.position)
            self.set_active(pos)
        elif old.state is OccupancyState.ORGANISM:
            self._volume -= 1

    def update_chemical_field(self, pos: Position, value: float, decay: float) -> None:
        """Add a pyramid-shaped contribution centred on ``pos``.

        Args:
            pos: Centre of the contribution.
            value: Peak amount; negative values repel.
            decay: Drop per ring outward from the centre.
        """
        deposit_pyramid(self.chemical, pos.x, pos.y, value, decay)

    def _update_field_for(
        self,
        old_state: OccupancyState,
        new_state: OccupancyState,
        pos: Position,
    ) -> None:
        """Withdraw the old organism's cohesion and add the new occupant's."""
        c = self.constants
        if old_state is OccupancyState.ORGANISM:
            self.update_chemical_field(pos, -c.cohesion_attr, c.cohesion_attr_decay)

        if new_state is OccupancyState.ORGANISM:
            self.update_chemical_field(pos, c.cohesion_attr, c.cohesion_attr_decay)
        elif new_state is OccupancyState.FOOD:
            self.update_chemical_field(pos, c.food_attr, c.food_attr_decay)
        elif new_state is OccupancyState.OBSTACLE:
            self.update_chemical_field(pos, c.obstacle_rep, c.obstacle_attr_decay)

    def set_active(self, pos: Position) -> None:
        """Flag ``pos`` as a candidate for future Metropolis updates."""
        if self._active[pos.y, pos.x]:
            return
        self._active[pos.y, pos.x] = True
        if self._active_listing is not None:
            self._active_listing.append(pos)

    def is_active(self, pos: Position) -> bool:
        """Return True if ``pos`` has been flagged active since the last reset."""
        return bool(self._active[pos.y, pos.x])

    def clear_active_record(self) -> None:
        """Forget every active position."""
        self._active.fill(False)
        self._active_listing = None

    def get_active_positions(self) -> list[Position]:
        """Return the active positions, building the cached list if needed.

        The first call after a reset scans the flag array in row-major
        order.  Later calls return the same list object, which grows in
        place as new positions are flagged.
        """
        if self._active_listing is None:
            ys, xs = np.nonzero(self._active)
            self._active_listing = [
                Position(int(x), int(y)) for y, x in zip(ys, xs, strict=True)
            ]
        return self._active_listing


def _draw_state(
    draw: float,
    food_prob: float,
    obstacle_prob: float,
) -> OccupancyState:
    """Map one uniform draw onto a starting tile state."""
    if draw <= food_prob:
        return OccupancyState.FOOD
    draw -= food_prob
    if draw <= obstacle_prob:
        return OccupancyState.OBSTACLE
    return OccupancyState.UNOCCUPIED
