"""Cell — a single immutable tile of the simulation grid.

A cell is never mutated in place.  A state change is expressed by
building a new ``Cell`` at the same position and handing it to
``Grid.replace_cell``, which keeps the chemical field and the
organism bookkeeping consistent.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class OccupancyState(Enum):
    """What occupies a grid tile.

    ``CONNECTED_FOOD`` is terminal: it is reached only when an organism
    cell appears next to ``FOOD`` and is never converted back.
    """

    UNOCCUPIED = 0
    ORGANISM = 1
    FOOD = 2
    CONNECTED_FOOD = 3
    OBSTACLE = 4


# States the Metropolis step may never copy from or into.
FIXED_STATES: frozenset[OccupancyState] = frozenset(
    {
        OccupancyState.FOOD,
        OccupancyState.CONNECTED_FOOD,
        OccupancyState.OBSTACLE,
    },
)


@dataclass(frozen=True)
class Position:
    """Integer grid coordinate.

    Attributes:
        x: Column index.
        y: Row index.
    """

    x: int
    y: int


@dataclass(frozen=True)
class Cell:
    """A single tile in the grid.

    Attributes:
        position: Where this cell lives.
        state: What occupies the tile.
        energy: Energy recorded when the cell was last accepted by the
            Metropolis step.
    """

    position: Position
    state: OccupancyState = OccupancyState.UNOCCUPIED
    energy: float = 0.0
