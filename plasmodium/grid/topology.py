"""Topology — neighbourhood and lookup helpers over a Grid.

These are plain functions that only use the Grid's read surface.  They
are kept apart from ``grid.py`` so that the Metropolis engine and the
grid's own mutation code share one definition of "neighbour".
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from plasmodium.grid.cell import Cell, OccupancyState, Position

if TYPE_CHECKING:
    from plasmodium.grid.grid import Grid

NEIGHBOR_SLOTS = 8

# Row-major scan of the 3x3 block, centre excluded.
_OFFSETS: tuple[tuple[int, int], ...] = tuple(
    (dx, dy) for dy in (-1, 0, 1) for dx in (-1, 0, 1) if (dx, dy) != (0, 0)
)

_ORTHOGONAL: tuple[tuple[int, int], ...] = ((0, -1), (-1, 0), (1, 0), (0, 1))


def is_in_range(grid: Grid, pos: Position) -> bool:
    """Return True if ``pos`` lies inside the grid."""
    return 0 <= pos.x < grid.width and 0 <= pos.y < grid.height


def neighbor_positions(grid: Grid, center: Position) -> list[Position | None]:
    """Return the 8-neighbourhood of ``center`` as a fixed-size list.

    In-range neighbours come first, in row-major order (top row left
    to right, then the middle row, then the bottom row).  Slots left
    over at edges and corners are ``None``, so the result always has
    ``NEIGHBOR_SLOTS`` entries and a random slot index can be drawn
    without looking at the grid boundary.

    Args:
        grid: Grid supplying the bounds.
        center: Cell whose neighbours are wanted.

    Returns:
        Eight entries, each a Position or None.
    """
    result: list[Position | None] = []
    for dx, dy in _OFFSETS:
        pos = Position(center.x + dx, center.y + dy)
        if is_in_range(grid, pos):
            result.append(pos)
    result.extend([None] * (NEIGHBOR_SLOTS - len(result)))
    return result


def neighbor_cells(grid: Grid, cell: Cell) -> list[Cell | None]:
    """Return the cells at ``neighbor_positions`` of ``cell``."""
    return [
        grid.get_cell(pos) if pos is not None else None
        for pos in neighbor_positions(grid, cell.position)
    ]


def cell_state_at(grid: Grid, x: int, y: int) -> OccupancyState:
    """Return the state at ``(x, y)``, or UNOCCUPIED if out of range.

    Unlike ``Grid.get_cell_by_coord`` this never raises.
    """
    if not is_in_range(grid, Position(x, y)):
        return OccupancyState.UNOCCUPIED
    return grid.get_cell_by_coord(x, y).state


def is_organism_at(grid: Grid, x: int, y: int) -> bool:
    """Return True if an organism cell sits at ``(x, y)``."""
    return cell_state_at(grid, x, y) is OccupancyState.ORGANISM


def will_break_if_lost(grid: Grid, cell: Cell) -> bool:
    """Guess whether removing ``cell`` would split the organism.

    A cell with exactly two orthogonal organism neighbours is treated
    as a bridge.  This is a local heuristic and does not detect true
    articulation points.

    Args:
        grid: Grid to inspect.
        cell: Candidate for removal.

    Returns:
        True if the cell looks like a bridge between two organism cells.
    """
    if cell.state is OccupancyState.UNOCCUPIED:
        return False

    x, y = cell.position.x, cell.position.y
    linked = sum(1 for dx, dy in _ORTHOGONAL if is_organism_at(grid, x + dx, y + dy))
    return linked == 2


def active_cells(grid: Grid) -> list[Cell]:
    """Return the current cell at every active position.

    The list is a snapshot: mutating the grid while iterating over it
    does not change its length.
    """
    return [grid.get_cell(pos) for pos in grid.get_active_positions()]
