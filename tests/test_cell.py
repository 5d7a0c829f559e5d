"""Tests for plasmodium.grid.cell."""

from dataclasses import FrozenInstanceError

import pytest

from plasmodium.grid.cell import FIXED_STATES, Cell, OccupancyState, Position


class TestPosition:
    """Tests for the Position value type."""

    def test_equality_is_structural(self) -> None:
        assert Position(3, 4) == Position(3, 4)
        assert Position(3, 4) != Position(4, 3)

    def test_hashable(self) -> None:
        assert len({Position(1, 1), Position(1, 1), Position(2, 1)}) == 2

    def test_immutable(self) -> None:
        pos = Position(0, 0)
        with pytest.raises(FrozenInstanceError):
            pos.x = 5  # type: ignore[misc]


class TestCell:
    """Tests for the Cell value type."""

    def test_default_values(self) -> None:
        cell = Cell(Position(0, 0))
        assert cell.state is OccupancyState.UNOCCUPIED
        assert cell.energy == 0.0

    def test_equality_covers_all_fields(self) -> None:
        pos = Position(1, 2)
        base = Cell(pos, OccupancyState.ORGANISM, 1.0)
        assert base == Cell(Position(1, 2), OccupancyState.ORGANISM, 1.0)
        assert base != Cell(pos, OccupancyState.ORGANISM, 2.0)
        assert base != Cell(pos, OccupancyState.UNOCCUPIED, 1.0)
        assert base != Cell(Position(2, 1), OccupancyState.ORGANISM, 1.0)

    def test_immutable(self) -> None:
        cell = Cell(Position(0, 0))
        with pytest.raises(FrozenInstanceError):
            cell.state = OccupancyState.ORGANISM  # type: ignore[misc]

    def test_fixed_states(self) -> None:
        assert OccupancyState.ORGANISM not in FIXED_STATES
        assert OccupancyState.UNOCCUPIED not in FIXED_STATES
        assert FIXED_STATES == {
            OccupancyState.FOOD,
            OccupancyState.CONNECTED_FOOD,
            OccupancyState.OBSTACLE,
        }
