"""Tests for plasmodium.energy.hamiltonian."""

import pytest

from plasmodium.energy.hamiltonian import EnergyModel
from plasmodium.errors import InvalidStateTransitionError
from plasmodium.grid.cell import Cell, OccupancyState, Position
from plasmodium.grid.grid import Grid
from plasmodium.simulation.config import ModelConstants

ORGANISM = OccupancyState.ORGANISM
UNOCCUPIED = OccupancyState.UNOCCUPIED

FIXED = [
    OccupancyState.FOOD,
    OccupancyState.CONNECTED_FOOD,
    OccupancyState.OBSTACLE,
]


@pytest.fixture
def model(constants: ModelConstants) -> EnergyModel:
    """Energy model with default constants."""
    return EnergyModel(constants=constants)


@pytest.fixture
def flanked_grid(small_grid: Grid) -> Grid:
    """5x5 grid with an obstacle at (1, 1) and food at (3, 1)."""
    small_grid.set_cell(Cell(Position(1, 1), OccupancyState.OBSTACLE))
    small_grid.set_cell(Cell(Position(3, 1), OccupancyState.FOOD))
    return small_grid


class TestFieldTerms:
    """Tests for the field-derived energy terms."""

    def test_inter_cell_energy(self, model: EnergyModel, flanked_grid: Grid) -> None:
        center = Cell(Position(2, 1), UNOCCUPIED)
        assert model.inter_cell_energy(flanked_grid, center) == -1

    def test_intra_cell_energy_is_half(
        self,
        model: EnergyModel,
        flanked_grid: Grid,
    ) -> None:
        center = Cell(Position(2, 1), UNOCCUPIED)
        assert model.intra_cell_energy(flanked_grid, center) == -0.5


class TestEnergyIfChange:
    """Tests for scoring organism/vacancy changes."""

    def test_grow_then_retract(self, model: EnergyModel, flanked_grid: Grid) -> None:
        pos = Position(2, 1)
        organism = Cell(pos, ORGANISM)
        energy = model.energy_if_change(flanked_grid, pos, organism)
        assert energy == pytest.approx(-1.4)

        flanked_grid.set_cell(organism)
        assert flanked_grid.connected_food_sources == 1

        vacancy = Cell(pos, UNOCCUPIED)
        assert model.energy_if_change(flanked_grid, pos, vacancy) == pytest.approx(4.6)

    def test_energy_uses_candidate_position(
        self,
        model: EnergyModel,
        flanked_grid: Grid,
    ) -> None:
        organism = Cell(Position(2, 1), ORGANISM)
        assert model.energy(flanked_grid, organism) == pytest.approx(-1.4)

    def test_same_occupancy_class_scores_zero(
        self,
        model: EnergyModel,
        small_grid: Grid,
    ) -> None:
        pos = Position(2, 2)
        assert model.energy_if_change(small_grid, pos, Cell(pos, UNOCCUPIED)) == 0.0
        small_grid.set_cell(Cell(pos, ORGANISM))
        assert model.energy_if_change(small_grid, pos, Cell(pos, ORGANISM)) == 0.0

    @pytest.mark.parametrize("state", FIXED)
    def test_fixed_candidate_rejected(
        self,
        model: EnergyModel,
        small_grid: Grid,
        state: OccupancyState,
    ) -> None:
        pos = Position(2, 2)
        with pytest.raises(InvalidStateTransitionError):
            model.energy_if_change(small_grid, pos, Cell(pos, state))

    @pytest.mark.parametrize("state", FIXED)
    @pytest.mark.parametrize("candidate", [ORGANISM, UNOCCUPIED])
    def test_fixed_current_rejected(
        self,
        model: EnergyModel,
        small_grid: Grid,
        state: OccupancyState,
        candidate: OccupancyState,
    ) -> None:
        pos = Position(2, 2)
        small_grid.set_cell_no_chem(Cell(pos, state))
        with pytest.raises(InvalidStateTransitionError):
            model.energy(small_grid, Cell(pos, candidate))


class TestAdjustForVolume:
    """Tests for the volume-constraint term."""

    def test_growth_term(self, model: EnergyModel, small_grid: Grid) -> None:
        adjusted = model.adjust_for_volume(Position(0, 0), ORGANISM, 1.0, small_grid)
        assert adjusted == pytest.approx(1.1)

    def test_vacancy_bias(self, model: EnergyModel, small_grid: Grid) -> None:
        adjusted = model.adjust_for_volume(Position(0, 0), UNOCCUPIED, 1.0, small_grid)
        assert adjusted == pytest.approx(0.9)

    def test_connected_food_raises_target(self, small_grid: Grid) -> None:
        model = EnergyModel(constants=ModelConstants(ideal_volume=10.0))
        small_grid.set_cell(Cell(Position(2, 2), OccupancyState.FOOD))
        small_grid.set_cell(Cell(Position(1, 2), ORGANISM))
        # volume stays 1, target is 10 * 1
        adjusted = model.adjust_for_volume(Position(1, 2), ORGANISM, 0.0, small_grid)
        assert adjusted == pytest.approx(0.1 * (1 - 10))
