"""Errors raised by the simulation core.

Out-of-range grid reads raise the built-in ``IndexError`` (see
``Grid.get_cell_by_coord``); everything else specific to this package
derives from ``SimulationError``.
"""

from __future__ import annotations


class SimulationError(Exception):
    """Base class for plasmodium errors."""


class PositionMismatchError(SimulationError, ValueError):
    """A cell replacement was attempted across two different positions."""


class InvalidStateTransitionError(SimulationError, ValueError):
    """An energy was requested for a change involving food or obstacles.

    The energy model only scores organism <-> unoccupied transitions;
    callers are expected to filter other transitions beforehand.
    """
