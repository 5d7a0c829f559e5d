"""ChemicalField — the scalar attractant/repellent map of the grid.

The field is a single NumPy 2D array indexed ``[y, x]``.  Organism,
food and obstacle cells contribute signed, spatially decaying amounts
to it (see ``falloff.py``); nothing ever evaporates or diffuses it
globally, so contributions accumulate over the lifetime of a run.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray


@dataclass
class ChemicalField:
    """Dense chemical potential for a ``width`` x ``height`` grid.

    Attributes:
        width: Grid columns (must match the owning Grid).
        height: Grid rows (must match the owning Grid).
        values: Field values, unbounded in both directions.
    """

    width: int
    height: int
    values: NDArray[np.float64] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Allocate a zeroed field."""
        self.values = np.zeros((self.height, self.width), dtype=np.float64)

    def clear(self) -> None:
        """Reset every value to zero in-place."""
        self.values.fill(0.0)

    def read(self, x: int, y: int) -> float:
        """Read the field at a cell.

        Args:
            x: Column index.
            y: Row index.

        Returns:
            Current field value.
        """
        return float(self.values[y, x])

    def add_square(
        self,
        min_x: float,
        min_y: float,
        max_x: float,
        max_y: float,
        amount: float,
    ) -> None:
        """Add ``amount`` to every integer cell inside a rectangle.

        The bounds are inclusive and clipped to the grid.  Fractional
        bounds cover the integer cells that lie within them.

        Args:
            min_x: Left edge.
            min_y: Top edge.
            max_x: Right edge.
            max_y: Bottom edge.
            amount: Signed quantity added to each covered cell.
        """
        x0 = max(0, int(np.ceil(min_x)))
        y0 = max(0, int(np.ceil(min_y)))
        x1 = min(self.width - 1, int(np.floor(max_x)))
        y1 = min(self.height - 1, int(np.floor(max_y)))
        if x0 > x1 or y0 > y1:
            return
        self.values[y0 : y1 + 1, x0 : x1 + 1] += amount
