"""Spatial falloff for chemical field contributions.

Separated from ``chemical.py`` so the shape of a contribution can be
changed independently of how the field is stored.
"""

from __future__ import annotations

import math

from plasmodium.field.chemical import ChemicalField


def deposit_pyramid(
    chem: ChemicalField,
    x: int,
    y: int,
    value: float,
    decay: float,
) -> None:
    """Add a square pyramid of ``value`` centred on ``(x, y)``.

    Rings are visited from ``|value| / decay - 1`` down to 0 in steps
    of one.  Each ring adds ``decay`` (carrying the sign of ``value``)
    to the whole square ``[x - r, x + r] x [y - r, y + r]``, so inner
    cells are hit once per enclosing ring.  With ``value=3, decay=1``
    the centre receives 3, its 8 neighbours 2 and the next ring 1.

    Args:
        chem: The field to modify in-place.
        x: Centre column.
        y: Centre row.
        value: Peak contribution; negative values repel.
        decay: Drop per ring, must be positive.

    Raises:
        ValueError: If ``decay`` is not positive.
    """
    if decay <= 0:
        msg = f"decay must be positive, got {decay}"
        raise ValueError(msg)

    step = math.copysign(decay, value)
    radius = abs(value) / decay - 1
    while radius >= 0:
        chem.add_square(x - radius, y - radius, x + radius, y + radius, step)
        radius -= 1
