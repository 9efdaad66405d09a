# region Imports
from __future__ import annotations
from typing import Dict, Tuple

from .config import FIELD_WEIGHT
from .geometry import Heading, name_heading
from .grid import Grid
from .models import SpreadMode
# endregion

# region Neighbor Tables
RING_8: Tuple[Tuple[int, int], ...] = tuple(
    (dx, dy) for dy in (-1, 0, 1) for dx in (-1, 0, 1) if not (dx == 0 and dy == 0)
)

# five squares facing each heading (y grows southward)
FORWARD_ARC: Dict[Heading, Tuple[Tuple[int, int], ...]] = {
    Heading.N:  ((-1, 0), (-1, -1), (0, -1), (1, -1), (1, 0)),
    Heading.NE: ((-1, -1), (0, -1), (1, -1), (1, 0), (1, 1)),
    Heading.E:  ((0, -1), (1, -1), (1, 0), (1, 1), (0, 1)),
    Heading.SE: ((1, -1), (1, 0), (1, 1), (0, 1), (-1, 1)),
    Heading.S:  ((1, 0), (1, 1), (0, 1), (-1, 1), (-1, 0)),
    Heading.SW: ((1, 1), (0, 1), (-1, 1), (-1, 0), (-1, -1)),
    Heading.W:  ((0, 1), (-1, 1), (-1, 0), (-1, -1), (0, -1)),
    Heading.NW: ((-1, 1), (-1, 0), (-1, -1), (0, -1), (1, -1)),
}
# endregion


def neighbor_offsets(mode: SpreadMode, bearing: float = 0.0) -> Tuple[Tuple[int, int], ...]:
    if mode is SpreadMode.ALL_ROUND:
        return RING_8
    if mode is SpreadMode.FORWARD_ARC:
        return FORWARD_ARC[name_heading(bearing)]
    raise ValueError(f"Unknown spread mode: {mode!r}")


def spread(
    grid: Grid,
    x: int,
    y: int,
    risk: float,
    *,
    field_weight: float = FIELD_WEIGHT,
    mode: SpreadMode = SpreadMode.ALL_ROUND,
    bearing: float = 0.0,
) -> int:
    """
    Add `risk * field_weight` around square (x, y) to keep planned paths away
    from a predicted aircraft. Squares off the grid are skipped.
    Returns how many squares were written.
    """
    d = risk * field_weight
    written = 0
    for dx, dy in neighbor_offsets(mode, bearing):
        if grid.safely_add_risk(x + dx, y + dy, d):
            written += 1
    return written
