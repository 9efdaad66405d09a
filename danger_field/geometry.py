# region Imports
from __future__ import annotations
import math
from enum import IntEnum
from typing import Dict, NamedTuple, Tuple

from .config import EPSILON
# endregion


# region Grid Sizing
def cells_along(dimension: float, resolution: float) -> int:
    """Number of squares needed to cover `dimension` at `resolution` (ceil)."""
    # 10 / 0.1 is 100.00000000000001 in floating point; don't round that up to 101
    return max(1, int(math.ceil(dimension / resolution - EPSILON)))
# endregion


# region Planar Distance / Bearing
def euclidean_distance(x1: int, y1: int, x2: int, y2: int) -> float:
    return math.hypot(x2 - x1, y2 - y1)


def euclidean_bearing(x1: int, y1: int, x2: int, y2: int) -> float:
    """
    Bearing in degrees from square 1 to square 2, in (-180, 180].
    0 points toward decreasing y (north), +90 toward increasing x (east).
    """
    deg = math.degrees(math.atan2(float(x2 - x1), float(y1 - y2)))
    if deg <= -180.0:
        deg += 360.0
    return deg
# endregion


# region Compass Headings
class Heading(IntEnum):
    N = 0
    NE = 1
    E = 2
    SE = 3
    S = 4
    SW = 5
    W = 6
    NW = 7

    def reverse(self) -> "Heading":
        return Heading((self.value + 4) % 8)

    def __str__(self) -> str:
        return self.name


def name_heading(bearing: float) -> Heading:
    """
    Compass bearing (0 = north, clockwise) to one of 8 named headings.
    N covers (-22.5, 22.5], NE covers (22.5, 67.5], and so on.
    """
    b = bearing % 360.0
    return Heading(int(math.ceil((b - 22.5) / 45.0)) % 8)
# endregion


# region Principal Directions
# grid step for each of the 8 principal directions (degrees, signed as returned
# by euclidean_bearing); y grows southward
DIRECTION_OFFSETS: Dict[int, Tuple[int, int]] = {
    0: (0, -1),
    45: (1, -1),
    90: (1, 0),
    135: (1, 1),
    180: (0, 1),
    -45: (-1, -1),
    -90: (-1, 0),
    -135: (-1, 1),
    -180: (0, 1),
}

_SECTORS = ((0, 45), (45, 90), (90, 135), (135, 180))


class MassSplit(NamedTuple):
    closest: int
    closest_mass: float
    other: int
    other_mass: float


def bracket_directions(bearing: float) -> Tuple[int, int]:
    """
    The two principal directions on either side of `bearing`, the one nearer
    to 0 first. Bearings of exactly 0 bracket toward the west side.
    """
    sign = 1 if bearing > 0 else -1
    lo, hi = _SECTORS[min(int(abs(bearing) // 45.0), 3)]
    return sign * lo, sign * hi


def nearest_directions(bearing: float) -> Tuple[int, int]:
    """(closest, other) among the bracketing pair; a tie goes to the second."""
    first, second = bracket_directions(bearing)
    if abs(bearing - first) >= abs(bearing - second):
        return second, first
    return first, second


def split_mass(bearing: float) -> MassSplit:
    """
    Share of one second's worth of presence between the two bracketing squares.
    The two masses always sum to 1.
    """
    closest, other = nearest_directions(bearing)
    if closest == 0:
        # no ratio against 0; use the complement of the share toward `other`
        mass = 1.0 - bearing / other
    elif abs(bearing) > abs(closest):
        mass = closest / bearing
    else:
        mass = bearing / closest
    return MassSplit(closest, mass, other, 1.0 - mass)


def clamp_mass(mass: float, ceiling: float) -> float:
    return min(max(mass, 0.0), ceiling)
# endregion
