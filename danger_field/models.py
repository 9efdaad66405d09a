# models.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Hashable, Optional, Tuple

from .config import (
    DANGER_CEILING,
    DEFAULT_LOOK_AHEAD,
    DEFAULT_LOOK_BEHIND,
    FIELD_WEIGHT,
    MAX_TAIL_SECONDS,
    PLANE_DANGER,
    TAIL_SECONDS,
)

Cell = Tuple[int, int]


@dataclass(frozen=True)
class Estimate:
    """One projected square, or the sentinel that marks the end of a second."""
    x: int
    y: int
    risk: float

    @property
    def is_sentinel(self) -> bool:
        return self.risk < 0.0


SENTINEL = Estimate(0, 0, -1.0)


@dataclass(frozen=True)
class Aircraft:
    """
    identifier:        stable id from the state provider
    position:          current (x, y) square
    final_destination: last waypoint (x, y)
    destination:       next waypoint, if different from the final one
    bearing:           degrees, 0 = north, clockwise positive
    """
    identifier: Hashable
    position: Cell
    final_destination: Cell
    destination: Optional[Cell] = None
    bearing: float = 0.0

    @property
    def has_intermediate(self) -> bool:
        return self.destination is not None and tuple(self.destination) != tuple(self.final_destination)


class SpreadMode(Enum):
    ALL_ROUND = "all_round"      # all 8 neighbors
    FORWARD_ARC = "forward_arc"  # the 5 neighbors facing the aircraft's heading


@dataclass(frozen=True)
class FieldParams:
    look_ahead: int = DEFAULT_LOOK_AHEAD
    look_behind: int = DEFAULT_LOOK_BEHIND
    occupied_risk: float = PLANE_DANGER
    field_weight: float = FIELD_WEIGHT
    danger_ceiling: float = DANGER_CEILING
    spread_mode: SpreadMode = SpreadMode.ALL_ROUND
    tail_seconds: int = TAIL_SECONDS
    loiter: bool = True
    # offset (seconds) -> weight; None means flat at occupied_risk
    attenuation: Optional[Callable[[int], float]] = None

    def __post_init__(self):
        if self.look_ahead < 0 or self.look_behind < 0:
            raise ValueError(
                f"look_ahead/look_behind must be >= 0 (got {self.look_ahead}, {self.look_behind})."
            )
        if self.danger_ceiling <= 0.0:
            raise ValueError(f"danger_ceiling must be > 0 (got {self.danger_ceiling}).")
        if not (0.0 <= self.field_weight <= 1.0):
            raise ValueError(f"field_weight must lie in [0, 1] (got {self.field_weight}).")
        if self.occupied_risk < 0.0:
            raise ValueError(f"occupied_risk must be >= 0 (got {self.occupied_risk}).")
        if not (0 <= self.tail_seconds <= MAX_TAIL_SECONDS):
            raise ValueError(
                f"tail_seconds must lie in [0, {MAX_TAIL_SECONDS}] (got {self.tail_seconds})."
            )
        if not isinstance(self.spread_mode, SpreadMode):
            raise ValueError(f"Unknown spread mode: {self.spread_mode!r}")

    @property
    def n_slices(self) -> int:
        return self.look_behind + self.look_ahead + 1
