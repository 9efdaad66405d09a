"""The danger field: one Grid per second from -look_behind to +look_ahead.

Danger at square (10, 7), 4 seconds from now, is ``field(10, 7, 4)`` (or
``field.risk_at(10, 7, 4)``). The field is built for one owner aircraft and
only holds risk contributed by the other aircraft in the snapshot.
"""

# region Imports
from __future__ import annotations
import copy
import logging
from typing import Hashable, Iterable, List, Optional, Tuple

import numpy as np

from .attenuation import attenuation_vector, flat
from .costs import blend_direct, blend_precomputed, default_danger_adjust, distance_map
from .grid import Grid
from .models import Aircraft, Estimate, FieldParams
from .projector import project_aircraft
from .spreader import spread
# endregion

logger = logging.getLogger(__name__)

BLEND_MODES = ("direct", "precomputed")


class RiskField:
    def __init__(
        self,
        template: Grid,
        aircraft: Iterable[Aircraft],
        owner_id: Optional[Hashable],
        params: Optional[FieldParams] = None,
    ):
        """
        Args:
          template: grid whose width/height/resolution every slice copies
          aircraft: snapshot of every aircraft (the owner may be included)
          owner_id: the aircraft this field is for; it adds no risk of its own
          params:   FieldParams (defaults if None)

        The whole field is computed here; nothing is filled lazily.
        """
        p = params if params is not None else FieldParams()
        self.params = p
        self._owner_id = owner_id
        self._aircraft: Tuple[Aircraft, ...] = tuple(aircraft)

        blank = Grid(template.field_width, template.field_height, template.resolution,
                     occupied_risk=p.occupied_risk)
        self._slices: List[Grid] = [blank.blank_like() for _ in range(p.n_slices)]

        policy = p.attenuation if p.attenuation is not None else flat(p.occupied_risk)
        self._weights = attenuation_vector(policy, p.look_behind, p.look_ahead)

        self._distance: Optional[np.ndarray] = None
        self._goal: Optional[Tuple[int, int]] = None

        self._fill()

    @classmethod
    def from_dimensions(
        cls,
        width: float,
        height: float,
        resolution: float,
        aircraft: Iterable[Aircraft],
        owner_id: Optional[Hashable],
        params: Optional[FieldParams] = None,
    ) -> "RiskField":
        return cls(Grid(width, height, resolution), aircraft, owner_id, params)

    def copy(self) -> "RiskField":
        """Independent duplicate; writes to either field never show up in the other."""
        return copy.deepcopy(self)

    # region Filling
    def _fill(self):
        p = self.params
        now = self._slices[p.look_behind]
        counted = 0
        for ac in self._aircraft:
            if ac.identifier == self._owner_id:
                continue
            counted += 1

            x, y = ac.position
            if now.in_bounds(x, y):
                now.add_occupant(x, y, ac.identifier)
            else:
                logger.warning("aircraft %s at (%s, %s) is outside the %dx%d grid",
                               ac.identifier, x, y, now.width_in_cells, now.height_in_cells)

            stream = project_aircraft(
                ac,
                ceiling=p.danger_ceiling,
                max_steps=p.look_ahead,
                tail_seconds=p.tail_seconds,
                loiter=p.loiter,
            )
            self._apply(stream, ac.bearing)

        logger.info(
            "danger field for %s: %dx%d squares, %d..%d s, %d other aircraft",
            self._owner_id, self.width_in_cells, self.height_in_cells,
            -p.look_behind, p.look_ahead, counted,
        )

    def _apply(self, stream: Iterable[Estimate], bearing: float):
        p = self.params
        t = 1
        for est in stream:
            if t > p.look_ahead:
                break
            if est.is_sentinel:
                t += 1
                continue
            grid = self._slices[t + p.look_behind]
            if not grid.in_bounds(est.x, est.y):
                continue
            d = est.risk * self._weights[t + p.look_behind]
            grid.add_risk(est.x, est.y, d)
            spread(grid, est.x, est.y, d,
                   field_weight=p.field_weight, mode=p.spread_mode, bearing=bearing)
    # endregion

    # region Accessors
    def _index(self, seconds: int) -> int:
        assert -self.params.look_behind <= seconds <= self.params.look_ahead, \
            f"{seconds} s outside [-{self.params.look_behind}, {self.params.look_ahead}]"
        return seconds + self.params.look_behind

    def risk_at(self, x: int, y: int, seconds: int) -> float:
        return self._slices[self._index(seconds)].risk_at(x, y)

    def __call__(self, x: int, y: int, seconds: int) -> float:
        return self.risk_at(x, y, seconds)

    def add_risk_at(self, x: int, y: int, seconds: int, risk: float):
        assert risk >= 0.0, f"negative risk {risk}"
        self._slices[self._index(seconds)].add_risk(x, y, risk)

    def set_risk_at(self, x: int, y: int, seconds: int, risk: float):
        self._slices[self._index(seconds)].set_risk(x, y, risk)

    def slice_at(self, seconds: int) -> Grid:
        return self._slices[self._index(seconds)]

    def attenuation_at(self, seconds: int) -> float:
        return float(self._weights[self._index(seconds)])

    def as_array(self) -> np.ndarray:
        """Copy of the whole field, shape (look_behind + look_ahead + 1, H, W)."""
        return np.stack([g.risk for g in self._slices])

    @property
    def width_in_cells(self) -> int:
        return self._slices[0].width_in_cells

    @property
    def height_in_cells(self) -> int:
        return self._slices[0].height_in_cells

    @property
    def look_ahead_seconds(self) -> int:
        return self.params.look_ahead

    @property
    def look_behind_seconds(self) -> int:
        return self.params.look_behind

    @property
    def resolution(self) -> float:
        return self._slices[0].resolution

    @property
    def owner_id(self) -> Optional[Hashable]:
        return self._owner_id

    @property
    def aircraft(self) -> Tuple[Aircraft, ...]:
        return self._aircraft
    # endregion

    # region Distance Costs
    @property
    def distance_costs_initialized(self) -> bool:
        return self._distance is not None

    @property
    def goal(self) -> Optional[Tuple[int, int]]:
        return self._goal

    def compute_distance_costs(
        self,
        goal_x: int,
        goal_y: int,
        danger_adjust: Optional[float] = None,
        *,
        mode: str = "direct",
        allow_reblend: bool = False,
    ):
        """
        Turn the danger field into a planning heuristic by adding the
        straight-line distance to (goal_x, goal_y) to every square.

        mode="direct":      danger_adjust * risk + distance for every offset
                            t < look_ahead; adjust defaults to (W + H) / 4
        mode="precomputed": every slice starts as the distance map; squares
                            with more than negligible risk get
                            danger_adjust * risk + distance; adjust defaults to 1

        Raw risk is overwritten. Blending twice compounds, so a second call
        raises RuntimeError unless allow_reblend=True.
        """
        if mode not in BLEND_MODES:
            raise ValueError(f"Unknown blend mode: {mode!r} (expected one of {BLEND_MODES})")
        if self.distance_costs_initialized and not allow_reblend:
            raise RuntimeError(
                f"Distance costs already blended toward {self._goal}; "
                "pass allow_reblend=True to blend the blended field again."
            )

        W, H = self.width_in_cells, self.height_in_cells
        dist = distance_map(W, H, goal_x, goal_y)
        p = self.params

        if mode == "precomputed":
            adjust = 1.0 if danger_adjust is None else float(danger_adjust)
            for g in self._slices:
                g.replace_risk(blend_precomputed(g.risk, dist, adjust))
        else:
            adjust = default_danger_adjust(W, H) if danger_adjust is None else float(danger_adjust)
            for t in range(-p.look_behind, p.look_ahead):
                g = self._slices[t + p.look_behind]
                g.replace_risk(blend_direct(g.risk, dist, adjust))

        self._distance = dist
        self._goal = (goal_x, goal_y)
        logger.info("blended distance costs toward (%s, %s), mode=%s, danger_adjust=%g",
                    goal_x, goal_y, mode, adjust)

    def distance_cost_at(self, x: int, y: int) -> float:
        if self._distance is None:
            raise RuntimeError("Distance costs have not been computed; call compute_distance_costs first.")
        assert self._slices[0].in_bounds(x, y), f"square ({x}, {y}) outside grid"
        return float(self._distance[y, x])
    # endregion

    def __repr__(self) -> str:
        return (f"RiskField(owner={self._owner_id!r}, {self.width_in_cells}x{self.height_in_cells} "
                f"squares, t={-self.params.look_behind}..{self.params.look_ahead})")
