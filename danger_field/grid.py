# region Imports
from __future__ import annotations
import copy
from typing import Dict, Hashable, Iterator, Set, Tuple

import numpy as np

from .config import EPSILON, PLANE_DANGER
from .geometry import cells_along
# endregion


class Grid:
    """
    A single instant of the airspace: a (height, width) array of risk values
    plus the set of aircraft ids sitting in each square.

    x is the column (east-west), y the row (north-south), (0, 0) the
    upper-left square. Risk is stored as risk[y, x].

    The plain accessors (risk_at, set_risk, add_risk, occupants_at) expect
    in-range squares; safely_add_risk ignores anything off the grid.
    """

    def __init__(
        self,
        field_width: float,
        field_height: float,
        resolution: float,
        occupied_risk: float = PLANE_DANGER,
    ):
        # region Guards
        if resolution <= 0:
            raise ValueError(f"Grid resolution must be > 0 (got {resolution}).")
        if field_width <= 0 or field_height <= 0:
            raise ValueError(
                f"Grid field is empty (width={field_width}, height={field_height})."
            )
        # endregion

        self._field_width = float(field_width)
        self._field_height = float(field_height)
        self._resolution = float(resolution)
        self.occupied_risk = float(occupied_risk)

        W = cells_along(field_width, resolution)
        H = cells_along(field_height, resolution)
        self._risk = np.zeros((H, W), dtype=np.float64)
        self._occupants: Dict[Tuple[int, int], Set[Hashable]] = {}

    # region Dimensions
    @property
    def width_in_cells(self) -> int:
        return int(self._risk.shape[1])

    @property
    def height_in_cells(self) -> int:
        return int(self._risk.shape[0])

    @property
    def shape(self) -> Tuple[int, int]:
        return self.height_in_cells, self.width_in_cells

    @property
    def field_width(self) -> float:
        return self._field_width

    @property
    def field_height(self) -> float:
        return self._field_height

    @property
    def resolution(self) -> float:
        return self._resolution

    @property
    def risk(self) -> np.ndarray:
        """Read-only view of the risk array, shape (H, W)."""
        view = self._risk.view()
        view.flags.writeable = False
        return view

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width_in_cells and 0 <= y < self.height_in_cells

    def _check(self, x: int, y: int):
        assert self.in_bounds(x, y), f"square ({x}, {y}) outside {self.width_in_cells}x{self.height_in_cells} grid"
    # endregion

    # region Occupants
    def occupants_at(self, x: int, y: int) -> Set[Hashable]:
        self._check(x, y)
        return set(self._occupants.get((x, y), ()))

    def add_occupant(self, x: int, y: int, identifier: Hashable):
        """Record an aircraft in this square; an occupied square is near-certain danger."""
        self._check(x, y)
        self._occupants.setdefault((x, y), set()).add(identifier)
        self._risk[y, x] = self.occupied_risk

    def occupied_cells(self) -> Iterator[Tuple[int, int]]:
        return iter(sorted(self._occupants))
    # endregion

    # region Risk
    def risk_at(self, x: int, y: int) -> float:
        self._check(x, y)
        return float(self._risk[y, x])

    def set_risk(self, x: int, y: int, value: float):
        self._check(x, y)
        self._risk[y, x] = value

    def add_risk(self, x: int, y: int, value: float):
        self._check(x, y)
        self._risk[y, x] += value

    def safely_add_risk(self, x: int, y: int, value: float) -> bool:
        if not self.in_bounds(x, y):
            return False
        self._risk[y, x] += value
        return True

    def replace_risk(self, values: np.ndarray):
        """Overwrite every risk value at once (occupants are kept)."""
        if values.shape != self._risk.shape:
            raise ValueError(f"Risk array shape {values.shape} does not match grid {self._risk.shape}.")
        self._risk = np.array(values, dtype=np.float64, copy=True)
    # endregion

    # region Copies
    def copy(self) -> "Grid":
        return copy.deepcopy(self)

    def blank_like(self) -> "Grid":
        return Grid(self._field_width, self._field_height, self._resolution, self.occupied_risk)
    # endregion

    # region Text Rendering
    def render(self, show: str = "risk") -> str:
        """
        Text picture of the grid, row y = 0 first.
          show="risk":      risk x 100, "-" for empty squares
          show="occupants": comma-joined ids, "." for empty squares
        """
        rows = []
        for y in range(self.height_in_cells):
            cells = []
            for x in range(self.width_in_cells):
                if show == "occupants":
                    ids = self._occupants.get((x, y))
                    cells.append(",".join(str(i) for i in sorted(ids, key=str)) if ids else ".")
                elif show == "risk":
                    v = self._risk[y, x]
                    cells.append("-" if abs(v) < EPSILON else f"{v * 100:.0f}")
                else:
                    raise ValueError(f"Unknown render mode: {show!r}")
            rows.append(" ".join(f"{c:>3}" for c in cells))
        return "\n".join(rows)

    def __repr__(self) -> str:
        return (f"Grid({self.width_in_cells}x{self.height_in_cells} cells, "
                f"resolution={self._resolution:g})")
    # endregion
