# region Imports
from __future__ import annotations
from typing import Optional

import numpy as np

from .config import EPSILON
# endregion


# region Distance Map
def distance_map(width_cells: int, height_cells: int, goal_x: int, goal_y: int) -> np.ndarray:
    """Straight-line distance (in squares) from every square to the goal, shape (H, W)."""
    ys, xs = np.indices((height_cells, width_cells), dtype=np.float64)
    return np.hypot(xs - goal_x, ys - goal_y)


def default_danger_adjust(width_cells: int, height_cells: int) -> float:
    return (width_cells + height_cells) / 4.0
# endregion


# region Blends
def blend_precomputed(raw: np.ndarray, dist: np.ndarray, danger_adjust: float = 1.0) -> np.ndarray:
    """
    Start from the distance map; squares whose raw risk is more than
    negligible get danger_adjust * raw + distance.
    `raw` may be (H, W) or a stack (T, H, W); `dist` broadcasts over time.
    """
    return np.where(raw > EPSILON, danger_adjust * raw + dist, dist)


def blend_direct(raw: np.ndarray, dist: np.ndarray, danger_adjust: Optional[float] = None) -> np.ndarray:
    """danger_adjust * raw + distance everywhere; adjust defaults to (W + H) / 4."""
    if danger_adjust is None:
        H, W = dist.shape
        danger_adjust = default_danger_adjust(W, H)
    return danger_adjust * raw + dist
# endregion
