# region Imports
from __future__ import annotations
import math
from typing import Callable

import numpy as np

from .config import PLANE_DANGER
# endregion

AttenuationFn = Callable[[int], float]


# region Policies
def flat(weight: float = PLANE_DANGER) -> AttenuationFn:
    """Same weight at every offset (no decay)."""
    def f(seconds: int) -> float:
        return weight
    return f


def linear_decay(start: float = PLANE_DANGER, end: float = 0.0, horizon: int = 20) -> AttenuationFn:
    """`start` at t <= 0, falling linearly to `end` at t = horizon and held there."""
    if horizon <= 0:
        raise ValueError(f"horizon must be > 0 (got {horizon}).")

    def f(seconds: int) -> float:
        frac = min(max(seconds, 0), horizon) / float(horizon)
        return start + (end - start) * frac
    return f


def exponential_decay(start: float = PLANE_DANGER, half_life: float = 10.0) -> AttenuationFn:
    """`start` at t <= 0, halving every `half_life` seconds after that."""
    if half_life <= 0:
        raise ValueError(f"half_life must be > 0 (got {half_life}).")

    def f(seconds: int) -> float:
        return start * math.pow(0.5, max(seconds, 0) / half_life)
    return f
# endregion


# region Vector Builder
def attenuation_vector(policy: AttenuationFn, look_behind: int, look_ahead: int) -> np.ndarray:
    """Weights for offsets -look_behind..look_ahead; index = offset + look_behind."""
    offsets = range(-look_behind, look_ahead + 1)
    weights = np.array([float(policy(t)) for t in offsets], dtype=np.float64)
    if not np.all(np.isfinite(weights)) or np.any(weights < 0):
        raise ValueError(f"Attenuation weights must be finite and >= 0 (got {weights.tolist()}).")
    return weights
# endregion
