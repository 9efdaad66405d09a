import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from danger_field.attenuation import attenuation_vector, exponential_decay, flat, linear_decay
from danger_field.config import PLANE_DANGER


def test_flat_is_constant():
    f = flat()
    assert f(-2) == f(0) == f(20) == PLANE_DANGER


def test_linear_decay_clamps_at_both_ends():
    f = linear_decay(start=0.98, end=0.0, horizon=20)
    assert np.isclose(f(-2), 0.98)
    assert np.isclose(f(10), 0.49)
    assert np.isclose(f(20), 0.0)
    assert np.isclose(f(30), 0.0)


def test_exponential_decay_half_life():
    f = exponential_decay(start=0.98, half_life=10.0)
    assert np.isclose(f(0), 0.98)
    assert np.isclose(f(10), 0.49)
    assert f(5) > f(6)


def test_bad_policy_parameters():
    with pytest.raises(ValueError):
        linear_decay(horizon=0)
    with pytest.raises(ValueError):
        exponential_decay(half_life=0)


def test_vector_is_indexed_by_offset_plus_look_behind():
    v = attenuation_vector(lambda t: float(t + 10), look_behind=2, look_ahead=5)
    assert v.shape == (8,)
    assert v[0] == 8.0      # t = -2
    assert v[2] == 10.0     # t = 0
    assert v[-1] == 15.0    # t = 5


def test_vector_rejects_negative_weights():
    with pytest.raises(ValueError):
        attenuation_vector(lambda t: -0.1, look_behind=1, look_ahead=1)
