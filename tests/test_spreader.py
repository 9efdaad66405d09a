import sys
from pathlib import Path

import numpy as np

sys.path.append(str(Path(__file__).resolve().parents[1]))

from danger_field.geometry import Heading
from danger_field.grid import Grid
from danger_field.models import SpreadMode
from danger_field.spreader import FORWARD_ARC, RING_8, neighbor_offsets, spread

HEADING_STEP = {
    Heading.N: (0, -1), Heading.NE: (1, -1), Heading.E: (1, 0), Heading.SE: (1, 1),
    Heading.S: (0, 1), Heading.SW: (-1, 1), Heading.W: (-1, 0), Heading.NW: (-1, -1),
}


def test_all_round_fills_the_ring():
    g = Grid(5, 5, 1)
    written = spread(g, 2, 2, 0.4, field_weight=0.5)
    assert written == 8
    r = g.risk
    assert r[2, 2] == 0.0
    assert np.isclose(r[1:4, 1:4].sum(), 8 * 0.2)
    assert r.sum() == r[1:4, 1:4].sum()


def test_all_round_at_corner_drops_off_grid_squares():
    g = Grid(5, 5, 1)
    assert spread(g, 0, 0, 0.4, field_weight=0.5) == 3
    assert np.isclose(g.risk.sum(), 3 * 0.2)


def test_forward_arc_north():
    g = Grid(5, 5, 1)
    written = spread(g, 2, 2, 1.0, field_weight=0.5, mode=SpreadMode.FORWARD_ARC, bearing=0.0)
    assert written == 5
    for x, y in [(1, 2), (1, 1), (2, 1), (3, 1), (3, 2)]:
        assert g.risk_at(x, y) == 0.5
    for x, y in [(1, 3), (2, 3), (3, 3), (2, 2)]:
        assert g.risk_at(x, y) == 0.0


def test_forward_arc_lookup_uses_named_heading():
    assert neighbor_offsets(SpreadMode.FORWARD_ARC, 90.0) == FORWARD_ARC[Heading.E]
    assert neighbor_offsets(SpreadMode.FORWARD_ARC, -100.0) == FORWARD_ARC[Heading.W]
    assert neighbor_offsets(SpreadMode.ALL_ROUND, 123.0) == RING_8


def test_every_arc_faces_its_heading():
    for heading, arc in FORWARD_ARC.items():
        assert len(set(arc)) == 5
        assert (0, 0) not in arc
        assert HEADING_STEP[heading] in arc
        assert HEADING_STEP[heading.reverse()] not in arc
        assert set(arc) <= set(RING_8)
