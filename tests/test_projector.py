import sys
from pathlib import Path

import numpy as np

sys.path.append(str(Path(__file__).resolve().parents[1]))

from danger_field.geometry import split_mass
from danger_field.models import SENTINEL, Aircraft, Estimate
from danger_field.projector import count_seconds, group_by_second, project_aircraft, project_leg


def _pairs(stream):
    return [batch for _, batch in group_by_second(stream)]


def test_already_at_destination_projects_nothing():
    ac = Aircraft("b", position=(3, 3), final_destination=(3, 3), bearing=45.0)
    assert project_aircraft(ac) == []
    assert project_leg((3, 3), (3, 3)) == []


def test_due_north_walks_up_column():
    stream = project_leg((5, 5), (5, 1))
    assert count_seconds(stream) == 4
    pairs = _pairs(stream)
    assert [p[0] for p in pairs] == [
        Estimate(5, 4, 0.4),
        Estimate(5, 3, 0.4),
        Estimate(5, 2, 0.4),
        Estimate(5, 1, 0.4),
    ]
    # the whole second lands on the north square; the bracketing NW square gets nothing
    for near, far in pairs:
        assert (far.x, far.y) == (near.x - 1, near.y)
        assert far.risk == 0.0


def test_sentinel_follows_every_pair():
    stream = project_leg((0, 0), (3, 0))
    assert len(stream) == 9
    assert [e.is_sentinel for e in stream] == [False, False, True] * 3
    assert stream[2] == SENTINEL


def test_oblique_step_splits_then_clamps():
    # bearing ~156.8 deg: between SE (135) and S (180), nearer SE
    stream = project_leg((0, 0), (3, 7), ceiling=0.4)
    near, far = stream[0], stream[1]
    split = split_mass(156.80140948635182)
    assert np.isclose(split.closest_mass + split.other_mass, 1.0)
    assert (near.x, near.y) == (1, 1)
    assert (far.x, far.y) == (0, 1)
    assert near.risk == 0.4
    assert np.isclose(far.risk, 1.0 - 135.0 / 156.80140948635182)
    for e in stream:
        if not e.is_sentinel:
            assert 0.0 <= e.risk <= 0.4


def test_without_ceiling_pairs_sum_to_one():
    for dest in [(3, 7), (-4, 1), (6, -2), (-5, -5)]:
        for near, far in _pairs(project_leg((0, 0), dest, ceiling=1.0)):
            assert np.isclose(near.risk + far.risk, 1.0)


def test_leg_ends_on_destination():
    for dest in [(3, 7), (-4, 1), (6, -2), (-5, -5), (0, 9)]:
        pairs = _pairs(project_leg((0, 0), dest))
        last_near = pairs[-1][0]
        assert (last_near.x, last_near.y) == dest


def test_step_budget_stops_leg():
    stream = project_leg((0, 0), (10, 0), max_steps=3)
    assert count_seconds(stream) == 3


def test_two_legs_then_tail_then_loiter():
    ac = Aircraft(7, position=(0, 0), final_destination=(4, 0), destination=(0, 4), bearing=180.0)
    stream = project_aircraft(ac, max_steps=20, tail_seconds=2, loiter=True)
    assert count_seconds(stream) == 20
    nears = {t: batch[0] for t, batch in group_by_second(stream)}
    # south to the waypoint
    assert [(nears[t].x, nears[t].y) for t in range(1, 5)] == [(0, 1), (0, 2), (0, 3), (0, 4)]
    # north-east to the final destination, time keeps counting
    assert [(nears[t].x, nears[t].y) for t in range(5, 9)] == [(1, 3), (2, 2), (3, 1), (4, 0)]
    # overshoot along the approach bearing
    assert [(nears[t].x, nears[t].y) for t in (9, 10)] == [(5, -1), (6, -2)]
    # then hold the final destination
    for t in range(11, 21):
        assert nears[t] == Estimate(4, 0, 0.4)


def test_tail_and_loiter_respect_budget_and_flags():
    ac = Aircraft(7, position=(0, 0), final_destination=(4, 0), destination=(0, 4))
    assert count_seconds(project_aircraft(ac, max_steps=8)) == 8
    assert count_seconds(project_aircraft(ac, max_steps=20, loiter=False)) == 10
    assert count_seconds(project_aircraft(ac, max_steps=20, tail_seconds=0, loiter=False)) == 8


def test_budget_spent_on_first_leg_skips_second():
    ac = Aircraft(1, position=(0, 0), final_destination=(9, 9), destination=(0, 9))
    stream = project_aircraft(ac, max_steps=5)
    assert count_seconds(stream) == 5
    assert all(e.x == 0 for e in stream[0::3])


def test_waypoint_equal_to_final_is_a_single_leg():
    ac = Aircraft(1, position=(0, 0), final_destination=(0, 3), destination=(0, 3))
    assert not ac.has_intermediate
    stream = project_aircraft(ac, max_steps=3)
    assert count_seconds(stream) == 3


def test_group_by_second_numbers_from_one():
    stream = [Estimate(1, 1, 0.4), SENTINEL, Estimate(2, 2, 0.3), Estimate(3, 3, 0.1), SENTINEL, Estimate(4, 4, 0.2)]
    groups = list(group_by_second(stream))
    assert [t for t, _ in groups] == [1, 2, 3]
    assert len(groups[1][1]) == 2
