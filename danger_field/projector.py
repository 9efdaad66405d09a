"""Trajectory projection: straight-line paths to discrete per-second risk.

An aircraft heading from its current square toward a destination is walked
one square per second. At each step the true bearing is bracketed between two
of the 8 principal directions, and the second's worth of presence is split
between the two neighboring squares in those directions. The higher-share
square becomes the next position. Every second's pair of estimates is
followed by SENTINEL, so consumers recover time by counting sentinels.
"""

# region Imports
from __future__ import annotations
import logging
from typing import Iterable, Iterator, List, Optional, Tuple

from .config import DANGER_CEILING, DEFAULT_LOOK_AHEAD, TAIL_SECONDS
from .geometry import DIRECTION_OFFSETS, clamp_mass, euclidean_bearing, split_mass
from .models import SENTINEL, Aircraft, Cell, Estimate
# endregion

logger = logging.getLogger(__name__)


# region Single Step
def _step(point: Cell, bearing: float, ceiling: float) -> Tuple[Estimate, Estimate, Cell]:
    x, y = point
    split = split_mass(bearing)
    cdx, cdy = DIRECTION_OFFSETS[split.closest]
    odx, ody = DIRECTION_OFFSETS[split.other]
    near = Estimate(x + cdx, y + cdy, clamp_mass(split.closest_mass, ceiling))
    far = Estimate(x + odx, y + ody, clamp_mass(split.other_mass, ceiling))
    # the unclamped share decides where the aircraft goes next; closest wins ties
    if split.other_mass > split.closest_mass:
        return near, far, (far.x, far.y)
    return near, far, (near.x, near.y)
# endregion


# region Leg Walking
def _walk(start: Cell, destination: Cell, ceiling: float, budget: int, out: List[Estimate]) -> int:
    """Append one leg to `out`; returns the number of seconds emitted."""
    pending = [(start, destination)]
    steps = 0
    while pending and steps < budget:
        point, dest = pending.pop()
        if point == dest:
            break
        bearing = euclidean_bearing(point[0], point[1], dest[0], dest[1])
        near, far, nxt = _step(point, bearing, ceiling)
        out.extend((near, far, SENTINEL))
        steps += 1
        pending.append((nxt, dest))
    return steps


def project_leg(
    start: Cell,
    destination: Cell,
    *,
    ceiling: float = DANGER_CEILING,
    max_steps: Optional[int] = None,
) -> List[Estimate]:
    """
    Estimates for a single straight leg. Empty when start == destination.

    Each step strictly shrinks the squared distance to the destination, so
    the walk ends after at most dx^2 + dy^2 steps even without a budget.
    """
    start, destination = tuple(start), tuple(destination)
    if max_steps is None:
        max_steps = (destination[0] - start[0]) ** 2 + (destination[1] - start[1]) ** 2
    out: List[Estimate] = []
    _walk(start, destination, ceiling, max_steps, out)
    return out
# endregion


# region Whole Aircraft
def project_aircraft(
    aircraft: Aircraft,
    *,
    ceiling: float = DANGER_CEILING,
    max_steps: int = DEFAULT_LOOK_AHEAD,
    tail_seconds: int = TAIL_SECONDS,
    loiter: bool = True,
) -> List[Estimate]:
    """
    Estimate stream for an aircraft over at most `max_steps` seconds:
      current -> intermediate (if any) -> final destination,
      then `tail_seconds` past the final destination along the approach bearing,
      then (if `loiter`) the final destination square for the remaining seconds.

    An aircraft already sitting on its final destination produces nothing.
    """
    start = tuple(aircraft.position)
    final = tuple(aircraft.final_destination)
    if aircraft.has_intermediate:
        waypoint = tuple(aircraft.destination)
        legs = [(start, waypoint), (waypoint, final)]
    else:
        legs = [(start, final)]

    out: List[Estimate] = []
    used = 0
    approach_from = start
    for a, b in legs:
        if a == b:
            continue
        leg_steps = _walk(a, b, ceiling, max_steps - used, out)
        used += leg_steps
        approach_from = a
        if used >= max_steps:
            logger.debug("aircraft %s: step budget %d spent before reaching %s",
                         aircraft.identifier, max_steps, b)
            return out

    if not out:
        return out

    # region Tail and Loiter
    approach = euclidean_bearing(approach_from[0], approach_from[1], final[0], final[1])
    point = final
    for _ in range(min(tail_seconds, max_steps - used)):
        near, far, point = _step(point, approach, ceiling)
        out.extend((near, far, SENTINEL))
        used += 1

    if loiter:
        hold = Estimate(final[0], final[1], clamp_mass(1.0, ceiling))
        for _ in range(max_steps - used):
            out.extend((hold, SENTINEL))
            used += 1
    # endregion

    logger.debug("aircraft %s: projected %d seconds (%d estimates)",
                 aircraft.identifier, used, len(out))
    return out
# endregion


# region Stream Helpers
def count_seconds(stream: Iterable[Estimate]) -> int:
    return sum(1 for e in stream if e.is_sentinel)


def group_by_second(stream: Iterable[Estimate]) -> Iterator[Tuple[int, List[Estimate]]]:
    """Yield (t, estimates) pairs, t starting at 1, one per sentinel-delimited second."""
    t = 1
    batch: List[Estimate] = []
    for e in stream:
        if e.is_sentinel:
            yield t, batch
            t += 1
            batch = []
        else:
            batch.append(e)
    if batch:
        yield t, batch
# endregion
