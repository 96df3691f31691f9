#!/usr/bin/env python3
"""
Collision handling for the leapfrog engine.

Bodies whose centres come within the merge distance fuse in a perfectly
inelastic merge:
- mass is summed
- velocity is the momentum-weighted average (m_a v_a + m_b v_b) / (m_a + m_b)
- position and identity come from the heavier body (ties keep the earlier one)

Chained proximity (A near B, the merged AB now near C) is resolved within the
same call: after every merge the scan restarts over the surviving bodies until
no pair is within range.
"""
import logging
from dataclasses import replace
from typing import List, Optional, Sequence, Tuple

from .data_models import Body

logger = logging.getLogger(__name__)


def merge_close_bodies(bodies: Sequence[Body], merge_distance: float) -> List[Body]:
    """
    Merge every pair of bodies closer than or equal to merge_distance.

    Returns a new list; the input is not modified. Survivor order follows the
    input order.
    """
    alive = list(bodies)
    if merge_distance < 0 or len(alive) < 2:
        return alive

    limit_sq = merge_distance * merge_distance
    while True:
        pair = _find_close_pair(alive, limit_sq)
        if pair is None:
            return alive
        i, j = pair
        keep, drop, merged = _merge_pair(alive[i], alive[j], i, j)
        logger.debug("Merged %s into %s (mass %.3g)", alive[drop].id, merged.id, merged.mass)
        alive[keep] = merged
        del alive[drop]


def _find_close_pair(bodies: List[Body], limit_sq: float) -> Optional[Tuple[int, int]]:
    n = len(bodies)
    for i in range(n):
        xi, yi = bodies[i].position
        for j in range(i + 1, n):
            dx = bodies[j].position[0] - xi
            dy = bodies[j].position[1] - yi
            if dx * dx + dy * dy <= limit_sq:
                return i, j
    return None


def _merge_pair(a: Body, b: Body, i: int, j: int) -> Tuple[int, int, Body]:
    """Return (index kept, index dropped, merged body) for the pair at i < j."""
    if b.mass > a.mass:
        big, small = b, a
        keep, drop = j, i
    else:
        big, small = a, b
        keep, drop = i, j

    m_total = big.mass + small.mass
    new_vel = ((big.velocity[0] * big.mass + small.velocity[0] * small.mass) / m_total,
               (big.velocity[1] * big.mass + small.velocity[1] * small.mass) / m_total)

    return keep, drop, replace(big, mass=m_total, velocity=new_vel)
