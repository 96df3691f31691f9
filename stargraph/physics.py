#!/usr/bin/env python3
"""
Leapfrog Gravity Engine for the Star Graph sandbox

Responsibilities
- Compute pairwise gravitational accelerations with Plummer-like softening.
- Advance body states with a kick-drift-kick leapfrog integrator.
- Merge bodies that come within the merge distance (see collisions.py).
- Seed circular-orbit velocities around the anchor body.

Numerical notes
- Softening: adds eps^2 to r^2 so |a| never exceeds G*m/eps^2, even when two bodies
  coincide. This is not physically exact but common in N-body demos.
- Leapfrog is symplectic and second order: energy oscillates but does not drift
  the way explicit Euler does, which keeps orbits closed over long runs.
- Complexity: acceleration computation is O(N^2) per evaluation (direct summation),
  two evaluations per step.

This module is pure compute: leapfrog_step never mutates its inputs.
"""

import logging
import math
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple

from .collisions import merge_close_bodies
from .constants import DEFAULT_SOFTENING, LEAPFROG_DT, LEAPFROG_G, MERGE_DISTANCE
from .data_models import Body
from .vector_utils import vec_add, vec_perp, vec_scale, vec_sub

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LeapfrogParams:
    """
    Parameters for one leapfrog step.

    Fields:
    - G: Gravitational constant in sandbox units
    - softening: eps added inside the distance term
    - dt: Step size in seconds
    - merge_distance: Bodies at or closer than this are merged
    - anchor_id: Optional body pinned in place (velocity held at zero)
    """
    G: float = LEAPFROG_G
    softening: float = DEFAULT_SOFTENING
    dt: float = LEAPFROG_DT
    merge_distance: float = MERGE_DISTANCE
    anchor_id: Optional[str] = None


def compute_accelerations(bodies: Sequence[Body], G: float,
                          softening: float) -> List[Tuple[float, float]]:
    """
    Compute gravitational accelerations for all bodies.

    For each body i:

        a_i = sum_j G * m_j * r_ij / (|r_ij|^2 + eps^2)^(3/2)

    where r_ij = (x_j - x_i, y_j - y_i). Self-interaction is skipped.

    Returns:
        List of (ax, ay), same order as the input.
    """
    n = len(bodies)
    accelerations = [(0.0, 0.0) for _ in range(n)]
    eps_squared = softening * softening

    for i in range(n):
        ax_total, ay_total = 0.0, 0.0
        xi, yi = bodies[i].position

        for j in range(n):
            if i == j:
                continue

            xj, yj = bodies[j].position
            dx = xj - xi
            dy = yj - yi

            r_squared_soft = dx * dx + dy * dy + eps_squared
            if r_squared_soft == 0:
                # coincident bodies with no softening
                continue
            inv_r_cubed = 1.0 / (r_squared_soft * math.sqrt(r_squared_soft))

            k = G * bodies[j].mass * inv_r_cubed
            ax_total += dx * k
            ay_total += dy * k

        accelerations[i] = (ax_total, ay_total)

    return accelerations


def _half_kick(bodies: Sequence[Body], accelerations, half_dt: float,
               anchor_id: Optional[str]) -> List[Body]:
    kicked = []
    for body, acc in zip(bodies, accelerations):
        if anchor_id is not None and body.id == anchor_id:
            kicked.append(replace(body, velocity=(0.0, 0.0)))
        else:
            kicked.append(replace(body, velocity=vec_add(body.velocity, vec_scale(acc, half_dt))))
    return kicked


def leapfrog_step(bodies: Sequence[Body], params: LeapfrogParams) -> List[Body]:
    """
    Perform one kick-drift-kick step followed by the merge pass.

    Workflow:
    1) half kick with accelerations at the current positions
    2) drift every body except the anchor by v*dt
    3) half kick with accelerations at the drifted positions
    4) merge bodies within params.merge_distance

    Returns:
        New list of Body snapshots; may be shorter than the input after merges.
    """
    if not bodies:
        return []

    half_dt = params.dt * 0.5
    anchor_id = params.anchor_id

    acc = compute_accelerations(bodies, params.G, params.softening)
    kicked = _half_kick(bodies, acc, half_dt, anchor_id)

    drifted = []
    for body in kicked:
        if anchor_id is not None and body.id == anchor_id:
            drifted.append(body)
        else:
            drifted.append(replace(body, position=vec_add(body.position, vec_scale(body.velocity, params.dt))))

    acc = compute_accelerations(drifted, params.G, params.softening)
    out = _half_kick(drifted, acc, half_dt, anchor_id)

    merged = merge_close_bodies(out, params.merge_distance)
    if anchor_id is not None:
        # an anchor that absorbed a lighter body stays pinned
        merged = [replace(b, velocity=(0.0, 0.0)) if b.id == anchor_id else b for b in merged]
    return merged


def circular_orbit_velocity(body: Body, anchor: Body, G: float) -> Tuple[float, float]:
    """
    Velocity for a circular orbit of body around anchor.

    For a circular orbit, gravity supplies exactly the centripetal force:
    G * M / r = v^2 / r, therefore v = sqrt(G * M / r). The direction is the
    anchor-relative radius rotated +90 degrees (counter-clockwise orbit).
    r is floored at 1 for the speed only; the direction uses the true distance.
    A body sitting exactly on the anchor has no direction and gets (0, 0).
    """
    rel = vec_sub(body.position, anchor.position)
    d = math.hypot(rel[0], rel[1])
    if d == 0:
        return (0.0, 0.0)

    v = math.sqrt(G * anchor.mass / max(1.0, d))
    return vec_scale(vec_perp(rel), v / d)
