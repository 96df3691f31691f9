#!/usr/bin/env python3
"""
Angular orbit stepper: circular orbits around the anchor without forces.

Each non-anchor body keeps a fixed radius and sweeps its angle at

    omega(r) = base_omega * (min_r0 / max(1, r)) ** 1.5

which mimics Kepler's third law (period ~ r^1.5). The closest body at rebuild
time completes one revolution every base_period seconds at speed 1.

min_r0 is captured on rebuild and held until the next one. Dragging a single
body re-fits only that body against the held min_r0, so other bodies keep their
angular rates.
"""
import logging
import math
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Sequence

from .constants import BASE_ORBIT_PERIOD
from .data_models import Body

logger = logging.getLogger(__name__)


@dataclass
class OrbitParams:
    radius: float
    theta: float
    omega: float


def _find(bodies: Sequence[Body], body_id: Optional[str]) -> Optional[Body]:
    for b in bodies:
        if b.id == body_id:
            return b
    return None


class AngularOrbitStepper:
    """Cached polar state per body, relative to a fixed anchor."""

    def __init__(self, anchor_id: str, base_period: float = BASE_ORBIT_PERIOD):
        self.anchor_id = anchor_id
        self.base_period = float(base_period)
        self.base_omega = 2.0 * math.pi / self.base_period
        self.min_r0: Optional[float] = None
        self.orbits: Dict[str, OrbitParams] = {}
        self._body_count: Optional[int] = None

    def omega_for(self, radius: float) -> float:
        if self.min_r0 is None:
            return 0.0
        return self.base_omega * (self.min_r0 / max(1.0, radius)) ** 1.5

    def params_for(self, body_id: str) -> Optional[OrbitParams]:
        return self.orbits.get(body_id)

    def invalidate(self) -> None:
        self.orbits = {}
        self.min_r0 = None
        self._body_count = None

    def rebuild(self, bodies: Sequence[Body]) -> None:
        """Recalibrate min_r0 and every body's orbit from current positions."""
        self.invalidate()
        self._body_count = len(bodies)

        anchor = _find(bodies, self.anchor_id)
        if anchor is None:
            logger.debug("Anchor %s missing; orbit state left empty", self.anchor_id)
            return

        others = [b for b in bodies if b.id != self.anchor_id]
        if not others:
            return

        ax, ay = anchor.position
        radii = {b.id: math.hypot(b.x - ax, b.y - ay) for b in others}
        self.min_r0 = max(1.0, min(radii.values()))

        for b in others:
            r = radii[b.id]
            self.orbits[b.id] = OrbitParams(
                radius=r,
                theta=math.atan2(b.y - ay, b.x - ax),
                omega=self.omega_for(r),
            )
        logger.debug("Rebuilt %d orbits (min_r0=%.2f)", len(self.orbits), self.min_r0)

    def sync(self, bodies: Sequence[Body]) -> None:
        """Rebuild when the body count changed since the last rebuild."""
        if self._body_count != len(bodies):
            self.rebuild(bodies)

    def update_body(self, body: Body, anchor: Optional[Body]) -> None:
        """Re-fit one body after a drag, keeping the calibrated min_r0."""
        if anchor is None or body.id == self.anchor_id or self.min_r0 is None:
            return
        dx = body.x - anchor.x
        dy = body.y - anchor.y
        r = math.hypot(dx, dy)
        self.orbits[body.id] = OrbitParams(radius=r, theta=math.atan2(dy, dx), omega=self.omega_for(r))

    def step(self, bodies: Sequence[Body], dt: float, speed: float = 1.0) -> List[Body]:
        """Advance every cached orbit by omega * dt * speed and place the bodies."""
        anchor = _find(bodies, self.anchor_id)
        if anchor is None:
            return list(bodies)

        ax, ay = anchor.position
        out = []
        for b in bodies:
            orbit = self.orbits.get(b.id)
            if b.id == self.anchor_id or orbit is None:
                out.append(b)
                continue
            orbit.theta += orbit.omega * dt * speed
            out.append(replace(b, position=(ax + orbit.radius * math.cos(orbit.theta),
                                            ay + orbit.radius * math.sin(orbit.theta))))
        return out
