#!/usr/bin/env python3
"""
Euler Gravity Engine

A first-order explicit integrator kept as the simple alternative to the leapfrog
engine. State lives in id-keyed maps so the controller can diff or roll back
between steps; a step never mutates the state it was given.

Numerical notes
- The force law floors separation at EULER_MIN_DIST instead of softening, so
  close encounters are capped hard rather than smoothed.
- Velocities are multiplied by a damping factor each step. This bleeds energy
  slowly and keeps the explicit scheme from blowing up; it is not a drag model.
"""
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Sequence, Tuple

from .constants import EULER_DAMPING, EULER_DT, EULER_G, EULER_MIN_DIST
from .data_models import Body


@dataclass
class PhysicsState:
    positions: Dict[str, Tuple[float, float]] = field(default_factory=dict)
    velocities: Dict[str, Tuple[float, float]] = field(default_factory=dict)

    def apply(self, bodies: Sequence[Body]) -> List[Body]:
        """Return body snapshots carrying this state's positions and velocities."""
        out = []
        for b in bodies:
            if b.id in self.positions:
                b = replace(b, position=self.positions[b.id], velocity=self.velocities[b.id])
            out.append(b)
        return out


class EulerGravityEngine:
    """
    Pairwise gravity with explicit Euler integration and velocity damping.

    The force between bodies i and j is

        F = G * m_i * m_j / max(r, min_dist)^2

    applied along (p_j - p_i) / max(r, min_dist). Beyond min_dist that is the unit
    vector; inside it the force fades to zero as the bodies coincide.
    """

    def __init__(self, G: float = EULER_G, dt: float = EULER_DT,
                 damping: float = EULER_DAMPING, min_dist: float = EULER_MIN_DIST):
        self.G = float(G)
        self.dt = float(dt)
        self.damping = float(damping)
        self.min_dist = float(min_dist)

    def set_gravity(self, G: float) -> None:
        self.G = float(G)

    def set_time_step(self, dt: float) -> None:
        self.dt = float(dt)

    def set_damping(self, damping: float) -> None:
        self.damping = float(damping)

    def _force(self, b1: Body, b2: Body, p1, p2) -> Tuple[float, float]:
        dx = p2[0] - p1[0]
        dy = p2[1] - p1[1]
        dist = (dx * dx + dy * dy) ** 0.5

        effective = max(dist, self.min_dist)
        magnitude = self.G * b1.mass * b2.mass / (effective * effective)
        return (dx / effective * magnitude, dy / effective * magnitude)

    def step(self, bodies: Sequence[Body], state: Optional[PhysicsState] = None,
             dt: Optional[float] = None) -> PhysicsState:
        """
        Advance one step of self.dt, or of dt when given.

        Bodies not yet in the state are seeded from their own position and
        velocity. Ids in the state that no longer have a body are dropped.
        """
        state = state or PhysicsState()
        positions: Dict[str, Tuple[float, float]] = {}
        velocities: Dict[str, Tuple[float, float]] = {}

        for b in bodies:
            if b.id in state.positions:
                positions[b.id] = state.positions[b.id]
                velocities[b.id] = state.velocities.get(b.id, (0.0, 0.0))
            else:
                positions[b.id] = tuple(b.position or (0.0, 0.0))
                velocities[b.id] = tuple(b.velocity or (0.0, 0.0))

        accelerations = {}
        for b1 in bodies:
            fx_total, fy_total = 0.0, 0.0
            p1 = positions[b1.id]
            for b2 in bodies:
                if b1.id == b2.id:
                    continue
                fx, fy = self._force(b1, b2, p1, positions[b2.id])
                fx_total += fx
                fy_total += fy
            accelerations[b1.id] = (fx_total / b1.mass, fy_total / b1.mass)

        dt = self.dt if dt is None else dt
        for b in bodies:
            vx, vy = velocities[b.id]
            ax, ay = accelerations[b.id]

            vx = (vx + ax * dt) * self.damping
            vy = (vy + ay * dt) * self.damping

            x, y = positions[b.id]
            velocities[b.id] = (vx, vy)
            positions[b.id] = (x + vx * dt, y + vy * dt)

        return PhysicsState(positions=positions, velocities=velocities)
