#!/usr/bin/env python3
"""
Simulation controller: the seam between the viewer and the engines.

The controller owns the canonical StarGraph and exactly one motion mode:

- OrbitMode: the angular orbit stepper (cheap, always stable)
- PhysicsMode: leapfrog gravity with merging and a pinned sun
- EulerMode: damped explicit Euler gravity

Each tick advances the active mode only. While a body is being dragged the
tick does nothing, so the dragged body stays under the cursor. Route queries
run against the current snapshot and are independent of the mode.

Everything here runs on the viewer's thread; there is no locking.
"""
import logging
import math
import random
from dataclasses import dataclass, field, replace
from typing import Optional, Union

from .constants import DEFAULT_EXCLUSION_PENALTY, DEFAULT_EXCLUSION_RADIUS, MAX_SPEED, MIN_SPEED, SUN_ID
from .data_models import Body, StarGraph
from .euler import EulerGravityEngine, PhysicsState
from .kepler import AngularOrbitStepper
from .pathfinding import PathOptions, PathResult, shortest_path
from .physics import LeapfrogParams, circular_orbit_velocity, leapfrog_step
from .presets import generate_initial_graph, layout_on_orbits, make_spawn_star
from .vector_utils import clamp, distance

logger = logging.getLogger(__name__)


@dataclass
class OrbitMode:
    stepper: AngularOrbitStepper
    name: str = "orbit"


@dataclass
class PhysicsMode:
    params: LeapfrogParams
    name: str = "physics"


@dataclass
class EulerMode:
    engine: EulerGravityEngine
    state: PhysicsState = field(default_factory=PhysicsState)
    name: str = "euler"


Mode = Union[OrbitMode, PhysicsMode, EulerMode]
MODE_NAMES = ("orbit", "physics", "euler")


class SimulationController:
    """
    Holds the star graph, the active mode and the user-adjustable settings.
    """

    def __init__(self, graph: Optional[StarGraph] = None, anchor_id: str = SUN_ID,
                 rng: Optional[random.Random] = None):
        self.anchor_id = anchor_id
        self.rng = rng or random.Random()
        self.graph = graph if graph is not None else layout_on_orbits(generate_initial_graph(), anchor_id)

        self.speed = 1.0
        self.dragging = False
        self.drag_id: Optional[str] = None

        # Route settings
        self.exclusion_radius = DEFAULT_EXCLUSION_RADIUS
        self.forbid_through_anchor = False
        self.penalty = DEFAULT_EXCLUSION_PENALTY
        self.power_exponent = 1.0
        self.route: Optional[PathResult] = None

        self.leapfrog_params = LeapfrogParams(anchor_id=anchor_id)
        self.euler_engine = EulerGravityEngine()
        self.stepper = AngularOrbitStepper(anchor_id)

        self.mode: Mode = OrbitMode(self.stepper)
        self.stepper.rebuild(self.graph.stars)

    @property
    def bodies(self):
        return self.graph.stars

    @property
    def mode_name(self) -> str:
        return self.mode.name

    def anchor(self) -> Optional[Body]:
        return self.graph.get_star(self.anchor_id)

    def set_speed(self, s: float) -> None:
        self.speed = clamp(float(s), MIN_SPEED, MAX_SPEED)

    def set_mode(self, name: str) -> None:
        """Switch the active engine; the new mode starts from the current snapshot."""
        if name not in MODE_NAMES:
            raise ValueError(f"Unknown mode {name!r}; expected one of {MODE_NAMES}")

        if name == "orbit":
            self.stepper.rebuild(self.graph.stars)
            self.mode = OrbitMode(self.stepper)
        elif name == "physics":
            self._seed_circular_velocities()
            self.mode = PhysicsMode(self.leapfrog_params)
        else:
            self.mode = EulerMode(self.euler_engine)
        logger.info("Switched to %s mode", name)

    def _seed_circular_velocities(self) -> None:
        anchor = self.anchor()
        if anchor is None:
            return
        G = self.leapfrog_params.G
        self.graph.replace_stars([
            b if b.id == self.anchor_id else replace(b, velocity=circular_orbit_velocity(b, anchor, G))
            for b in self.graph.stars
        ])

    def tick(self, dt_real: float) -> bool:
        """
        Advance the active mode by one frame.

        Returns False when nothing moved (dragging, zero speed or no time elapsed).
        """
        if self.dragging or self.speed <= 0 or dt_real <= 0:
            return False

        mode = self.mode
        if isinstance(mode, OrbitMode):
            mode.stepper.sync(self.graph.stars)
            self.graph.replace_stars(mode.stepper.step(self.graph.stars, dt_real, self.speed))
        elif isinstance(mode, PhysicsMode):
            steps = max(1, math.ceil(self.speed))
            params = replace(mode.params, dt=mode.params.dt * self.speed / steps)
            bodies = self.graph.stars
            before = len(bodies)
            for _ in range(steps):
                bodies = leapfrog_step(bodies, params)
            if len(bodies) != before:
                logger.info("%d bodies merged this tick", before - len(bodies))
            self.graph.replace_stars(bodies)
        else:
            steps = max(1, math.ceil(self.speed))
            dt = mode.engine.dt * self.speed / steps
            state = mode.state
            for _ in range(steps):
                state = mode.engine.step(self.graph.stars, state, dt=dt)
            mode.state = state
            self.graph.replace_stars(state.apply(self.graph.stars))
        return True

    def _next_star_id(self) -> str:
        used = set()
        for s in self.graph.stars:
            if s.id.isdigit():
                used.add(int(s.id))
        return str(max(used, default=0) + 1)

    def add_star(self) -> Optional[Body]:
        """Spawn a star on a fresh outer orbit and link it to the sun."""
        anchor = self.anchor()
        if anchor is None:
            return None

        body, r = make_spawn_star(self.graph, self._next_star_id(), self.anchor_id, self.rng)
        if isinstance(self.mode, PhysicsMode):
            body = replace(body, velocity=circular_orbit_velocity(body, anchor, self.leapfrog_params.G))
        self.graph.add_star(body)
        self.graph.add_link(self.anchor_id, body.id, r)
        logger.info("Added %s (%s) on orbit r=%.1f", body.name, body.id, r)
        return body

    def remove_star(self, star_id: str) -> bool:
        if star_id == self.anchor_id or self.graph.get_star(star_id) is None:
            return False
        self.graph.remove_star(star_id)
        self.stepper.invalidate()
        return True

    def set_mass(self, star_id: str, mass: float) -> bool:
        """Change a star's mass; refuses unknown ids and non-positive masses."""
        if mass <= 0 or self.graph.get_star(star_id) is None:
            return False
        self.graph.replace_stars([replace(b, mass=float(mass)) if b.id == star_id else b
                                  for b in self.graph.stars])
        self.stepper.invalidate()
        logger.info("Mass of %s set to %g", star_id, mass)
        return True

    def add_link(self, a: str, b: str) -> bool:
        """Link two existing stars; adding an existing link is a no-op."""
        sa, sb = self.graph.get_star(a), self.graph.get_star(b)
        if sa is None or sb is None:
            return False
        if not self.graph.add_link(a, b, distance(sa.position, sb.position)):
            return False
        self.stepper.invalidate()
        return True

    def remove_link(self, a: str, b: str) -> bool:
        if not self.graph.remove_link(a, b):
            return False
        self.stepper.invalidate()
        return True

    def reset(self) -> None:
        """Restore the default system and re-enter the current mode."""
        self.graph = layout_on_orbits(generate_initial_graph(), self.anchor_id)
        self.route = None
        self.dragging = False
        self.drag_id = None
        self.set_mode(self.mode.name)
        logger.info("System reset (%d stars)", len(self.graph.stars))

    def begin_drag(self, star_id: str) -> bool:
        if self.graph.get_star(star_id) is None:
            return False
        self.dragging = True
        self.drag_id = star_id
        return True

    def drag_to(self, position) -> None:
        if not self.dragging or self.drag_id is None:
            return
        self.graph.replace_stars([
            replace(b, position=(float(position[0]), float(position[1]))) if b.id == self.drag_id else b
            for b in self.graph.stars
        ])

    def end_drag(self) -> None:
        """Drop the dragged body and fit it back into the active mode."""
        star_id = self.drag_id
        self.dragging = False
        self.drag_id = None
        body = self.graph.get_star(star_id) if star_id is not None else None
        if body is None:
            return

        anchor = self.anchor()
        mode = self.mode
        if isinstance(mode, OrbitMode):
            mode.stepper.update_body(body, anchor)
        elif isinstance(mode, PhysicsMode):
            if anchor is not None and body.id != self.anchor_id:
                vel = circular_orbit_velocity(body, anchor, mode.params.G)
                self.graph.replace_stars([replace(b, velocity=vel) if b.id == body.id else b
                                          for b in self.graph.stars])
        else:
            positions = dict(mode.state.positions)
            velocities = dict(mode.state.velocities)
            positions.pop(body.id, None)
            velocities.pop(body.id, None)
            mode.state = PhysicsState(positions, velocities)

    def path_options(self) -> PathOptions:
        return PathOptions(
            anchor_id=self.anchor_id,
            exclusion_radius=self.exclusion_radius,
            forbid_through_anchor=self.forbid_through_anchor,
            penalty=self.penalty,
            power_exponent=self.power_exponent,
        )

    def find_route(self, start_id: str, goal_id: str) -> PathResult:
        self.route = shortest_path(self.graph.stars, self.graph.links, start_id, goal_id, self.path_options())
        if self.route.found:
            logger.info("Route %s -> %s: %s (cost %.1f)", start_id, goal_id,
                        " -> ".join(self.route.path), self.route.cost)
        else:
            logger.info("No route %s -> %s", start_id, goal_id)
        return self.route

    def route_summary(self) -> str:
        """One-line description of the last route for the HUD."""
        route = self.route
        if route is None:
            return "Route: none"
        if not route.found:
            if self.forbid_through_anchor:
                return "Route: unreachable (links within the sun zone are blocked, F to allow)"
            return "Route: unreachable"
        text = f"Route: {' -> '.join(route.path)}  cost {route.cost:.1f}"
        if route.cost >= self.penalty:
            text += "  (crosses the sun zone, penalised)"
        return text
