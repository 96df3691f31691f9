#!/usr/bin/env python3
"""
Built-in starting system and spawning helpers.

The default system is a sun (id "1", mass 100) and four stars. layout_on_orbits
spreads the non-sun stars over concentric orbits

    r_i = LAYOUT_BASE_RADIUS + i * LAYOUT_RADIUS_STEP

at evenly spaced angles, and links every star to the sun. New stars are spawned
on the next free ring of the same grid.
"""
import math
import random
from typing import Optional, Tuple

from .constants import LAYOUT_BASE_RADIUS, LAYOUT_RADIUS_STEP, SPAWN_MASS_RANGE, SUN_ID
from .data_models import Body, StarGraph
from .vector_utils import distance

STAR_COLORS = [
    (253, 184, 19),
    (255, 107, 107),
    (78, 205, 196),
    (149, 225, 211),
    (243, 129, 129),
    (170, 150, 218),
    (252, 186, 211),
]


def generate_initial_graph() -> StarGraph:
    """Sun plus four stars and five links."""
    graph = StarGraph()
    graph.add_star(Body(SUN_ID, "Sun", 100.0, (0.0, 0.0), color=(255, 215, 0)))
    graph.add_star(Body("2", "Alpha", 50.0, (100.0, 50.0), color=(255, 107, 107)))
    graph.add_star(Body("3", "Beta", 30.0, (-80.0, 80.0), color=(78, 205, 196)))
    graph.add_star(Body("4", "Gamma", 40.0, (50.0, -100.0), color=(149, 225, 211)))
    graph.add_star(Body("5", "Delta", 25.0, (-100.0, -50.0), color=(243, 129, 129)))

    graph.add_link("1", "2", 150.0)
    graph.add_link("1", "3", 150.0)
    graph.add_link("1", "4", 150.0)
    graph.add_link("2", "3", 100.0)
    graph.add_link("3", "5", 100.0)
    return graph


def layout_on_orbits(graph: StarGraph, sun_id: str = SUN_ID) -> StarGraph:
    """
    Return a new graph with the non-sun stars placed on concentric orbits.

    Every star gets a link to the sun if it does not have one. Without a sun the
    graph is returned unchanged.
    """
    sun = graph.get_star(sun_id)
    if sun is None:
        return graph

    others = [s for s in graph.stars if s.id != sun_id]
    out = StarGraph(stars=[sun], links=list(graph.links))
    count = max(1, len(others))
    for i, s in enumerate(others):
        r = LAYOUT_BASE_RADIUS + i * LAYOUT_RADIUS_STEP
        angle = (i / count) * math.pi * 2
        out.add_star(Body(s.id, s.name, s.mass,
                          (sun.x + math.cos(angle) * r, sun.y + math.sin(angle) * r),
                          (0.0, 0.0), s.color))

    for s in out.stars[1:]:
        out.add_link(sun_id, s.id, distance(sun.position, s.position))
    return out


def pick_spawn_position(graph: StarGraph, sun_id: str = SUN_ID,
                        rng: Optional[random.Random] = None) -> Tuple[float, float, float]:
    """
    Pick (x, y, r) on the first grid ring beyond the outermost star.

    The angle is random. Without a sun the spawn is (0, 0) with r = 200.
    """
    rng = rng or random
    sun = graph.get_star(sun_id)
    if sun is None:
        return (0.0, 0.0, 200.0)

    radii = sorted(distance(s.position, sun.position) for s in graph.stars if s.id != sun_id)
    outermost = radii[-1] if radii else LAYOUT_BASE_RADIUS - LAYOUT_RADIUS_STEP
    k = max(0, math.floor(outermost / LAYOUT_RADIUS_STEP))
    r = LAYOUT_BASE_RADIUS + (k + 1) * LAYOUT_RADIUS_STEP

    angle = rng.random() * math.pi * 2
    return (sun.x + math.cos(angle) * r, sun.y + math.sin(angle) * r, r)


def make_spawn_star(graph: StarGraph, star_id: str, sun_id: str = SUN_ID,
                    rng: Optional[random.Random] = None) -> Tuple[Body, float]:
    """Build a new star on a fresh orbit; returns (body, orbit radius)."""
    rng = rng or random
    x, y, r = pick_spawn_position(graph, sun_id, rng)
    lo, hi = SPAWN_MASS_RANGE
    body = Body(
        id=star_id,
        name=f"Star {len(graph.stars) + 1}",
        mass=lo + rng.random() * (hi - lo),
        position=(x, y),
        color=rng.choice(STAR_COLORS),
    )
    return body, r
