import math
import random

import pytest

from stargraph.constants import SPAWN_MASS_RANGE, SUN_ID
from stargraph.data_models import StarGraph
from stargraph.presets import generate_initial_graph, layout_on_orbits, make_spawn_star, pick_spawn_position


def test_initial_graph():
    graph = generate_initial_graph()
    assert [s.id for s in graph.stars] == ["1", "2", "3", "4", "5"]
    assert graph.get_star(SUN_ID).mass == 100.0
    assert len(graph.links) == 5


def test_layout_places_stars_on_concentric_orbits():
    graph = layout_on_orbits(generate_initial_graph())
    sun = graph.get_star(SUN_ID)
    radii = [math.hypot(s.x - sun.x, s.y - sun.y) for s in graph.stars[1:]]
    assert radii == pytest.approx([140.0, 250.0, 360.0, 470.0])
    for s in graph.stars[1:]:
        assert graph.has_link(SUN_ID, s.id)
    # only 1-5 was missing
    assert len(graph.links) == 6


def test_layout_without_sun_is_unchanged():
    graph = StarGraph()
    assert layout_on_orbits(graph) is graph


def test_spawn_on_next_free_ring():
    graph = layout_on_orbits(generate_initial_graph())
    x, y, r = pick_spawn_position(graph, rng=random.Random(3))
    assert r == pytest.approx(140.0 + 5 * 110.0)
    assert math.hypot(x, y) == pytest.approx(r)


def test_spawn_without_sun():
    assert pick_spawn_position(StarGraph()) == (0.0, 0.0, 200.0)


def test_spawned_star():
    graph = layout_on_orbits(generate_initial_graph())
    body, r = make_spawn_star(graph, "6", rng=random.Random(7))
    assert body.id == "6"
    assert body.name == "Star 6"
    assert SPAWN_MASS_RANGE[0] <= body.mass <= SPAWN_MASS_RANGE[1]
    assert math.hypot(*body.position) == pytest.approx(r)
