import math

import pytest

from stargraph.data_models import Body, Link
from stargraph.pathfinding import PathOptions, build_adjacency, shortest_path


@pytest.fixture
def sun_crossing():
    """p and q sit on opposite sides of the sun; r offers a detour."""
    bodies = [
        Body("s", "Sun", 100.0, (0.0, 0.0)),
        Body("p", "P", 1.0, (-100.0, 0.0)),
        Body("q", "Q", 1.0, (100.0, 0.0)),
        Body("r", "R", 1.0, (0.0, 100.0)),
    ]
    links = [Link("p", "q"), Link("p", "r"), Link("r", "q")]
    return bodies, links


def _linked(links, a, b):
    return any({l.source, l.target} == {a, b} for l in links)


def test_direct_diagonal_is_cheapest(square):
    bodies, links = square
    result = shortest_path(bodies, links, "a", "c")
    assert result.path == ["a", "c"]
    assert result.cost == pytest.approx(math.sqrt(200))
    assert result.found


def test_power_exponent_prefers_short_hops(square):
    bodies, links = square
    result = shortest_path(bodies, links, "a", "c", PathOptions(power_exponent=3))
    assert result.cost == pytest.approx(2000.0)
    # equal-cost detours settle in body-list order
    assert result.path == ["a", "b", "c"]


def test_cost_is_symmetric(square):
    bodies, links = square
    for start, goal in [("a", "c"), ("b", "d"), ("d", "b"), ("a", "b")]:
        there = shortest_path(bodies, links, start, goal)
        back = shortest_path(bodies, links, goal, start)
        assert there.cost == pytest.approx(back.cost)
        reversed_path = list(reversed(there.path))
        assert reversed_path[0] == goal and reversed_path[-1] == start
        for u, v in zip(reversed_path, reversed_path[1:]):
            assert _linked(links, u, v)


def test_link_distance_hint_ignored():
    bodies = [Body("a", "A", 1.0, (0.0, 0.0)), Body("b", "B", 1.0, (3.0, 4.0))]
    result = shortest_path(bodies, [Link("a", "b", 999.0)], "a", "b")
    assert result.cost == pytest.approx(5.0)


def test_dangling_and_duplicate_links(square):
    bodies, links = square
    links = links + [Link("a", "ghost"), Link("c", "a"), Link("b", "b")]
    result = shortest_path(bodies, links, "a", "c")
    assert result.path == ["a", "c"]


def test_unreachable_goal(square):
    bodies, links = square
    bodies = bodies + [Body("e", "E", 1.0, (50.0, 50.0))]
    result = shortest_path(bodies, links, "a", "e")
    assert result.path == []
    assert result.cost == math.inf
    assert not result.found


def test_unknown_endpoints(square):
    bodies, links = square
    assert shortest_path(bodies, links, "zz", "a").cost == math.inf
    assert shortest_path(bodies, links, "a", "zz").path == []


def test_start_equals_goal(square):
    bodies, links = square
    result = shortest_path(bodies, links, "b", "b")
    assert result.path == ["b"]
    assert result.cost == 0.0


def test_forbidden_edge_never_used(sun_crossing):
    bodies, links = sun_crossing
    options = PathOptions(anchor_id="s", exclusion_radius=20.0, forbid_through_anchor=True)
    result = shortest_path(bodies, links, "p", "q", options)
    assert result.path == ["p", "r", "q"]
    assert result.cost == pytest.approx(2 * math.sqrt(2) * 100)


def test_forbidden_edge_without_alternative_is_unreachable(sun_crossing):
    bodies, _ = sun_crossing
    options = PathOptions(anchor_id="s", exclusion_radius=20.0, forbid_through_anchor=True)
    result = shortest_path(bodies, [Link("p", "q")], "p", "q", options)
    assert result.path == []
    assert result.cost == math.inf


def test_large_penalty_prefers_detour(sun_crossing):
    bodies, links = sun_crossing
    options = PathOptions(anchor_id="s", exclusion_radius=20.0, penalty=1000.0)
    result = shortest_path(bodies, links, "p", "q", options)
    assert result.path == ["p", "r", "q"]


def test_small_penalty_keeps_direct_edge(sun_crossing):
    bodies, links = sun_crossing
    options = PathOptions(anchor_id="s", exclusion_radius=20.0, penalty=50.0)
    result = shortest_path(bodies, links, "p", "q", options)
    assert result.path == ["p", "q"]
    assert result.cost == pytest.approx(250.0)


def test_edge_clear_of_zone_unpenalised(sun_crossing):
    bodies, links = sun_crossing
    options = PathOptions(anchor_id="s", exclusion_radius=20.0, penalty=50.0)
    adj = build_adjacency(bodies, links, options)
    assert dict(adj["r"])["q"] == pytest.approx(math.sqrt(2) * 100)


def test_missing_anchor_disables_exclusion(sun_crossing):
    bodies, links = sun_crossing
    options = PathOptions(anchor_id="nope", exclusion_radius=20.0, forbid_through_anchor=True)
    assert shortest_path(bodies, links, "p", "q", options).path == ["p", "q"]
