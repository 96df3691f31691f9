import math
import random
from dataclasses import replace

import pytest

from stargraph.constants import MAX_SPEED
from stargraph.data_models import Body, StarGraph
from stargraph.physics import leapfrog_step
from stargraph.simulation import EulerMode, OrbitMode, PhysicsMode, SimulationController


@pytest.fixture
def sim():
    return SimulationController(rng=random.Random(42))


def positions(sim):
    return {b.id: b.position for b in sim.bodies}


def test_starts_in_orbit_mode_with_default_system(sim):
    assert isinstance(sim.mode, OrbitMode)
    assert len(sim.bodies) == 5
    assert sim.stepper.params_for("2").omega == pytest.approx(2 * math.pi / 5.0)


def test_tick_moves_planets_not_sun(sim):
    before = positions(sim)
    assert sim.tick(0.1)
    after = positions(sim)
    assert after["1"] == before["1"]
    assert after["2"] != before["2"]


def test_zero_speed_and_zero_dt_do_nothing(sim):
    before = positions(sim)
    assert not sim.tick(0.0)
    sim.set_speed(0.0)
    assert not sim.tick(0.1)
    assert positions(sim) == before


def test_speed_clamped(sim):
    sim.set_speed(-3)
    assert sim.speed == 0.0
    sim.set_speed(1000)
    assert sim.speed == MAX_SPEED


def test_drag_pauses_and_refits_single_orbit(sim):
    omegas = {i: sim.stepper.params_for(i).omega for i in ("2", "4", "5")}
    assert sim.begin_drag("3")
    sim.drag_to((0.0, 300.0))

    assert not sim.tick(0.1)
    assert sim.graph.get_star("3").position == (0.0, 300.0)

    sim.end_drag()
    assert not sim.dragging
    assert sim.stepper.params_for("3").radius == pytest.approx(300.0)
    for i, omega in omegas.items():
        assert sim.stepper.params_for(i).omega == omega
    assert sim.tick(0.1)


def test_begin_drag_unknown_star(sim):
    assert not sim.begin_drag("nope")
    assert not sim.dragging


def test_physics_mode_seeds_circular_velocities(sim):
    sim.set_mode("physics")
    assert isinstance(sim.mode, PhysicsMode)
    sun = sim.anchor()
    assert sun.velocity == (0.0, 0.0)
    alpha = sim.graph.get_star("2")
    assert alpha.velocity[0] * alpha.x + alpha.velocity[1] * alpha.y == pytest.approx(0.0, abs=1e-9)
    expected = math.sqrt(sim.leapfrog_params.G * sun.mass / 140.0)
    assert math.hypot(*alpha.velocity) == pytest.approx(expected)

    sim.tick(1 / 60)
    assert sim.anchor().position == (0.0, 0.0)


def test_physics_substeps_follow_speed(sim):
    sim.set_mode("physics")
    bodies = list(sim.bodies)
    params = sim.leapfrog_params
    expected = bodies
    for _ in range(3):
        expected = leapfrog_step(expected, replace(params, dt=params.dt * 2.5 / 3))

    sim.set_speed(2.5)
    sim.tick(1 / 60)
    for got, want in zip(sim.bodies, expected):
        assert got.position == pytest.approx(want.position)


def test_euler_mode_tracks_state(sim):
    sim.set_mode("euler")
    before = positions(sim)
    sim.tick(1 / 60)
    assert isinstance(sim.mode, EulerMode)
    assert set(sim.mode.state.positions) == set(before)
    assert positions(sim)["2"] != before["2"]


def test_unknown_mode_rejected(sim):
    with pytest.raises(ValueError):
        sim.set_mode("warp")


def test_add_star_links_to_sun_and_rebuilds_orbits(sim):
    star = sim.add_star()
    assert star.id == "6"
    assert sim.graph.has_link("1", "6")
    assert len(sim.bodies) == 6

    sim.tick(0.05)
    assert sim.stepper.params_for("6") is not None
    assert sim.add_star().id == "7"


def test_add_star_in_physics_mode_gets_orbit_velocity(sim):
    sim.set_mode("physics")
    star = sim.add_star()
    assert math.hypot(*star.velocity) > 0


def test_add_star_without_sun():
    sim = SimulationController(graph=StarGraph(stars=[Body("9", "Lone", 5.0, (0.0, 0.0))]))
    assert sim.add_star() is None


def test_remove_star(sim):
    assert not sim.remove_star("1")
    assert sim.remove_star("2")
    assert sim.graph.get_star("2") is None
    assert not any("2" in (l.source, l.target) for l in sim.graph.links)
    assert sim.tick(0.05)


def test_reset_restores_default_system(sim):
    sim.set_mode("physics")
    sim.add_star()
    sim.find_route("2", "3")
    sim.reset()
    assert len(sim.bodies) == 5
    assert sim.route is None
    assert sim.mode_name == "physics"


def test_route_avoids_sun_when_penalised(sim):
    route = sim.find_route("2", "5")
    assert route.path == ["2", "3", "5"]
    assert sim.route is route


def test_route_forbidden_through_sun(sim):
    sim.forbid_through_anchor = True
    route = sim.find_route("2", "5")
    assert not route.found
    assert sim.find_route("2", "3").path == ["2", "3"]


def test_route_summary_marks_penalised_and_blocked_routes(sim):
    assert sim.route_summary() == "Route: none"
    sim.find_route("2", "3")
    assert sim.route_summary() == "Route: 2 -> 3  cost %.1f" % sim.route.cost
    sim.find_route("2", "5")
    assert "penalised" in sim.route_summary()
    sim.forbid_through_anchor = True
    sim.find_route("2", "5")
    assert "blocked" in sim.route_summary()


def test_add_link_is_idempotent_and_invalidates_orbits(sim):
    assert sim.stepper.params_for("2") is not None
    assert sim.add_link("2", "4")
    assert sim.stepper.params_for("2") is None
    sim.tick(0.01)
    assert sim.stepper.params_for("2") is not None

    count = len(sim.graph.links)
    assert not sim.add_link("4", "2")
    assert len(sim.graph.links) == count
    assert sim.stepper.params_for("2") is not None


def test_add_link_rejects_unknown_and_self(sim):
    assert not sim.add_link("2", "99")
    assert not sim.add_link("2", "2")


def test_remove_link_invalidates_orbits(sim):
    assert sim.remove_link("3", "2")
    assert not sim.graph.has_link("2", "3")
    assert sim.stepper.params_for("2") is None
    assert not sim.remove_link("2", "3")


def test_set_mass(sim):
    assert sim.set_mass("3", 75.0)
    assert sim.graph.get_star("3").mass == 75.0
    assert sim.stepper.params_for("3") is None
    sim.tick(0.01)
    assert sim.stepper.params_for("3") is not None


def test_set_mass_rejects_bad_input(sim):
    assert not sim.set_mass("3", 0.0)
    assert not sim.set_mass("3", -5.0)
    assert not sim.set_mass("99", 10.0)
    assert sim.graph.get_star("3").mass == 30.0
    assert sim.stepper.params_for("3") is not None
