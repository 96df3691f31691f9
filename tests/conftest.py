import pytest

from stargraph.data_models import Body, Link


@pytest.fixture
def scenario_bodies():
    """Sun at the origin plus four stars; "2" is the innermost at r = 150."""
    return [
        Body("1", "Sun", 100.0, (0.0, 0.0)),
        Body("2", "Alpha", 50.0, (150.0, 0.0)),
        Body("3", "Beta", 30.0, (0.0, 200.0)),
        Body("4", "Gamma", 40.0, (-250.0, 0.0)),
        Body("5", "Delta", 25.0, (0.0, -300.0)),
    ]


@pytest.fixture
def scenario_links():
    return [
        Link("1", "2", 150.0),
        Link("1", "3", 150.0),
        Link("1", "4", 150.0),
        Link("2", "3", 100.0),
        Link("3", "5", 100.0),
    ]


@pytest.fixture
def square():
    """Unit-free square a-b-c-d with a diagonal a-c."""
    bodies = [
        Body("a", "A", 1.0, (0.0, 0.0)),
        Body("b", "B", 1.0, (10.0, 0.0)),
        Body("c", "C", 1.0, (10.0, 10.0)),
        Body("d", "D", 1.0, (0.0, 10.0)),
    ]
    links = [Link("a", "b"), Link("b", "c"), Link("c", "d"), Link("d", "a"), Link("a", "c")]
    return bodies, links
