import math

import pytest

from planbench.environment import ContinuousEnvironment, GridEnvironment
from planbench.metrics import MetricsCollector
from planbench.polygon import Polygon
from planbench.state import Path, State


def _path(points, **kw):
    p = Path(states=[State(x, y, **kw) for x, y in points], success=True)
    p.compute_length()
    return p


def test_copies_run_fields():
    path = _path([(0, 0), (3, 4)])
    m = MetricsCollector().collect(path, 12.5, 7)
    assert m.computation_time_ms == 12.5
    assert m.nodes_expanded == 7
    assert m.success is True
    assert m.path_length == path.length


def test_straight_path_is_smooth_and_costs_no_energy():
    m = MetricsCollector().collect(_path([(0, 0), (1, 1), (2, 2), (3, 3)]), 1.0, 1)
    assert m.smoothness == pytest.approx(0.0)
    assert m.energy == pytest.approx(0.0)


def test_turn_direction_does_not_matter():
    c = MetricsCollector()
    left = c.collect(_path([(0, 0), (1, 0), (1, 1)]), 0.0, 0)
    right = c.collect(_path([(0, 0), (1, 0), (1, -1)]), 0.0, 0)
    assert left.smoothness == pytest.approx(right.smoothness)
    assert left.energy == pytest.approx(right.energy)
    assert left.smoothness == pytest.approx(math.pi / 2)


def test_energy_shrinks_with_scale():
    c = MetricsCollector()
    small = c.collect(_path([(0, 0), (1, 0), (1, 1)]), 0.0, 0)
    big = c.collect(_path([(0, 0), (2, 0), (2, 2)]), 0.0, 0)
    assert big.smoothness == pytest.approx(small.smoothness)
    assert big.energy == pytest.approx(small.energy / 2)


def test_headings_used_when_present():
    path = Path(states=[State(0, 0, 0.1), State(1, 0, 0.1), State(2, 0, 0.1)], success=True)
    m = MetricsCollector().collect(path, 0.0, 0)
    assert m.smoothness == pytest.approx(0.0)


def test_clearance_is_minimum_over_states():
    square = Polygon([(4, 4), (6, 4), (6, 6), (4, 6)])
    env = ContinuousEnvironment(0, 10, 0, 10, [square])
    states_pts = [(0, 0), (2, 5), (0, 9)]
    m = MetricsCollector().collect(_path(states_pts), 0.0, 0, env)
    expected = min(env.clearance(State(x, y)) for x, y in states_pts)
    assert m.clearance == pytest.approx(expected)
    assert m.clearance == pytest.approx(env.clearance(State(2, 5)))


def test_clearance_without_obstacles_reported_as_zero():
    env = ContinuousEnvironment(0, 10, 0, 10, [])
    m = MetricsCollector().collect(_path([(1, 1), (2, 2)]), 0.0, 0, env)
    assert m.clearance == 0.0


def test_clearance_without_environment_keeps_sentinel():
    m = MetricsCollector().collect(_path([(1, 1), (2, 2)]), 0.0, 0)
    assert m.clearance == 1e9


def test_short_path_uses_first_state_clearance():
    env = GridEnvironment(5, 5)
    empty = MetricsCollector().collect(Path(), 0.0, 0, env)
    assert empty.clearance == env.clearance(State())
    assert empty.smoothness == 0.0
    no_env = MetricsCollector().collect(Path(), 0.0, 0)
    assert no_env.clearance == 0.0
    assert no_env.success is False