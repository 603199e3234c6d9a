import math

import pytest

from planbench.environment import ContinuousEnvironment, GridEnvironment
from planbench.grid_planners import (
    AStarPlanner,
    DijkstraPlanner,
    ThetaStarPlanner,
    WeightedAStarPlanner,
)
from planbench.heuristic import HeuristicType
from planbench.map_generator import MapGenerator, MapGeneratorParams, MapGeneratorType
from planbench.state import State

ALL_PLANNERS = [DijkstraPlanner, AStarPlanner, WeightedAStarPlanner, ThetaStarPlanner]


def test_dijkstra_empty_map():
    env = GridEnvironment(10, 10)
    planner = DijkstraPlanner()
    path = planner.solve(env, State.grid(0, 0), State.grid(9, 9))
    assert path.success
    assert len(path.states) >= 2
    assert path.length == pytest.approx(9.0 * math.sqrt(2), abs=1.0)
    assert planner.nodes_expanded > 0


def test_dijkstra_with_obstacle():
    occ = [[0] * 10 for _ in range(10)]
    for c in range(1, 9):
        occ[5][c] = 1
    env = GridEnvironment(10, 10, occ)
    path = DijkstraPlanner().solve(env, State.grid(0, 0), State.grid(9, 9))
    assert path.success
    assert path.length > 12.0


def test_astar_finds_path():
    env = GridEnvironment(10, 10)
    planner = AStarPlanner(HeuristicType.DIAGONAL)
    path = planner.solve(env, State.grid(0, 0), State.grid(9, 9))
    assert path.success
    assert planner.nodes_expanded > 0


def test_astar_vs_dijkstra_expansions():
    env = GridEnvironment(20, 20)
    dijkstra = DijkstraPlanner()
    astar = AStarPlanner(HeuristicType.DIAGONAL)
    p1 = dijkstra.solve(env, State.grid(0, 0), State.grid(19, 19))
    p2 = astar.solve(env, State.grid(0, 0), State.grid(19, 19))
    assert p1.success
    assert p2.success
    assert astar.nodes_expanded <= dijkstra.nodes_expanded


def test_weighted_astar_fewer_expansions():
    env = GridEnvironment(15, 15)
    astar = AStarPlanner(HeuristicType.DIAGONAL)
    wastar = WeightedAStarPlanner(HeuristicType.DIAGONAL, 2.0)
    p1 = astar.solve(env, State.grid(0, 0), State.grid(14, 14))
    p2 = wastar.solve(env, State.grid(0, 0), State.grid(14, 14))
    assert p1.success
    assert p2.success
    assert wastar.nodes_expanded <= astar.nodes_expanded


def test_thetastar_shorter_path():
    env = GridEnvironment(20, 20)
    p1 = AStarPlanner(HeuristicType.DIAGONAL).solve(env, State.grid(0, 0), State.grid(19, 19))
    p2 = ThetaStarPlanner(HeuristicType.DIAGONAL).solve(
        env, State.grid(0, 0), State.grid(19, 19)
    )
    assert p1.success
    assert p2.success
    assert p2.length <= p1.length + 0.01


def test_dijkstra_finds_path_on_empty_grid():
    env = GridEnvironment(10, 10)
    path = DijkstraPlanner().solve(env, State.grid(0, 0), State.grid(9, 9))
    assert path.success
    assert not path.empty()
    assert path.length >= 9.0


def test_maze_has_path():
    params = MapGeneratorParams(4, 4, 0.0, 0, 0.0, 42, MapGeneratorType.MAZE)
    env = MapGenerator().generate(params)
    path = AStarPlanner().solve(env, State.grid(1, 1), State.grid(7, 7))
    assert path.success
    assert path.states[0] == State.grid(1, 1)
    assert path.states[-1] == State.grid(7, 7)


@pytest.mark.parametrize("planner_cls", ALL_PLANNERS)
def test_non_grid_environment_fails(planner_cls):
    env = ContinuousEnvironment(0, 10, 0, 10)
    planner = planner_cls()
    path = planner.solve(env, State(1.0, 1.0), State(8.0, 8.0))
    assert not path.success
    assert path.empty()
    assert planner.nodes_expanded == 0


@pytest.mark.parametrize("planner_cls", ALL_PLANNERS)
def test_occupied_goal_fails(planner_cls):
    occ = [[0] * 5 for _ in range(5)]
    occ[4][4] = 1
    env = GridEnvironment(5, 5, occ)
    path = planner_cls().solve(env, State.grid(0, 0), State.grid(4, 4))
    assert not path.success


@pytest.mark.parametrize("planner_cls", ALL_PLANNERS)
def test_walled_off_goal_fails(planner_cls):
    occ = [[0] * 6 for _ in range(6)]
    for c in range(6):
        occ[3][c] = 1
    env = GridEnvironment(6, 6, occ)
    path = planner_cls().solve(env, State.grid(0, 0), State.grid(5, 5))
    assert not path.success


@pytest.mark.parametrize("planner_cls", ALL_PLANNERS)
def test_path_endpoints_and_validity(planner_cls):
    occ = [[0] * 10 for _ in range(10)]
    for c in range(1, 9):
        occ[5][c] = 1
    env = GridEnvironment(10, 10, occ)
    path = planner_cls().solve(env, State.grid(0, 0), State.grid(9, 9))
    assert path.success
    assert path.states[0] == State.grid(0, 0)
    assert path.states[-1] == State.grid(9, 9)
    assert all(env.is_valid(s) for s in path.states)
    assert all(env.collision_free(a, b) for a, b in zip(path.states, path.states[1:]))


@pytest.mark.parametrize("planner_cls", ALL_PLANNERS)
def test_start_equals_goal(planner_cls):
    env = GridEnvironment(4, 4)
    path = planner_cls().solve(env, State.grid(2, 2), State.grid(2, 2))
    assert path.success
    assert path.states == [State.grid(2, 2)]
    assert path.length == 0.0


def test_thetastar_straight_on_open_grid():
    env = GridEnvironment(20, 20)
    path = ThetaStarPlanner().solve(env, State.grid(0, 0), State.grid(19, 19))
    assert path.success
    assert len(path.states) == 2
    assert path.length == pytest.approx(19 * math.sqrt(2))


def test_dijkstra_is_optimal_like_astar():
    occ = [[0] * 10 for _ in range(10)]
    for c in range(1, 9):
        occ[5][c] = 1
    env = GridEnvironment(10, 10, occ)
    p1 = DijkstraPlanner().solve(env, State.grid(0, 0), State.grid(9, 9))
    p2 = AStarPlanner().solve(env, State.grid(0, 0), State.grid(9, 9))
    assert p1.length == pytest.approx(p2.length)