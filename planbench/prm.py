"""Probabilistic roadmap planners over bounded workspaces."""

from __future__ import annotations

import heapq
import math
import random
from collections.abc import Callable

from planbench.environment import Environment
from planbench.kdtree import KdTree2D
from planbench.polygon import Point2D
from planbench.state import Path, Planner, State

_SEED = 42
_START, _GOAL = 0, 1

Adjacency = list[list[tuple[int, float]]]


def _state(p: Point2D) -> State:
    return State(p.x, p.y)


class _RoadmapPlanner(Planner):
    """Shared sampling, graph construction and search for roadmap planners."""

    def __init__(self, num_samples: int = 500, k_neighbors: int = 10) -> None:
        self.num_samples = num_samples
        self.k_neighbors = k_neighbors
        self.nodes_expanded = 0

    def _sample(self, env: Environment, start: State, goal: State) -> list[Point2D] | None:
        """Start, goal, then up to ``num_samples`` valid random points; None if unbounded."""
        bounds = env.bounds()
        if bounds is None:
            return None
        x_min, x_max, y_min, y_max = bounds
        points = [Point2D(start.x, start.y), Point2D(goal.x, goal.y)]
        rng = random.Random(_SEED)
        collected = 0
        for _ in range(self.num_samples * 10):
            if collected >= self.num_samples:
                break
            x = rng.uniform(x_min, x_max)
            y = rng.uniform(y_min, y_max)
            if env.is_valid(State(x, y)):
                points.append(Point2D(x, y))
                collected += 1
        return points

    def _neighbours(self, points: list[Point2D]) -> Adjacency:
        """Candidate edges from each point to its ``k_neighbors`` nearest others."""
        tree = KdTree2D()
        tree.build(points)
        adjacency: Adjacency = []
        for i, p in enumerate(points):
            adjacency.append(
                [
                    (j, math.hypot(points[j].x - p.x, points[j].y - p.y))
                    for j in tree.k_nearest(p, self.k_neighbors + 1)
                    if j != i
                ]
            )
        return adjacency

    def _shortest_path(
        self,
        points: list[Point2D],
        adjacency: Adjacency,
        edge_ok: Callable[[int, int], bool],
    ) -> Path:
        """Dijkstra from the start node to the goal node, counting expansions."""
        dist = [math.inf] * len(points)
        parent: list[int | None] = [None] * len(points)
        dist[_START] = 0.0
        queue: list[tuple[float, int]] = [(0.0, _START)]
        while queue:
            d, u = heapq.heappop(queue)
            if d > dist[u]:
                continue
            self.nodes_expanded += 1
            if u == _GOAL:
                break
            for v, w in adjacency[u]:
                if not edge_ok(u, v):
                    continue
                nd = dist[u] + w
                if nd < dist[v]:
                    dist[v] = nd
                    parent[v] = u
                    heapq.heappush(queue, (nd, v))

        if math.isinf(dist[_GOAL]):
            return Path()
        trace: list[int] = []
        cur: int | None = _GOAL
        while cur is not None:
            trace.append(cur)
            cur = parent[cur]
        path = Path(states=[_state(points[i]) for i in reversed(trace)], success=True)
        path.compute_length()
        return path


class PRMPlanner(_RoadmapPlanner):
    """Roadmap planner that checks every candidate edge before searching."""

    def solve(self, env: Environment, start: State, goal: State) -> Path:
        self.nodes_expanded = 0
        points = self._sample(env, start, goal)
        if points is None:
            return Path()
        adjacency = [
            [
                (j, w)
                for j, w in edges
                if env.collision_free(_state(points[i]), _state(points[j]))
            ]
            for i, edges in enumerate(self._neighbours(points))
        ]
        return self._shortest_path(points, adjacency, lambda u, v: True)


class LazyPRMPlanner(_RoadmapPlanner):
    """Roadmap planner that checks edges only when the search reaches them."""

    def solve(self, env: Environment, start: State, goal: State) -> Path:
        self.nodes_expanded = 0
        points = self._sample(env, start, goal)
        if points is None:
            return Path()
        checked: dict[tuple[int, int], bool] = {}

        def edge_ok(a: int, b: int) -> bool:
            key = (min(a, b), max(a, b))
            if key not in checked:
                checked[key] = env.collision_free(_state(points[key[0]]), _state(points[key[1]]))
            return checked[key]

        return self._shortest_path(points, self._neighbours(points), edge_ok)