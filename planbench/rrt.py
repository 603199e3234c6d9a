"""Rapidly-exploring random tree planners."""

from __future__ import annotations

import math
import random

from planbench.environment import Bounds, Environment
from planbench.polygon import Point2D
from planbench.state import Path, Planner, State

_SEED = 42


def rrt_star_radius(n: int, gamma: float, dim: int, step_size: float) -> float:
    """Neighbourhood radius for a tree of ``n`` nodes, capped at twice the step."""
    if n <= 1:
        return 1e9
    r = gamma * (math.log(n) / n) ** (1.0 / dim)
    return min(r, step_size * 2.0)


def _state(p: Point2D) -> State:
    return State(p.x, p.y)


def _sample(rng: random.Random, goal: State, goal_bias: float, bounds: Bounds) -> Point2D:
    x_min, x_max, y_min, y_max = bounds
    if rng.random() < goal_bias:
        return Point2D(goal.x, goal.y)
    x = rng.uniform(x_min, x_max)
    y = rng.uniform(y_min, y_max)
    return Point2D(x, y)


def _nearest(tree: list[Point2D], p: Point2D) -> int:
    return min(range(len(tree)), key=lambda i: (p.x - tree[i].x) ** 2 + (p.y - tree[i].y) ** 2)


def _steer(origin: Point2D, target: Point2D, step: float) -> Point2D:
    dx, dy = target.x - origin.x, target.y - origin.y
    d = math.hypot(dx, dy)
    if d <= step or d < 1e-9:
        return target
    return Point2D(origin.x + step * dx / d, origin.y + step * dy / d)


def _dist(a: Point2D, b: Point2D) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)


def _trace(tree: list[Point2D], parent: list[int], leaf: int, goal: State) -> Path:
    indices = [leaf]
    while indices[-1] != 0:
        indices.append(parent[indices[-1]])
    states = [_state(tree[i]) for i in reversed(indices)]
    states.append(State(goal.x, goal.y))
    path = Path(states=states, success=True)
    path.compute_length()
    return path


class RRTPlanner(Planner):
    """Basic RRT that returns the first path reaching the goal region."""

    def __init__(self, step_size: float = 1.0, goal_bias: float = 0.1, max_iter: int = 5000) -> None:
        self.step_size = step_size
        self.goal_bias = goal_bias
        self.max_iter = max_iter
        self.nodes_expanded = 0

    def solve(self, env: Environment, start: State, goal: State) -> Path:
        self.nodes_expanded = 0
        bounds = env.bounds()
        if bounds is None:
            return Path()
        tree = [Point2D(start.x, start.y)]
        parent = [0]
        rng = random.Random(_SEED)
        goal_pt = Point2D(goal.x, goal.y)
        goal_thresh = self.step_size * 1.5

        for _ in range(self.max_iter):
            sample = _sample(rng, goal, self.goal_bias, bounds)
            near = _nearest(tree, sample)
            new_pt = _steer(tree[near], sample, self.step_size)
            if not env.collision_free(_state(tree[near]), _state(new_pt)):
                continue
            if not env.is_valid(_state(new_pt)):
                continue
            tree.append(new_pt)
            parent.append(near)
            self.nodes_expanded = len(tree)

            if _dist(goal_pt, new_pt) < goal_thresh and env.collision_free(
                _state(new_pt), State(goal.x, goal.y)
            ):
                return _trace(tree, parent, len(tree) - 1, goal)
        return Path()


class RRTStarPlanner(Planner):
    """RRT* with parent selection and rewiring; runs all iterations, keeps the best path."""

    def __init__(
        self,
        step_size: float = 1.0,
        goal_bias: float = 0.1,
        max_iter: int = 5000,
        rewiring_radius_factor: float = 10.0,
    ) -> None:
        self.step_size = step_size
        self.goal_bias = goal_bias
        self.max_iter = max_iter
        self.gamma = rewiring_radius_factor
        self.nodes_expanded = 0

    def solve(self, env: Environment, start: State, goal: State) -> Path:
        self.nodes_expanded = 0
        bounds = env.bounds()
        if bounds is None:
            return Path()
        tree = [Point2D(start.x, start.y)]
        parent = [0]
        cost = [0.0]
        children: list[list[int]] = [[]]
        rng = random.Random(_SEED)
        goal_pt = Point2D(goal.x, goal.y)
        goal_thresh = self.step_size * 1.5
        best_cost = math.inf
        best_goal: int | None = None

        for _ in range(self.max_iter):
            sample = _sample(rng, goal, self.goal_bias, bounds)
            near = _nearest(tree, sample)
            new_pt = _steer(tree[near], sample, self.step_size)
            new_state = _state(new_pt)
            if not env.collision_free(_state(tree[near]), new_state):
                continue
            if not env.is_valid(new_state):
                continue

            c_min = cost[near] + _dist(new_pt, tree[near])
            best_parent = near
            r = rrt_star_radius(len(tree), self.gamma, 2, self.step_size)
            neighbours = [
                (i, d) for i, p in enumerate(tree) if (d := _dist(p, new_pt)) <= r
            ]
            for i, d in neighbours:
                if not env.collision_free(_state(tree[i]), new_state):
                    continue
                if cost[i] + d < c_min:
                    c_min = cost[i] + d
                    best_parent = i

            new_idx = len(tree)
            tree.append(new_pt)
            parent.append(best_parent)
            cost.append(c_min)
            children.append([])
            children[best_parent].append(new_idx)

            for i, d in neighbours:
                if not env.collision_free(_state(tree[i]), new_state):
                    continue
                c_new = cost[new_idx] + d
                if c_new < cost[i]:
                    self._reparent(parent, children, i, new_idx)
                    cost[i] = c_new
                    self._propagate(tree, cost, children, i, new_idx)

            self.nodes_expanded = len(tree)

            to_goal = _dist(goal_pt, new_pt)
            if to_goal < goal_thresh and env.collision_free(new_state, State(goal.x, goal.y)):
                c_goal = cost[new_idx] + to_goal
                if c_goal < best_cost:
                    best_cost = c_goal
                    best_goal = new_idx

        if best_goal is None:
            return Path()
        return _trace(tree, parent, best_goal, goal)

    @staticmethod
    def _reparent(parent: list[int], children: list[list[int]], node: int, new_parent: int) -> None:
        old = parent[node]
        if node in children[old]:
            children[old].remove(node)
        parent[node] = new_parent
        children[new_parent].append(node)

    @staticmethod
    def _propagate(
        tree: list[Point2D], cost: list[float], children: list[list[int]], root: int, skip: int
    ) -> None:
        """Refresh the costs of every descendant of ``root`` after it was rewired."""
        stack = [root]
        while stack:
            u = stack.pop()
            for j in children[u]:
                if j == skip:
                    continue
                cost[j] = cost[u] + _dist(tree[j], tree[u])
                stack.append(j)