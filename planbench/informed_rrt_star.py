"""Informed RRT*: RRT* that samples inside the ellipse of improving solutions."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field

from planbench.environment import Environment
from planbench.polygon import Point2D
from planbench.rrt import rrt_star_radius
from planbench.state import Path, Planner, State

_SEED = 42


@dataclass
class ConvergenceData:
    """Best solution cost over the iterations of one planning run."""

    cost_vs_iteration: list[tuple[int, float]] = field(default_factory=list)
    final_cost: float = 0.0
    gap_to_optimal: float = 0.0


def sample_ellipse(
    sx: float, sy: float, gx: float, gy: float, c_best: float, rng: random.Random
) -> tuple[float, float]:
    """Uniform sample from the ellipse with foci start and goal and major axis ``c_best``.

    Returns the start position when ``c_best`` does not exceed the focal distance.
    """
    c_min = math.hypot(gx - sx, gy - sy)
    if c_best <= c_min:
        return sx, sy
    a = c_best / 2
    c = c_min / 2
    b = math.sqrt(max(0.0, a * a - c * c))
    theta = rng.uniform(0.0, 2 * math.pi)
    r = math.sqrt(rng.random())
    ex = a * r * math.cos(theta)
    ey = b * r * math.sin(theta)
    angle = math.atan2(gy - sy, gx - sx)
    x = sx + (gx - sx) / 2 + ex * math.cos(angle) - ey * math.sin(angle)
    y = sy + (gy - sy) / 2 + ex * math.sin(angle) + ey * math.cos(angle)
    return x, y


def _state(p: Point2D) -> State:
    return State(p.x, p.y)


def _dist(a: Point2D, b: Point2D) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)


class InformedRRTStarPlanner(Planner):
    """RRT* that, once a path exists, samples only where a shorter one could lie."""

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
        self.optimal_cost: float | None = None
        self.nodes_expanded = 0
        self.convergence_data = ConvergenceData()

    def solve(self, env: Environment, start: State, goal: State) -> Path:
        self.nodes_expanded = 0
        self.convergence_data = ConvergenceData()
        bounds = env.bounds()
        if bounds is None:
            return Path()
        x_min, x_max, y_min, y_max = bounds

        tree = [Point2D(start.x, start.y)]
        parent = [0]
        cost = [0.0]
        children: list[list[int]] = [[]]
        rng = random.Random(_SEED)
        goal_pt = Point2D(goal.x, goal.y)
        goal_state = State(goal.x, goal.y)
        goal_thresh = self.step_size * 1.5
        best_cost = math.inf
        best_goal: int | None = None

        for iteration in range(1, self.max_iter + 1):
            if best_goal is not None and rng.random() > self.goal_bias:
                x, y = sample_ellipse(start.x, start.y, goal.x, goal.y, best_cost, rng)
                if not (x_min <= x <= x_max and y_min <= y <= y_max):
                    continue
                sample = Point2D(x, y)
            elif rng.random() < self.goal_bias:
                sample = goal_pt
            else:
                sample = Point2D(rng.uniform(x_min, x_max), rng.uniform(y_min, y_max))

            near = min(
                range(len(tree)),
                key=lambda i: (sample.x - tree[i].x) ** 2 + (sample.y - tree[i].y) ** 2,
            )
            new_pt = self._steer(tree[near], sample)
            new_state = _state(new_pt)
            if not env.collision_free(_state(tree[near]), new_state):
                continue
            if not env.is_valid(new_state):
                continue

            c_min = cost[near] + _dist(new_pt, tree[near])
            best_parent = near
            r = rrt_star_radius(len(tree), self.gamma, 2, self.step_size)
            neighbours = [(i, d) for i, p in enumerate(tree) if (d := _dist(p, new_pt)) <= r]
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
                    old = parent[i]
                    if i in children[old]:
                        children[old].remove(i)
                    parent[i] = new_idx
                    children[new_idx].append(i)
                    cost[i] = c_new
                    self._propagate(tree, cost, children, i, new_idx)

            self.nodes_expanded = len(tree)

            to_goal = _dist(goal_pt, new_pt)
            if to_goal < goal_thresh and env.collision_free(new_state, goal_state):
                c_goal = cost[new_idx] + to_goal
                if c_goal < best_cost:
                    best_cost = c_goal
                    best_goal = new_idx

            if best_goal is not None:
                self.convergence_data.cost_vs_iteration.append((iteration, best_cost))

        self.convergence_data.final_cost = best_cost
        if self.optimal_cost is not None and self.optimal_cost > 0:
            self.convergence_data.gap_to_optimal = best_cost - self.optimal_cost

        if best_goal is None:
            return Path()
        indices = [best_goal]
        while indices[-1] != 0:
            indices.append(parent[indices[-1]])
        states = [_state(tree[i]) for i in reversed(indices)]
        states.append(goal_state)
        path = Path(states=states, success=True)
        path.compute_length()
        return path

    def _steer(self, origin: Point2D, target: Point2D) -> Point2D:
        dx, dy = target.x - origin.x, target.y - origin.y
        d = math.hypot(dx, dy)
        if d <= self.step_size or d < 1e-9:
            return target
        return Point2D(origin.x + self.step_size * dx / d, origin.y + self.step_size * dy / d)

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