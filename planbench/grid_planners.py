"""Graph-search planners on 8-connected occupancy grids."""

from __future__ import annotations

import heapq
import math
from collections.abc import Callable

from planbench.environment import Environment, GridEnvironment
from planbench.heuristic import HeuristicType
from planbench.state import Path, Planner, State

Cell = tuple[int, int]

_SQRT2 = math.sqrt(2)
_MOVES: tuple[tuple[int, int, float], ...] = (
    (-1, 0, 1.0), (1, 0, 1.0), (0, -1, 1.0), (0, 1, 1.0),
    (-1, -1, _SQRT2), (-1, 1, _SQRT2), (1, -1, _SQRT2), (1, 1, _SQRT2),
)


def _endpoints(grid: GridEnvironment, start: State, goal: State) -> tuple[Cell, Cell] | None:
    s, g = (start.row, start.col), (goal.row, goal.col)
    if grid.occupied(*s) or grid.occupied(*g):
        return None
    return s, g


def _trace(parent: dict[Cell, Cell | None], goal: Cell) -> Path:
    cells = [goal]
    while (prev := parent.get(cells[-1])) is not None:
        cells.append(prev)
    path = Path(states=[State.grid(r, c) for r, c in reversed(cells)], success=True)
    path.compute_length()
    return path


def _best_first(
    env: Environment,
    start: State,
    goal: State,
    h: Callable[[int, int], float],
    weight: float,
) -> tuple[Path, int]:
    """Best-first search with f = g + weight * h; returns the path and expansions."""
    if not isinstance(env, GridEnvironment):
        return Path(), 0
    ends = _endpoints(env, start, goal)
    if ends is None:
        return Path(), 0
    s, g_cell = ends

    queue: list[tuple[float, Cell]] = [(weight * h(*s), s)]
    parent: dict[Cell, Cell | None] = {}
    g_best: dict[Cell, float] = {s: 0.0}
    expanded = 0

    while queue:
        f, cell = heapq.heappop(queue)
        r, c = cell
        g = g_best[cell]
        if g + 1e-9 < f - weight * h(r, c):
            continue
        expanded += 1
        if cell == g_cell:
            return _trace(parent, cell), expanded
        here = State.grid(r, c)
        for dr, dc, cost in _MOVES:
            nr, nc = r + dr, c + dc
            if not (0 <= nr < env.height and 0 <= nc < env.width):
                continue
            if env.occupied(nr, nc) or not env.collision_free(here, State.grid(nr, nc)):
                continue
            ng = g + cost
            nxt = (nr, nc)
            if nxt in g_best and g_best[nxt] <= ng:
                continue
            g_best[nxt] = ng
            parent[nxt] = cell
            heapq.heappush(queue, (ng + weight * h(nr, nc), nxt))
    return Path(), expanded


def _goal_heuristic(kind: HeuristicType, goal: State) -> Callable[[int, int], float]:
    gr, gc = goal.row, goal.col
    return lambda r, c: kind.estimate(r, c, gr, gc)


class DijkstraPlanner(Planner):
    """Uniform-cost search on an 8-connected grid."""

    def __init__(self) -> None:
        self.nodes_expanded = 0

    def solve(self, env: Environment, start: State, goal: State) -> Path:
        path, self.nodes_expanded = _best_first(env, start, goal, lambda r, c: 0.0, 1.0)
        return path


class AStarPlanner(Planner):
    """A* search on an 8-connected grid."""

    def __init__(self, heuristic: HeuristicType = HeuristicType.DIAGONAL) -> None:
        self.heuristic = heuristic
        self.nodes_expanded = 0

    def solve(self, env: Environment, start: State, goal: State) -> Path:
        h = _goal_heuristic(self.heuristic, goal)
        path, self.nodes_expanded = _best_first(env, start, goal, h, 1.0)
        return path


class WeightedAStarPlanner(Planner):
    """A* with the heuristic scaled by ``weight``."""

    def __init__(
        self, heuristic: HeuristicType = HeuristicType.DIAGONAL, weight: float = 1.5
    ) -> None:
        self.heuristic = heuristic
        self.weight = weight
        self.nodes_expanded = 0

    def solve(self, env: Environment, start: State, goal: State) -> Path:
        h = _goal_heuristic(self.heuristic, goal)
        path, self.nodes_expanded = _best_first(env, start, goal, h, self.weight)
        return path


class ThetaStarPlanner(Planner):
    """Any-angle Theta* search: a node may link straight to its grandparent."""

    def __init__(self, heuristic: HeuristicType = HeuristicType.DIAGONAL) -> None:
        self.heuristic = heuristic
        self.nodes_expanded = 0

    def solve(self, env: Environment, start: State, goal: State) -> Path:
        self.nodes_expanded = 0
        if not isinstance(env, GridEnvironment):
            return Path()
        ends = _endpoints(env, start, goal)
        if ends is None:
            return Path()
        s, g_cell = ends
        h = _goal_heuristic(self.heuristic, goal)

        queue: list[tuple[float, Cell]] = [(h(*s), s)]
        parent: dict[Cell, Cell | None] = {s: None}
        g_best: dict[Cell, float] = {s: 0.0}

        while queue:
            f, cell = heapq.heappop(queue)
            r, c = cell
            g = g_best[cell]
            if g + 1e-9 < f - h(r, c):
                continue
            self.nodes_expanded += 1
            if cell == g_cell:
                return _trace(parent, cell)

            grand = parent[cell]
            for dr, dc, _ in _MOVES:
                nr, nc = r + dr, c + dc
                if not (0 <= nr < env.height and 0 <= nc < env.width):
                    continue
                if env.occupied(nr, nc):
                    continue
                nxt = (nr, nc)
                target = State.grid(nr, nc)
                if grand is not None and env.collision_free(State.grid(*grand), target):
                    ng = g_best[grand] + math.hypot(nr - grand[0], nc - grand[1])
                    new_parent = grand
                else:
                    if not env.collision_free(State.grid(r, c), target):
                        continue
                    ng = g + math.hypot(nr - r, nc - c)
                    new_parent = cell
                if nxt in g_best and g_best[nxt] <= ng:
                    continue
                g_best[nxt] = ng
                parent[nxt] = new_parent
                heapq.heappush(queue, (ng + h(nr, nc), nxt))
        return Path()