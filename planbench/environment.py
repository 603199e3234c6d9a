"""Workspaces that planners search: grids, polygon worlds and SE(2) worlds."""

from __future__ import annotations

import json
import math
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence

from planbench.collision import ContinuousCollisionChecker, GridCollisionChecker
from planbench.polygon import Point2D, Polygon
from planbench.state import State

Bounds = tuple[float, float, float, float]


class Environment(ABC):
    """A workspace answering validity, segment and clearance queries."""

    @abstractmethod
    def is_valid(self, s: State) -> bool:
        """True if the state lies in free space."""

    @abstractmethod
    def collision_free(self, a: State, b: State) -> bool:
        """True if the straight segment from ``a`` to ``b`` avoids obstacles."""

    @abstractmethod
    def clearance(self, s: State) -> float:
        """Distance from the state to the nearest obstacle."""

    def bounds(self) -> Bounds | None:
        """``(x_min, x_max, y_min, y_max)`` of the workspace, or None if unbounded."""
        return None


class GridEnvironment(Environment):
    """An occupancy grid; cells with non-zero values are occupied."""

    def __init__(
        self, width: int, height: int, occupancy: Sequence[Sequence[int]] | None = None
    ) -> None:
        self.width = width
        self.height = height
        if occupancy is None:
            self.occupancy = [[0] * width for _ in range(height)]
        else:
            self.occupancy = [list(row) for row in occupancy]

    def occupied(self, row: int, col: int) -> bool:
        """Out-of-bounds cells count as occupied."""
        if not (0 <= row < self.height and 0 <= col < self.width):
            return True
        return self.occupancy[row][col] != 0

    def is_valid(self, s: State) -> bool:
        return not self.occupied(s.row, s.col)

    def collision_free(self, a: State, b: State) -> bool:
        checker = GridCollisionChecker(self.width, self.height, self.occupancy)
        return checker.line_of_sight(a.row, a.col, b.row, b.col)

    def clearance(self, s: State) -> float:
        return 0.0

    def bounds(self) -> Bounds:
        return 0.0, float(self.width), 0.0, float(self.height)

    @classmethod
    def from_json(cls, text: str) -> GridEnvironment:
        """Load a grid from ``{"width", "height", "occupancy"}`` JSON."""
        data = json.loads(text)
        try:
            width = int(data["width"])
            height = int(data["height"])
            rows = [[int(cell) for cell in data["occupancy"][r]] for r in range(height)]
        except (KeyError, TypeError, IndexError) as exc:
            raise ValueError(f"invalid grid document: {exc}") from exc
        return cls(width, height, rows)

    def to_json(self) -> str:
        return json.dumps(
            {"width": self.width, "height": self.height, "occupancy": self.occupancy},
            separators=(",", ":"),
            sort_keys=True,
        )


class ContinuousEnvironment(Environment):
    """A bounded rectangle of the plane with polygon obstacles."""

    def __init__(
        self,
        x_min: float,
        x_max: float,
        y_min: float,
        y_max: float,
        obstacles: Iterable[Polygon] = (),
    ) -> None:
        self.x_min, self.x_max = x_min, x_max
        self.y_min, self.y_max = y_min, y_max
        self.obstacles: tuple[Polygon, ...] = tuple(obstacles)
        self._checker = ContinuousCollisionChecker(self.obstacles)

    def is_valid(self, s: State) -> bool:
        if not (self.x_min <= s.x <= self.x_max and self.y_min <= s.y <= self.y_max):
            return False
        p = Point2D(s.x, s.y)
        return not any(poly.contains(p) for poly in self.obstacles)

    def collision_free(self, a: State, b: State) -> bool:
        return not self._checker.segment_intersects_obstacles(Point2D(a.x, a.y), Point2D(b.x, b.y))

    def clearance(self, s: State) -> float:
        return self._checker.clearance_at(Point2D(s.x, s.y))

    def bounds(self) -> Bounds:
        return self.x_min, self.x_max, self.y_min, self.y_max

    @classmethod
    def from_json(cls, text: str) -> ContinuousEnvironment:
        """Load from ``{"bounds": {...}, "obstacles": [{"vertices": [{"x", "y"}]}]}`` JSON."""
        data = json.loads(text)
        try:
            b = data["bounds"]
            obstacles = [
                Polygon(Point2D(float(v["x"]), float(v["y"])) for v in poly["vertices"])
                for poly in data["obstacles"]
            ]
            return cls(
                float(b["x_min"]), float(b["x_max"]), float(b["y_min"]), float(b["y_max"]),
                obstacles,
            )
        except (KeyError, TypeError) as exc:
            raise ValueError(f"invalid environment document: {exc}") from exc


class SE2Environment(Environment):
    """A polygon world whose states also carry a heading in [0, 2*pi)."""

    def __init__(self, base: ContinuousEnvironment) -> None:
        self.base = base

    def is_valid(self, s: State) -> bool:
        if not self.base.is_valid(s):
            return False
        return s.theta is None or 0 <= s.theta < 2 * math.pi

    def collision_free(self, a: State, b: State) -> bool:
        return self.base.collision_free(a, b)

    def clearance(self, s: State) -> float:
        return self.base.clearance(s)

    def bounds(self) -> Bounds:
        return self.base.bounds()