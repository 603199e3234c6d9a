"""Points and simple polygons in the plane."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class Point2D:
    x: float = 0.0
    y: float = 0.0


def _as_point(p: Point2D | tuple[float, float]) -> Point2D:
    return p if isinstance(p, Point2D) else Point2D(float(p[0]), float(p[1]))


@dataclass(frozen=True)
class Polygon:
    """A polygon given by its vertices in order."""

    vertices: tuple[Point2D, ...] = ()

    def __init__(self, vertices: Iterable[Point2D | tuple[float, float]] = ()) -> None:
        object.__setattr__(self, "vertices", tuple(_as_point(v) for v in vertices))

    def __len__(self) -> int:
        return len(self.vertices)

    def edges(self) -> list[tuple[Point2D, Point2D]]:
        """The closed sequence of edges, last vertex joined to the first."""
        v = self.vertices
        return list(zip(v, v[1:] + v[:1]))

    def contains(self, p: Point2D) -> bool:
        """Ray-casting point-in-polygon test."""
        if len(self.vertices) < 3:
            return False
        crossings = 0
        for a, b in self.edges():
            if (a.y > p.y) != (b.y > p.y):
                x_cross = (b.x - a.x) * (p.y - a.y) / (b.y - a.y) + a.x
                if p.x < x_cross:
                    crossings += 1
        return crossings % 2 == 1

    def bounding_box(self) -> tuple[float, float, float, float]:
        """Return ``(x_min, y_min, x_max, y_max)`` of the vertices."""
        big = sys.float_info.max
        x_min = min((v.x for v in self.vertices), default=big)
        y_min = min((v.y for v in self.vertices), default=big)
        x_max = max((v.x for v in self.vertices), default=-big)
        y_max = max((v.y for v in self.vertices), default=-big)
        return x_min, y_min, x_max, y_max