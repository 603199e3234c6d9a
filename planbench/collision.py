"""Collision checking against polygon obstacles and occupancy grids."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

from planbench.polygon import Point2D, Polygon

_EPS = 1e-9


def _cross(o: Point2D, a: Point2D, b: Point2D) -> float:
    return (a.x - o.x) * (b.y - o.y) - (a.y - o.y) * (b.x - o.x)


def _on_segment(p: Point2D, a: Point2D, b: Point2D) -> bool:
    return (
        min(a.x, b.x) <= p.x + _EPS
        and p.x <= max(a.x, b.x) + _EPS
        and min(a.y, b.y) <= p.y + _EPS
        and p.y <= max(a.y, b.y) + _EPS
    )


def segments_intersect(a1: Point2D, a2: Point2D, b1: Point2D, b2: Point2D) -> bool:
    """True if segment a1-a2 touches or crosses segment b1-b2."""
    d1 = _cross(b1, b2, a1)
    d2 = _cross(b1, b2, a2)
    d3 = _cross(a1, a2, b1)
    d4 = _cross(a1, a2, b2)
    if ((d1 > 0 > d2) or (d1 < 0 < d2)) and ((d3 > 0 > d4) or (d3 < 0 < d4)):
        return True
    return (
        (abs(d1) < _EPS and _on_segment(a1, b1, b2))
        or (abs(d2) < _EPS and _on_segment(a2, b1, b2))
        or (abs(d3) < _EPS and _on_segment(b1, a1, a2))
        or (abs(d4) < _EPS and _on_segment(b2, a1, a2))
    )


def point_to_segment_distance(p: Point2D, s1: Point2D, s2: Point2D) -> float:
    """Shortest distance from ``p`` to the segment s1-s2."""
    dx, dy = s2.x - s1.x, s2.y - s1.y
    len2 = dx * dx + dy * dy
    if len2 < 1e-18:
        return math.hypot(p.x - s1.x, p.y - s1.y)
    t = max(0.0, min(1.0, ((p.x - s1.x) * dx + (p.y - s1.y) * dy) / len2))
    return math.hypot(p.x - (s1.x + t * dx), p.y - (s1.y + t * dy))


class ContinuousCollisionChecker:
    """Segment and clearance queries against a set of polygons."""

    def __init__(self, obstacles: Iterable[Polygon]) -> None:
        self.obstacles: tuple[Polygon, ...] = tuple(obstacles)

    def segment_intersects_obstacles(self, a: Point2D, b: Point2D) -> bool:
        return any(
            segments_intersect(a, b, v1, v2)
            for poly in self.obstacles
            for v1, v2 in poly.edges()
        )

    def clearance_at(self, p: Point2D) -> float:
        """Distance to the nearest obstacle edge, 0 inside an obstacle, 1e9 if none."""
        if any(poly.contains(p) for poly in self.obstacles):
            return 0.0
        nearest = min(
            (
                point_to_segment_distance(p, v1, v2)
                for poly in self.obstacles
                for v1, v2 in poly.edges()
            ),
            default=None,
        )
        return 1e9 if nearest is None else nearest


class GridCollisionChecker:
    """Collision checks on an occupancy grid: 0 is free, anything else occupied."""

    def __init__(self, width: int, height: int, occupancy: Sequence[Sequence[int]]) -> None:
        self.width = width
        self.height = height
        self.occupancy = occupancy

    def is_occupied(self, row: int, col: int) -> bool:
        """Out-of-bounds cells count as occupied."""
        if not (0 <= row < self.height and 0 <= col < self.width):
            return True
        return self.occupancy[row][col] != 0

    def is_cell_free(self, row: int, col: int) -> bool:
        return not self.is_occupied(row, col)

    def line_of_sight(self, r0: int, c0: int, r1: int, c1: int) -> bool:
        """True if every cell on the Bresenham line from (r0, c0) to (r1, c1) is free."""
        dr, dc = abs(r1 - r0), abs(c1 - c0)
        sr = 1 if r0 < r1 else -1
        sc = 1 if c0 < c1 else -1
        r, c = r0, c0
        if dc >= dr:
            err = 2 * dr - dc
            for _ in range(dc + 1):
                if self.is_occupied(r, c):
                    return False
                if r == r1 and c == c1:
                    return True
                if err > 0:
                    r += sr
                    err -= 2 * dc
                err += 2 * dr
                c += sc
        else:
            err = 2 * dc - dr
            for _ in range(dr + 1):
                if self.is_occupied(r, c):
                    return False
                if r == r1 and c == c1:
                    return True
                if err > 0:
                    c += sc
                    err -= 2 * dr
                err += 2 * dc
                r += sr
        return True