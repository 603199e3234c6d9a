"""Nearest-neighbour queries over a fixed set of 2D points."""

from __future__ import annotations

import heapq
from collections.abc import Iterable

from planbench.polygon import Point2D


def _dist_sq(a: Point2D, b: Point2D) -> float:
    dx, dy = a.x - b.x, a.y - b.y
    return dx * dx + dy * dy


class KdTree2D:
    """Point index answering nearest, k-nearest and radius queries.

    Results are indices into the point list given to :meth:`build`;
    equal distances are ordered by index.
    """

    def __init__(self) -> None:
        self._points: list[Point2D] = []

    def build(self, points: Iterable[Point2D]) -> None:
        self._points = list(points)

    def __len__(self) -> int:
        return len(self._points)

    def point(self, i: int) -> Point2D:
        return self._points[i]

    def nearest(self, p: Point2D) -> int:
        """Index of the closest point, or 0 when the tree is empty."""
        if not self._points:
            return 0
        return min(range(len(self._points)), key=lambda i: _dist_sq(p, self._points[i]))

    def k_nearest(self, p: Point2D, k: int) -> list[int]:
        """Indices of the ``k`` closest points, closest first."""
        pairs = ((_dist_sq(p, q), i) for i, q in enumerate(self._points))
        return [i for _, i in heapq.nsmallest(max(k, 0), pairs)]

    def radius_search(self, p: Point2D, r: float) -> list[int]:
        """Indices of all points within distance ``r`` of ``p``, in index order."""
        r2 = r * r
        return [i for i, q in enumerate(self._points) if _dist_sq(p, q) <= r2]