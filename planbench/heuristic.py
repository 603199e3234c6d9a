"""Distance heuristics between grid cells."""

from __future__ import annotations

import enum
import math


def manhattan(r0: int, c0: int, r1: int, c1: int) -> float:
    return float(abs(r1 - r0) + abs(c1 - c0))


def euclidean(r0: int, c0: int, r1: int, c1: int) -> float:
    return math.sqrt((r1 - r0) ** 2 + (c1 - c0) ** 2)


def diagonal(r0: int, c0: int, r1: int, c1: int) -> float:
    """Octile distance: diagonal moves cost sqrt(2), straight moves 1."""
    dr, dc = abs(r1 - r0), abs(c1 - c0)
    return max(dr, dc) + (math.sqrt(2) - 1.0) * min(dr, dc)


class HeuristicType(enum.Enum):
    MANHATTAN = "manhattan"
    EUCLIDEAN = "euclidean"
    DIAGONAL = "diagonal"

    def estimate(self, r0: int, c0: int, r1: int, c1: int) -> float:
        """Heuristic distance from (r0, c0) to (r1, c1)."""
        if self is HeuristicType.EUCLIDEAN:
            return euclidean(r0, c0, r1, c1)
        if self is HeuristicType.DIAGONAL:
            return diagonal(r0, c0, r1, c1)
        return manhattan(r0, c0, r1, c1)