"""Procedural generation of occupancy-grid maps."""

from __future__ import annotations

import enum
import random
from dataclasses import dataclass

from planbench.environment import GridEnvironment


class MapGeneratorType(enum.Enum):
    RANDOM_UNIFORM = "random_uniform"
    PERLIN_NOISE = "perlin_noise"
    MAZE = "maze"
    NARROW_PASSAGE = "narrow_passage"
    RANDOM_CONVEX_POLYGONS = "random_convex_polygons"


@dataclass
class MapGeneratorParams:
    """Settings for one generated map.

    For mazes, ``width`` and ``height`` count maze cells, not grid cells.
    """

    width: int = 10
    height: int = 10
    obstacle_density: float = 0.2
    narrow_passage_width: int = 0
    clustering_factor: float = 0.0
    seed: int = 0
    type: MapGeneratorType = MapGeneratorType.RANDOM_UNIFORM


class _DisjointSets:
    """Union-find with path compression and union by rank."""

    def __init__(self, n: int) -> None:
        self._parent = list(range(n))
        self._rank = [0] * n

    def find(self, x: int) -> int:
        root = x
        while self._parent[root] != root:
            root = self._parent[root]
        while self._parent[x] != root:
            self._parent[x], x = root, self._parent[x]
        return root

    def union(self, a: int, b: int) -> bool:
        """Merge the sets of ``a`` and ``b``; False if they were already one."""
        a, b = self.find(a), self.find(b)
        if a == b:
            return False
        if self._rank[a] < self._rank[b]:
            a, b = b, a
        self._parent[b] = a
        if self._rank[a] == self._rank[b]:
            self._rank[a] += 1
        return True


class MapGenerator:
    """Builds grid environments from parameters, reproducibly for a given seed."""

    def __init__(self, seed: int = 0) -> None:
        self.seed = seed

    def generate(self, params: MapGeneratorParams) -> GridEnvironment:
        """Generate a map; a zero seed in ``params`` falls back to the generator's seed."""
        seed = params.seed if params.seed != 0 else self.seed
        self.seed = seed
        rng = random.Random(seed & 0xFFFFFFFF)
        if params.type is MapGeneratorType.MAZE:
            return self._maze(params.width, params.height, rng)
        return self._random_uniform(params.width, params.height, params.obstacle_density, rng)

    @staticmethod
    def _random_uniform(
        width: int, height: int, density: float, rng: random.Random
    ) -> GridEnvironment:
        occupancy = [[0] * width for _ in range(height)]
        corners = {(0, 0), (height - 1, width - 1)}
        for r, row in enumerate(occupancy):
            for c in range(width):
                if (r, c) in corners:
                    continue
                if rng.random() < density:
                    row[c] = 1
        return GridEnvironment(width, height, occupancy)

    @staticmethod
    def _maze(cells_wide: int, cells_high: int, rng: random.Random) -> GridEnvironment:
        grid_h = 2 * cells_high + 1
        grid_w = 2 * cells_wide + 1
        occupancy = [[1] * grid_w for _ in range(grid_h)]
        for r in range(cells_high):
            for c in range(cells_wide):
                occupancy[2 * r + 1][2 * c + 1] = 0

        edges: list[tuple[int, int]] = []
        for r in range(cells_high):
            for c in range(cells_wide):
                idx = r * cells_wide + c
                if r + 1 < cells_high:
                    edges.append((idx, idx + cells_wide))
                if c + 1 < cells_wide:
                    edges.append((idx, idx + 1))
        rng.shuffle(edges)

        sets = _DisjointSets(cells_wide * cells_high)
        for a, b in edges:
            if not sets.union(a, b):
                continue
            ra, ca = divmod(a, cells_wide)
            rb, _ = divmod(b, cells_wide)
            if rb == ra + 1:
                occupancy[2 * ra + 2][2 * ca + 1] = 0
            else:
                occupancy[2 * ra + 1][2 * ca + 2] = 0

        return GridEnvironment(grid_w, grid_h, occupancy)