"""Planning states, paths and the planner interface."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from planbench.environment import Environment


@dataclass(frozen=True)
class State:
    """A configuration: a position, an optional heading and an optional grid cell."""

    x: float = 0.0
    y: float = 0.0
    theta: float | None = None
    grid_pos: tuple[int, int] | None = None

    @classmethod
    def grid(cls, row: int, col: int) -> State:
        """Build a state for the grid cell at ``(row, col)``."""
        return cls(float(col), float(row), grid_pos=(row, col))

    @property
    def row(self) -> int:
        """Grid row of this state, taken from the cell or truncated from ``y``."""
        return self.grid_pos[0] if self.grid_pos is not None else int(self.y)

    @property
    def col(self) -> int:
        """Grid column of this state, taken from the cell or truncated from ``x``."""
        return self.grid_pos[1] if self.grid_pos is not None else int(self.x)


def distance(a: State, b: State) -> float:
    """Euclidean distance between the positions of two states."""
    return math.hypot(b.x - a.x, b.y - a.y)


@dataclass
class Path:
    """A sequence of states found by a planner."""

    states: list[State] = field(default_factory=list)
    success: bool = False
    length: float = 0.0

    def empty(self) -> bool:
        return not self.states

    def compute_length(self) -> float:
        """Recompute and return the summed length of all segments."""
        self.length = sum(distance(a, b) for a, b in zip(self.states, self.states[1:]))
        return self.length


class Planner(ABC):
    """A motion planner that finds a path between two states."""

    nodes_expanded: int = 0

    @abstractmethod
    def solve(self, env: Environment, start: State, goal: State) -> Path:
        """Plan a path from ``start`` to ``goal`` in ``env``."""