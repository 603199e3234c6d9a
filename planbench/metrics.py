"""Quality metrics for planned paths."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from planbench.environment import Environment
from planbench.state import Path, State, distance


@dataclass
class Metrics:
    """Measurements of one planning run."""

    path_length: float = 0.0
    computation_time_ms: float = 0.0
    nodes_expanded: int = 0
    success: bool = False
    memory_bytes: int = 0
    smoothness: float = 0.0
    clearance: float = 0.0
    energy: float = 0.0
    cost_vs_iteration: list[tuple[int, float]] = field(default_factory=list)
    gap_to_optimal: float = 0.0


def _angle_diff(a1: float, a2: float) -> float:
    d = a2 - a1
    while d > math.pi:
        d -= 2 * math.pi
    while d < -math.pi:
        d += 2 * math.pi
    return abs(d)


def _segment_angle(a: State, b: State) -> float:
    return math.atan2(b.y - a.y, b.x - a.x)


class MetricsCollector:
    """Computes smoothness, clearance and bending energy of a path."""

    def collect(
        self,
        path: Path,
        time_ms: float,
        nodes_expanded: int,
        env: Environment | None = None,
    ) -> Metrics:
        m = Metrics(
            path_length=path.length,
            computation_time_ms=time_ms,
            nodes_expanded=nodes_expanded,
            success=path.success,
        )
        states = path.states
        if len(states) < 2:
            if env is not None:
                m.clearance = env.clearance(states[0] if states else State())
            return m

        smoothness = 0.0
        for i in range(1, len(states)):
            prev, cur = states[i - 1], states[i]
            if cur.theta is not None and prev.theta is not None:
                smoothness += _angle_diff(prev.theta, cur.theta)
            elif i >= 2:
                smoothness += _angle_diff(
                    _segment_angle(states[i - 2], prev), _segment_angle(prev, cur)
                )
        m.smoothness = smoothness

        m.clearance = 1e9
        if env is not None:
            m.clearance = min(m.clearance, *(env.clearance(s) for s in states))
            if m.clearance > 1e8:
                m.clearance = 0.0

        energy = 0.0
        for a, b, c in zip(states, states[1:], states[2:]):
            d1, d2 = distance(a, b), distance(b, c)
            if d1 < 1e-9 or d2 < 1e-9:
                continue
            span = 0.5 * (d1 + d2)
            kappa = _angle_diff(_segment_angle(a, b), _segment_angle(b, c)) / span
            energy += kappa * kappa * span
        m.energy = energy
        return m