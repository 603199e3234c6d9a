"""Summary statistics for benchmark samples."""

from __future__ import annotations

import math
from collections.abc import Sequence

# Two-sided 95% Student t critical values for 1..30 degrees of freedom.
_T_TABLE = (
    12.71, 4.30, 3.18, 2.78, 2.57, 2.45, 2.36, 2.31, 2.26, 2.23,
    2.20, 2.18, 2.16, 2.14, 2.13, 2.12, 2.11, 2.10, 2.09, 2.09,
    2.08, 2.07, 2.07, 2.06, 2.06, 2.06, 2.05, 2.05, 2.05, 2.04,
)


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean; 0 for an empty sequence."""
    if not values:
        return 0.0
    return sum(values) / len(values)


def std_dev(values: Sequence[float]) -> float:
    """Sample standard deviation; 0 for fewer than two values."""
    if len(values) < 2:
        return 0.0
    m = mean(values)
    return math.sqrt(sum((x - m) ** 2 for x in values) / (len(values) - 1))


def confidence_interval_95(values: Sequence[float]) -> tuple[float, float]:
    """95% confidence interval of the mean, using a t value for small samples."""
    m = mean(values)
    n = len(values)
    if n < 2:
        return m, m
    t = _T_TABLE[min(n - 1, 29)] if n <= 30 else 1.96
    err = t * std_dev(values) / math.sqrt(n)
    return m - err, m + err