"""Descriptive statistics over observed series.

Every function is pure and returns 0.0 for an empty series.
"""

from __future__ import annotations

import statistics
from collections.abc import Sequence


def mean(values: Sequence[float]) -> float:
    """Arithmetic average."""
    if not values:
        return 0.0
    return statistics.fmean(values)


def median(values: Sequence[float]) -> float:
    """Order-statistic median; even length averages the two middle elements."""
    if not values:
        return 0.0
    return float(statistics.median(values))


def largest(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return float(max(values))
