from typing import Any, Optional, Sequence

import numpy as np

from ..utils import numeric_values


def variance(cells: Sequence[Any]) -> Optional[float]:
    """Population variance (divides by n); needs at least two values."""
    values = numeric_values(cells)
    if len(values) < 2:
        return None
    return float(np.var(values))


def standard_deviation(cells: Sequence[Any]) -> Optional[float]:
    values = numeric_values(cells)
    if len(values) < 2:
        return None
    return float(np.std(values))


def value_range(cells: Sequence[Any]) -> Optional[float]:
    values = numeric_values(cells)
    if not values:
        return None
    return max(values) - min(values)


def interquartile_range(cells: Sequence[Any]) -> Optional[float]:
    values = numeric_values(cells)
    if len(values) < 4:
        return None
    q1, q3 = np.quantile(values, [0.25, 0.75])
    return float(q3 - q1)


def mean_absolute_deviation(cells: Sequence[Any]) -> Optional[float]:
    values = numeric_values(cells)
    if not values:
        return None
    arr = np.asarray(values)
    return float(np.mean(np.abs(arr - arr.mean())))


def coefficient_of_variation(cells: Sequence[Any]) -> Optional[float]:
    values = numeric_values(cells)
    if len(values) <= 1:
        return None
    avg = float(np.mean(values))
    if avg == 0:
        return None
    return float(np.std(values)) / avg


def coefficient_of_dispersion(cells: Sequence[Any]) -> Optional[float]:
    """Variance-to-mean ratio."""
    values = numeric_values(cells)
    if len(values) <= 1:
        return None
    avg = float(np.mean(values))
    if avg == 0:
        return None
    return float(np.var(values)) / avg


def gini_coefficient(cells: Sequence[Any]) -> Optional[float]:
    values = sorted(numeric_values(cells))
    n = len(values)
    if n <= 1:
        return None
    total = sum(values)
    if total == 0:
        return None
    weighted = sum((2 * (i + 1) - n - 1) * x for i, x in enumerate(values))
    return weighted / (n * total)
