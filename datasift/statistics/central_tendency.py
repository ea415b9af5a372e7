from collections import Counter
from typing import Any, List, Optional, Sequence, Union

import numpy as np
from scipy import stats

from ..utils import format_cell, is_missing, numeric_values, to_number


def mean(cells: Sequence[Any]) -> Optional[float]:
    values = numeric_values(cells)
    if not values:
        return None
    return float(np.mean(values))


def geometric_mean(cells: Sequence[Any]) -> Optional[float]:
    """Geometric mean of the positive values; non-positive values are dropped."""
    positives = [v for v in numeric_values(cells) if v > 0]
    if not positives:
        return None
    return float(stats.gmean(positives))


def harmonic_mean(cells: Sequence[Any]) -> Optional[float]:
    """n / sum(1/x) over the non-zero values."""
    non_zero = [v for v in numeric_values(cells) if v != 0]
    if not non_zero:
        return None
    reciprocal_sum = float(np.sum(1.0 / np.asarray(non_zero)))
    if reciprocal_sum == 0:
        return None
    return len(non_zero) / reciprocal_sum


def median(cells: Sequence[Any]) -> Optional[float]:
    values = numeric_values(cells)
    if not values:
        return None
    return float(np.median(values))


def mode(cells: Sequence[Any]) -> List[Union[float, str]]:
    """
    All values tied for the highest frequency, in order of first appearance.
    Frequencies are counted on the string form of each non-missing cell so
    text columns have a mode too; numeric keys come back as floats.
    """
    keys = [format_cell(c).strip() for c in cells if not is_missing(c)]
    if not keys:
        return []

    counts = Counter(keys)
    top = max(counts.values())

    result: List[Union[float, str]] = []
    for key in counts:  # Counter keeps insertion order
        if counts[key] == top:
            number = to_number(key)
            result.append(number if number is not None else key)
    return result
