from typing import Any, Optional, Sequence

from ..utils import numeric_values


def minimum(cells: Sequence[Any]) -> Optional[float]:
    values = numeric_values(cells)
    return min(values) if values else None


def maximum(cells: Sequence[Any]) -> Optional[float]:
    values = numeric_values(cells)
    return max(values) if values else None


def count(cells: Sequence[Any]) -> int:
    """Number of numeric values."""
    return len(numeric_values(cells))
