import logging
import math
from typing import Any, Dict, List, Optional, Union

import numpy as np

from ..config import get_settings
from ..data.table import Table
from ..utils import format_number, numeric_values, parse_enum, resolve_columns, to_number
from .base import BaseApplier, BaseCalculator
from .schemas import OutlierBounds, OutlierMethod, OutlierReport

logger = logging.getLogger(__name__)


def default_threshold(method: OutlierMethod) -> float:
    settings = get_settings()
    return {
        OutlierMethod.ZSCORE: settings.ZSCORE_THRESHOLD,
        OutlierMethod.IQR: settings.IQR_THRESHOLD,
        OutlierMethod.PERCENTILE: settings.PERCENTILE_THRESHOLD,
    }[method]


def compute_bounds(
    table: Table,
    column: str,
    method: Union[str, OutlierMethod],
    threshold: Optional[float] = None,
) -> OutlierBounds:
    """
    Bounds for one column. A None threshold takes the configured default
    for the method; any explicit value (0 included) is used as given.
    """
    method = parse_enum(OutlierMethod, method, "outlier method")
    if threshold is None:
        threshold = default_threshold(method)
    threshold = float(threshold)

    values = numeric_values(table.column(column))
    if not values:
        return OutlierBounds(lower_bound=0.0, upper_bound=0.0, method=method, threshold=threshold)

    if method == OutlierMethod.ZSCORE:
        # Population statistics; a single value has std 0
        mean = float(np.mean(values))
        std = float(np.std(values)) if len(values) > 1 else 0.0
        return OutlierBounds(
            lower_bound=mean - threshold * std,
            upper_bound=mean + threshold * std,
            method=method,
            threshold=threshold,
            method_details={"mean": mean, "std_dev": std},
        )

    ordered = sorted(values)
    n = len(ordered)

    if method == OutlierMethod.IQR:
        # Simple index quartiles, not interpolated
        q1 = ordered[math.floor(n * 0.25)]
        q3 = ordered[min(math.floor(n * 0.75), n - 1)]
        iqr = q3 - q1
        return OutlierBounds(
            lower_bound=q1 - threshold * iqr,
            upper_bound=q3 + threshold * iqr,
            method=method,
            threshold=threshold,
            method_details={"q1": q1, "q3": q3, "iqr": iqr},
        )

    lower_idx = min(max(math.floor(n * threshold / 100), 0), n - 1)
    upper_idx = min(max(math.floor(n * (100 - threshold) / 100), 0), n - 1)
    return OutlierBounds(
        lower_bound=ordered[lower_idx],
        upper_bound=ordered[upper_idx],
        method=method,
        threshold=threshold,
        method_details={
            "lower_percentile": threshold,
            "upper_percentile": 100 - threshold,
        },
    )


def _is_outlier(value: float, bounds: OutlierBounds) -> bool:
    if bounds.method == OutlierMethod.ZSCORE:
        mean = bounds.method_details.get("mean", 0.0)
        std = bounds.method_details.get("std_dev", 0.0) or 1.0
        return abs(value - mean) / std > bounds.threshold
    return value < bounds.lower_bound or value > bounds.upper_bound


def find_outlier_indices(table: Table, column: str, bounds: OutlierBounds) -> List[int]:
    """Indices of rows whose numeric cell in `column` falls outside the bounds."""
    indices = []
    for idx, row in enumerate(table.rows):
        value = to_number(row.get(column))
        if value is not None and _is_outlier(value, bounds):
            indices.append(idx)
    return indices


def detect_outliers(
    table: Table,
    column: str,
    method: Union[str, OutlierMethod] = OutlierMethod.ZSCORE,
    threshold: Optional[float] = None,
) -> OutlierReport:
    bounds = compute_bounds(table, column, method, threshold)
    indices = find_outlier_indices(table, column, bounds)

    logger.debug(
        f"Outliers in '{column}' ({bounds.method.value}, t={bounds.threshold}): {len(indices)} rows"
    )
    return OutlierReport(
        column=column,
        bounds=bounds,
        outlier_indices=indices,
        outlier_rows=[dict(table.rows[i]) for i in indices],
        outlier_count=len(indices),
        numeric_count=len(numeric_values(table.column(column))),
        total_rows=len(table),
    )


def remove_outliers(
    table: Table,
    column: str,
    method: Union[str, OutlierMethod] = OutlierMethod.ZSCORE,
    threshold: Optional[float] = None,
) -> Table:
    bounds = compute_bounds(table, column, method, threshold)
    return _drop_rows(table, column, bounds)


def cap_outliers(
    table: Table,
    column: str,
    method: Union[str, OutlierMethod] = OutlierMethod.ZSCORE,
    threshold: Optional[float] = None,
) -> Table:
    bounds = compute_bounds(table, column, method, threshold)
    return _cap_rows(table, column, bounds)


def _drop_rows(table: Table, column: str, bounds: OutlierBounds) -> Table:
    flagged = set(find_outlier_indices(table, column, bounds))
    return table.select(i for i in range(len(table)) if i not in flagged)


def _cap_rows(table: Table, column: str, bounds: OutlierBounds) -> Table:
    flagged = set(find_outlier_indices(table, column, bounds))
    new_rows = []
    for idx, row in enumerate(table.rows):
        new_row = dict(row)
        if idx in flagged:
            value = to_number(row[column])
            # Nearer bound
            if abs(value - bounds.lower_bound) <= abs(value - bounds.upper_bound):
                new_row[column] = format_number(bounds.lower_bound)
            else:
                new_row[column] = format_number(bounds.upper_bound)
        new_rows.append(new_row)
    return table.with_rows(new_rows)


# --- Calculators ---

class _BoundsCalculator(BaseCalculator):
    method: OutlierMethod

    def fit(self, table: Table, config: Dict[str, Any]) -> Dict[str, Any]:
        # Config: {'columns': [...], 'threshold': float | None, 'action': 'remove'|'cap'}
        threshold = config.get("threshold")
        cols = resolve_columns(config)

        bounds = {}
        for col in cols:
            bounds[col] = compute_bounds(table, col, self.method, threshold).model_dump(mode="json")

        return {
            "type": self.method.value,
            "bounds": bounds,
            "action": config.get("action", "remove"),
        }


class ZScoreBoundsCalculator(_BoundsCalculator):
    method = OutlierMethod.ZSCORE


class IQRBoundsCalculator(_BoundsCalculator):
    method = OutlierMethod.IQR


class PercentileBoundsCalculator(_BoundsCalculator):
    method = OutlierMethod.PERCENTILE


BOUNDS_CALCULATORS = {
    OutlierMethod.ZSCORE: ZScoreBoundsCalculator,
    OutlierMethod.IQR: IQRBoundsCalculator,
    OutlierMethod.PERCENTILE: PercentileBoundsCalculator,
}


# --- Appliers ---

class OutlierRemovalApplier(BaseApplier):
    def apply(self, table: Table, params: Dict[str, Any]) -> Table:
        for col, bound in params.get("bounds", {}).items():
            table = _drop_rows(table, col, OutlierBounds(**bound))
        return table


class OutlierCappingApplier(BaseApplier):
    def apply(self, table: Table, params: Dict[str, Any]) -> Table:
        for col, bound in params.get("bounds", {}).items():
            table = _cap_rows(table, col, OutlierBounds(**bound))
        return table
