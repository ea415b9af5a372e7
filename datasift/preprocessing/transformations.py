import logging
import math
from typing import Any, Dict, Optional, Sequence, Union

import numpy as np

from ..config import get_settings
from ..data.table import Table
from ..utils import format_number, numeric_values, parse_enum, resolve_columns, to_number
from .base import BaseApplier, BaseCalculator
from .cleaning import transform_text
from .encoding import encode_categorical
from .schemas import NumericOperation, TransformType

logger = logging.getLogger(__name__)


def _column_stats(table: Table, column: str) -> Optional[Dict[str, float]]:
    values = numeric_values(table.column(column))
    if not values:
        return None
    return {
        "mean": float(np.mean(values)),
        # Population std; undefined below two values
        "std": float(np.std(values)) if len(values) > 1 else 0.0,
        "min": min(values),
        "max": max(values),
    }


def _apply_column(
    table: Table, column: str, operation: NumericOperation, stats: Dict[str, float], params: Dict[str, Any]
) -> Table:
    if operation == NumericOperation.SCALE and stats["max"] == stats["min"]:
        logger.debug(f"Skipping scale on constant column '{column}'")
        return table

    new_rows = [dict(row) for row in table.rows]
    for row in new_rows:
        value = to_number(row.get(column))
        if value is None:
            continue
        result = _transform_value(value, operation, stats, params)
        if result is not None:
            row[column] = format_number(result)

    return table.with_rows(new_rows)


class NumericTransformCalculator(BaseCalculator):
    def fit(self, table: Table, config: Dict[str, Any]) -> Dict[str, Any]:
        # Config: {'columns': [...], 'operation': 'normalize'|'scale'|'log'|'square-root',
        #          'min_value': 0.0, 'max_value': 1.0}
        # Columns are handled in turn: each one is fitted on the table as left by the previous one.
        operation = parse_enum(NumericOperation, config.get("operation"), "numeric operation")
        cols = resolve_columns(config)

        settings = get_settings()
        min_value = config.get("min_value")
        max_value = config.get("max_value")
        params: Dict[str, Any] = {
            "type": "numeric_transform",
            "operation": operation.value,
            "columns": cols,
            "min_value": settings.SCALE_MIN if min_value is None else float(min_value),
            "max_value": settings.SCALE_MAX if max_value is None else float(max_value),
        }

        column_stats = []
        working = table
        for col in cols:
            stats = _column_stats(working, col)
            column_stats.append({"column": col, "stats": stats})
            if stats is not None:
                working = _apply_column(working, col, operation, stats, params)

        params["column_stats"] = column_stats
        return params


class NumericTransformApplier(BaseApplier):
    def apply(self, table: Table, params: Dict[str, Any]) -> Table:
        operation = NumericOperation(params["operation"])

        for entry in params.get("column_stats", []):
            if entry["stats"] is None:
                continue
            table = _apply_column(table, entry["column"], operation, entry["stats"], params)

        return table


def _transform_value(
    value: float, operation: NumericOperation, stats: Dict[str, float], params: Dict[str, Any]
) -> Optional[float]:
    if operation == NumericOperation.NORMALIZE:
        std = stats["std"] or 1.0
        return (value - stats["mean"]) / std

    if operation == NumericOperation.SCALE:
        low, high = params["min_value"], params["max_value"]
        return low + (value - stats["min"]) * (high - low) / (stats["max"] - stats["min"])

    if operation == NumericOperation.LOG:
        return math.log(value) if value > 0 else None

    # square-root
    return math.sqrt(value) if value >= 0 else None


def transform_numeric(
    table: Table,
    columns: Sequence[str],
    operation: Union[str, NumericOperation],
    min_value: Optional[float] = None,
    max_value: Optional[float] = None,
) -> Table:
    """Rewrite the numeric cells of each column; non-numeric cells are left alone."""
    config = {
        "columns": list(columns),
        "operation": operation,
        "min_value": min_value,
        "max_value": max_value,
    }
    params = NumericTransformCalculator().fit(table, config)
    return NumericTransformApplier().apply(table, params)


def transform_columns(
    table: Table,
    columns: Sequence[str],
    transform_type: Union[str, TransformType],
    operation: str,
    **options: Any,
) -> Table:
    """
    Dispatch to the numeric, text or categorical transform.

    Options: min_value/max_value (scale), text (prefix/suffix),
    pattern/replacement (regex).
    """
    transform_type = parse_enum(TransformType, transform_type, "transform type")

    if transform_type == TransformType.NUMERIC:
        return transform_numeric(
            table, columns, operation,
            min_value=options.get("min_value"),
            max_value=options.get("max_value"),
        )
    if transform_type == TransformType.TEXT:
        return transform_text(
            table, columns, operation,
            text=options.get("text", ""),
            pattern=options.get("pattern", ""),
            replacement=options.get("replacement", ""),
        )
    return encode_categorical(table, columns, operation)
