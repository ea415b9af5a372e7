import logging
from typing import Any, Dict, List, Optional, Union

from .. import statistics
from ..data.table import Table
from ..utils import classify_cell, format_cell, numeric_values, parse_enum, resolve_columns
from .base import BaseApplier, BaseCalculator
from .schemas import MissingColumnSummary, MissingValueOperation

logger = logging.getLogger(__name__)


def compute_fill_value(
    table: Table,
    column: str,
    operation: Union[str, MissingValueOperation],
    custom_value: Any = None,
) -> str:
    """
    String written into missing cells for a fill operation.
    Statistics are taken over the numeric projection; undefined gives "".
    """
    operation = parse_enum(MissingValueOperation, operation, "missing value operation")

    if operation == MissingValueOperation.FILL_CUSTOM:
        return format_cell(custom_value)

    values = numeric_values(table.column(column))
    if operation == MissingValueOperation.FILL_MEAN:
        fill = statistics.mean(values)
    elif operation == MissingValueOperation.FILL_MEDIAN:
        fill = statistics.median(values)
    elif operation == MissingValueOperation.FILL_MODE:
        modes = statistics.mode(values)
        fill = modes[0] if modes else None
    else:
        raise ValueError(f"{operation.value} does not produce a fill value")

    return format_cell(fill)


def handle_missing_values(
    table: Table,
    column: str,
    operation: Union[str, MissingValueOperation],
    custom_value: Any = None,
) -> Table:
    operation = parse_enum(MissingValueOperation, operation, "missing value operation")

    if operation == MissingValueOperation.REMOVE_ROWS:
        return table.with_rows(
            row for row in table.rows if not classify_cell(row, column).is_missing
        )

    fill_value = compute_fill_value(table, column, operation, custom_value)
    return fill_missing(table, column, fill_value)


def fill_missing(table: Table, column: str, fill_value: str) -> Table:
    """Write `fill_value` into every missing cell of `column` (absent keys are added)."""
    new_rows = []
    filled = 0
    for row in table.rows:
        new_row = dict(row)
        if classify_cell(row, column).is_missing:
            new_row[column] = fill_value
            filled += 1
        new_rows.append(new_row)

    headers = table.headers if column in table.headers else table.headers + (column,)
    logger.debug(f"Filled {filled} missing cells in '{column}' with '{fill_value}'")
    return Table(headers, new_rows)


def summarize_missing(table: Table) -> List[MissingColumnSummary]:
    total = len(table)
    summary = []
    for col in table.headers:
        missing = sum(1 for row in table.rows if classify_cell(row, col).is_missing)
        summary.append(
            MissingColumnSummary(
                column=col,
                missing_count=missing,
                missing_percentage=(missing / total * 100) if total else 0.0,
            )
        )
    return summary


class MissingValueCalculator(BaseCalculator):
    def fit(self, table: Table, config: Dict[str, Any]) -> Dict[str, Any]:
        # Config: {'columns': [...], 'operation': 'fill-mean', 'custom_value': '...'}
        cols = resolve_columns(config)
        operation = parse_enum(
            MissingValueOperation, config.get("operation", "fill-mean"), "missing value operation"
        )

        fill_values: Dict[str, Optional[str]] = {}
        for col in cols:
            if operation == MissingValueOperation.REMOVE_ROWS:
                fill_values[col] = None
            else:
                fill_values[col] = compute_fill_value(table, col, operation, config.get("custom_value"))

        return {
            "type": "missing_values",
            "operation": operation.value,
            "columns": cols,
            "fill_values": fill_values,
        }


class MissingValueApplier(BaseApplier):
    def apply(self, table: Table, params: Dict[str, Any]) -> Table:
        operation = params.get("operation")
        fill_values = params.get("fill_values", {})

        for col in params.get("columns", []):
            if operation == MissingValueOperation.REMOVE_ROWS.value:
                table = handle_missing_values(table, col, operation)
            else:
                table = fill_missing(table, col, fill_values.get(col) or "")

        return table
