import logging
from typing import Any, Dict, List, Sequence, Union

import pandas as pd

from ..data.table import Table
from ..utils import format_cell, is_missing, parse_enum, resolve_columns
from .base import BaseApplier, BaseCalculator
from .schemas import CategoricalOperation

logger = logging.getLogger(__name__)


def category_levels(table: Table, column: str) -> List[str]:
    """Distinct non-missing values in order of first appearance."""
    values = [format_cell(v) for v in table.column(column) if not is_missing(v)]
    if not values:
        return []
    return [str(v) for v in pd.unique(pd.Series(values, dtype=object))]


class CategoricalEncoderCalculator(BaseCalculator):
    def fit(self, table: Table, config: Dict[str, Any]) -> Dict[str, Any]:
        # Config: {'columns': [...], 'operation': 'one-hot'|'label'}
        operation = parse_enum(CategoricalOperation, config.get("operation"), "categorical operation")
        cols = resolve_columns(config)

        categories = {col: category_levels(table, col) for col in cols}
        for col, levels in categories.items():
            logger.debug(f"{operation.value} encoding '{col}': {len(levels)} categories")

        return {
            "type": "categorical_encoding",
            "operation": operation.value,
            "columns": cols,
            "categories": categories,
        }


class CategoricalEncoderApplier(BaseApplier):
    def apply(self, table: Table, params: Dict[str, Any]) -> Table:
        operation = CategoricalOperation(params["operation"])
        categories = params.get("categories", {})

        headers = list(table.headers)
        new_rows = [dict(row) for row in table.rows]

        for col in params.get("columns", []):
            levels = categories.get(col, [])

            if operation == CategoricalOperation.ONE_HOT:
                new_cols = [f"{col}_{level}" for level in levels]
                for row in new_rows:
                    value = row.get(col)
                    current = None if is_missing(value) else format_cell(value)
                    for level, new_col in zip(levels, new_cols):
                        row[new_col] = "1" if current == level else "0"
            else:
                index = {level: str(i) for i, level in enumerate(levels)}
                new_cols = [f"{col}_encoded"]
                for row in new_rows:
                    value = row.get(col)
                    # Unseen values get "" like missing ones
                    row[new_cols[0]] = "" if is_missing(value) else index.get(format_cell(value), "")

            for new_col in new_cols:
                if new_col not in headers:
                    headers.append(new_col)

        return Table(headers, new_rows)


def encode_categorical(
    table: Table, columns: Sequence[str], operation: Union[str, CategoricalOperation]
) -> Table:
    """One-hot or label encode each column; the original columns are kept."""
    params = CategoricalEncoderCalculator().fit(
        table, {"columns": list(columns), "operation": operation}
    )
    return CategoricalEncoderApplier().apply(table, params)
