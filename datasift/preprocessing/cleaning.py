import logging
import re
from typing import Any, Dict, Sequence, Union

from ..data.table import Table
from ..utils import format_cell, is_missing, parse_enum, resolve_columns
from .base import BaseApplier, BaseCalculator
from .schemas import TextOperation

logger = logging.getLogger(__name__)


class TextCleaningCalculator(BaseCalculator):
    def fit(self, table: Table, config: Dict[str, Any]) -> Dict[str, Any]:
        # Config: {'columns': [...], 'operation': 'lowercase'|'uppercase'|'trim'|'prefix'|'suffix'|'regex',
        #          'text': '...', 'pattern': '...', 'replacement': '...'}
        # Text cleaning learns nothing from the data; fit validates and passes the config through.
        operation = parse_enum(TextOperation, config.get("operation"), "text operation")
        cols = resolve_columns(config)

        params = {
            "type": "text_cleaning",
            "operation": operation.value,
            "columns": cols,
            "text": config.get("text") or "",
        }

        if operation == TextOperation.REGEX:
            pattern = config.get("pattern") or ""
            replacement = config.get("replacement") or ""
            try:
                # Compiling the template catches bad escapes and group references up front
                re.compile(pattern).sub(replacement, "")
                params["pattern"] = pattern
            except re.error as e:
                # Invalid pattern or replacement turns the step into a no-op
                logger.warning(f"Invalid regex pattern '{pattern}' or replacement '{replacement}': {e}")
                params["pattern"] = None
            params["replacement"] = replacement

        return params


class TextCleaningApplier(BaseApplier):
    def apply(self, table: Table, params: Dict[str, Any]) -> Table:
        operation = TextOperation(params["operation"])

        regex = None
        if operation == TextOperation.REGEX:
            if not params.get("pattern"):
                return table
            regex = re.compile(params["pattern"])

        new_rows = [dict(row) for row in table.rows]
        for col in params.get("columns", []):
            for row in new_rows:
                if col not in row:
                    continue
                value = row[col]

                if operation == TextOperation.LOWERCASE and isinstance(value, str):
                    row[col] = value.lower()
                elif operation == TextOperation.UPPERCASE and isinstance(value, str):
                    row[col] = value.upper()
                elif operation == TextOperation.TRIM and isinstance(value, str):
                    row[col] = value.strip()
                elif operation == TextOperation.PREFIX and not is_missing(value):
                    row[col] = params["text"] + format_cell(value)
                elif operation == TextOperation.SUFFIX and not is_missing(value):
                    row[col] = format_cell(value) + params["text"]
                elif regex is not None and isinstance(value, str):
                    row[col] = regex.sub(params.get("replacement", ""), value)

        return table.with_rows(new_rows)


def transform_text(
    table: Table,
    columns: Sequence[str],
    operation: Union[str, TextOperation],
    text: str = "",
    pattern: str = "",
    replacement: str = "",
) -> Table:
    """
    Apply a text operation to string cells of each column.
    An invalid regex pattern returns the input table unchanged.
    """
    config = {
        "columns": list(columns),
        "operation": operation,
        "text": text,
        "pattern": pattern,
        "replacement": replacement,
    }
    params = TextCleaningCalculator().fit(table, config)
    return TextCleaningApplier().apply(table, params)
