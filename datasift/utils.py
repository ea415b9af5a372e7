import math
import re
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from .exceptions import ColumnNotFoundError, UnknownOperationError

# Cell values that are treated as missing after trimming and lowercasing
INVALID_TOKENS = frozenset({"n/a", "na", "null", "undefined", "-", "", "nan", "#n/a"})

_DECIMAL_PATTERN = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")


class CellKind(str, Enum):
    ABSENT = "absent"      # key not present in the row
    NULL = "null"          # None or float NaN
    INVALID = "invalid"    # one of INVALID_TOKENS
    NUMERIC = "numeric"
    TEXT = "text"

    @property
    def is_missing(self) -> bool:
        return self in (CellKind.ABSENT, CellKind.NULL, CellKind.INVALID)


def classify_value(value: Any) -> CellKind:
    """Classify a present cell value (never returns ABSENT)."""
    if value is None:
        return CellKind.NULL
    if isinstance(value, float) and math.isnan(value):
        return CellKind.NULL
    if isinstance(value, bool):
        return CellKind.TEXT
    if isinstance(value, (int, float)):
        return CellKind.NUMERIC if math.isfinite(value) else CellKind.TEXT

    text = str(value).strip()
    if text.lower() in INVALID_TOKENS:
        return CellKind.INVALID
    if _DECIMAL_PATTERN.match(text) and math.isfinite(float(text)):
        return CellKind.NUMERIC
    return CellKind.TEXT


def classify_cell(row: Mapping[str, Any], column: str) -> CellKind:
    """Classify the cell at `column` of `row`, distinguishing absent keys."""
    if column not in row:
        return CellKind.ABSENT
    return classify_value(row[column])


def is_missing(value: Any) -> bool:
    """True for None, NaN and the invalid tokens ("n/a", "", "-", ...)."""
    return classify_value(value).is_missing


def to_number(value: Any) -> Optional[float]:
    """
    Coerce a cell to a finite float, or None when it is not numeric.
    Only plain decimal literals count: hex ("0x10"), "Infinity" and the like are text.
    """
    if classify_value(value) is not CellKind.NUMERIC:
        return None
    if isinstance(value, (int, float)):
        return float(value)
    return float(str(value).strip())


def numeric_values(cells: Iterable[Any]) -> List[float]:
    """Numeric projection of a column: non-numeric and missing cells are dropped."""
    values = []
    for cell in cells:
        number = to_number(cell)
        if number is not None:
            values.append(number)
    return values


def format_number(value: float) -> str:
    """String form written back into cells: 2.0 -> "2", 2.5 -> "2.5"."""
    number = float(value)
    if number.is_integer() and abs(number) < 1e21:
        return str(int(number))
    return repr(number)


def format_cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    return str(value)


def validate_columns(headers: Sequence[str], columns: Iterable[str]) -> None:
    """Raise ColumnNotFoundError for the first column that is not a header."""
    for column in columns:
        if column not in headers:
            raise ColumnNotFoundError(column, headers)


def resolve_columns(config: Mapping[str, Any], key: str = "columns") -> List[str]:
    """
    Read a column list from a step configuration.
    Accepts a single column name under `column` or a list under `columns`.
    """
    cols = config.get(key)
    if cols is None and config.get("column"):
        cols = [config["column"]]
    if isinstance(cols, str):
        cols = [cols]
    return list(cols or [])


def parse_enum(enum_cls, value: Any, kind: str):
    """Coerce `value` into `enum_cls`, raising UnknownOperationError for unsupported names."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        raise UnknownOperationError(kind, value, [member.value for member in enum_cls]) from None
