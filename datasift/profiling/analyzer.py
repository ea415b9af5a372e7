import logging
from collections import Counter

from ..config import get_settings
from ..data.table import Table
from ..preprocessing.duplicates import find_duplicates
from ..preprocessing.missing import summarize_missing
from ..utils import format_cell, is_missing, to_number
from .schemas import ColumnProfile, TableProfile

logger = logging.getLogger(__name__)


def analyze_column(table: Table, column: str) -> ColumnProfile:
    """
    Frequency and type heuristics for one column.

    A column is categorical when it is not entirely numeric, or when it is
    numeric with few distinct values. It is worth charting when it is neither
    constant nor (almost) unique per row.
    """
    settings = get_settings()
    cleaned = [format_cell(v).strip() for v in table.column(column) if not is_missing(v)]

    if not cleaned:
        return ColumnProfile(column=column, is_empty=True)

    frequencies = Counter(cleaned)
    unique_count = len(frequencies)
    total = len(cleaned)
    all_numeric = all(to_number(v) is not None for v in frequencies)

    is_categorical = not all_numeric or unique_count <= max(
        settings.CATEGORICAL_MIN_UNIQUE, total * settings.CATEGORICAL_UNIQUE_RATIO
    )
    is_valid = 1 < unique_count < total * settings.VISUALIZATION_UNIQUE_RATIO

    return ColumnProfile(
        column=column,
        is_empty=False,
        unique_values=unique_count,
        is_numeric=all_numeric,
        is_categorical=is_categorical,
        is_valid_for_visualization=is_valid,
        frequencies=dict(frequencies),
        unique_value_list=list(frequencies),
        total_values=total,
    )


def profile_table(table: Table) -> TableProfile:
    profiles = {col: analyze_column(table, col) for col in table.headers}
    duplicates = find_duplicates(table, table.headers).statistics

    logger.info(
        f"Profiled {len(table)} rows x {len(table.headers)} columns, "
        f"{duplicates.duplicate_rows} duplicate rows"
    )
    return TableProfile(
        rows=len(table),
        columns=len(table.headers),
        column_profiles=profiles,
        missing=summarize_missing(table),
        duplicates=duplicates,
        numeric_columns=[c for c, p in profiles.items() if p.is_numeric],
        categorical_columns=[c for c, p in profiles.items() if p.is_categorical],
    )
