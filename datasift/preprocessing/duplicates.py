import logging
from typing import Any, Dict, List, Mapping, Sequence, Union

from ..data.table import Table
from ..utils import classify_cell, format_cell, is_missing, parse_enum, resolve_columns
from .base import BaseApplier, BaseCalculator
from .schemas import DuplicateGroup, DuplicateReport, DuplicateStatistics, KeepStrategy

logger = logging.getLogger(__name__)

KEY_SEPARATOR = "|"


def duplicate_key(row: Mapping[str, Any], columns: Sequence[str]) -> str:
    """Join the trimmed string form of each key cell; missing cells count as ""."""
    parts = []
    for col in columns:
        value = row.get(col)
        parts.append("" if is_missing(value) else format_cell(value).strip())
    return KEY_SEPARATOR.join(parts)


def find_duplicates(table: Table, columns: Sequence[str]) -> DuplicateReport:
    columns = list(columns)
    if not columns or len(table) == 0:
        # No key columns: nothing can be a duplicate
        return DuplicateReport(
            columns=columns,
            statistics=DuplicateStatistics(total_rows=len(table), unique_rows=len(table)),
        )

    key_map: Dict[str, List[int]] = {}
    for idx, row in enumerate(table.rows):
        key_map.setdefault(duplicate_key(row, columns), []).append(idx)

    groups = [
        DuplicateGroup(
            key=key,
            indices=indices,
            rows=[dict(table.rows[i]) for i in indices],
            count=len(indices),
        )
        for key, indices in key_map.items()
        if len(indices) > 1
    ]

    total = len(table)
    unique = len(key_map)
    statistics = DuplicateStatistics(
        total_rows=total,
        unique_rows=unique,
        duplicate_rows=total - unique,
        duplicate_groups_count=len(groups),
        duplicate_count=total - unique,
    )

    logger.debug(f"Found {len(groups)} duplicate groups on {columns}")
    return DuplicateReport(columns=columns, groups=groups, statistics=statistics)


def _missing_cells(row: Mapping[str, Any], headers: Sequence[str]) -> int:
    return sum(1 for h in headers if classify_cell(row, h).is_missing)


def rows_to_remove(
    table: Table, groups: Sequence[DuplicateGroup], keep: Union[str, KeepStrategy] = KeepStrategy.FIRST
) -> List[int]:
    """Indices of every duplicate-group member except the one chosen by `keep`."""
    keep = parse_enum(KeepStrategy, keep, "keep strategy")

    removed = set()
    for group in groups:
        if keep == KeepStrategy.FIRST:
            kept = group.indices[0]
        elif keep == KeepStrategy.LAST:
            kept = group.indices[-1]
        else:
            # Strict comparison: ties go to the earliest member
            kept = group.indices[0]
            fewest = _missing_cells(table.rows[kept], table.headers)
            for idx in group.indices[1:]:
                missing = _missing_cells(table.rows[idx], table.headers)
                if missing < fewest:
                    kept, fewest = idx, missing
        removed.update(i for i in group.indices if i != kept)

    return sorted(removed)


def remove_duplicates(
    table: Table, columns: Sequence[str], keep: Union[str, KeepStrategy] = KeepStrategy.FIRST
) -> Table:
    report = find_duplicates(table, columns)
    removed = set(rows_to_remove(table, report.groups, keep))
    return table.select(i for i in range(len(table)) if i not in removed)


class DuplicateCalculator(BaseCalculator):
    def fit(self, table: Table, config: Dict[str, Any]) -> Dict[str, Any]:
        # Config: {'columns': [...], 'keep': 'first'|'last'|'min-nulls'}
        # Defaults to every header when no key columns are given.
        cols = resolve_columns(config) or list(table.headers)
        keep = parse_enum(KeepStrategy, config.get("keep", KeepStrategy.FIRST.value), "keep strategy")

        report = find_duplicates(table, cols)

        return {
            "type": "deduplicate",
            "columns": cols,
            "keep": keep.value,
            "rows_to_remove": rows_to_remove(table, report.groups, keep),
            "statistics": report.statistics.model_dump(),
        }


class DeduplicateApplier(BaseApplier):
    def apply(self, table: Table, params: Dict[str, Any]) -> Table:
        cols = params.get("columns")
        if not cols:
            return table

        return remove_duplicates(table, cols, params.get("keep", KeepStrategy.FIRST.value))
