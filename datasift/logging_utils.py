"""
Logging helper for cleaning actions applied to a table.
"""
import logging
from typing import Optional

# Shared logger for cleaning actions, separate from module loggers
data_logger = logging.getLogger("data_actions")


def log_data_action(
    action: str,
    success: bool = True,
    details: Optional[str] = None,
    rows_before: Optional[int] = None,
    rows_after: Optional[int] = None,
) -> None:
    """
    Log one cleaning action (a pipeline step or a standalone operation).

    Args:
        action: Name of the operation, e.g. "remove-duplicates"
        success: Whether the action succeeded
        details: Free-form context such as the target column
        rows_before: Row count of the input table
        rows_after: Row count of the output table
    """
    level = logging.INFO if success else logging.ERROR
    parts = [f"Action: {action}"]

    if details:
        parts.append(f"Details: {details}")

    if rows_before is not None and rows_after is not None:
        parts.append(f"Rows: {rows_before} -> {rows_after}")

    parts.append("Status: SUCCESS" if success else "Status: FAILED")

    data_logger.log(level, " | ".join(parts))
