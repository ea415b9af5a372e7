"""
datasift: tabular data cleaning and statistics.

Pure operations over an in-memory Table: duplicate, missing-value and
outlier remediation, column transforms, descriptive and inferential
statistics, column profiling and simple regression fits.
"""

from .config import Settings, get_settings, setup_logging
from .data import Table
from .exceptions import (
    ColumnNotFoundError,
    DataSiftError,
    InvalidConfigurationError,
    UnknownOperationError,
)
from .modeling import RegressionResult, RegressionType, fit_regression
from .preprocessing import (
    CleaningPipeline,
    cap_outliers,
    detect_outliers,
    find_duplicates,
    handle_missing_values,
    remove_duplicates,
    remove_outliers,
    transform_columns,
)
from .profiling import analyze_column, profile_table
from .statistics import calculate_descriptive_statistics
from .utils import CellKind, classify_cell, is_missing, to_number, validate_columns

__version__ = "0.1.0"

__all__ = [
    "Table",
    "CellKind",
    "classify_cell",
    "is_missing",
    "to_number",
    "validate_columns",
    "Settings",
    "get_settings",
    "setup_logging",
    "DataSiftError",
    "ColumnNotFoundError",
    "UnknownOperationError",
    "InvalidConfigurationError",
    "calculate_descriptive_statistics",
    "find_duplicates",
    "remove_duplicates",
    "handle_missing_values",
    "detect_outliers",
    "remove_outliers",
    "cap_outliers",
    "transform_columns",
    "CleaningPipeline",
    "analyze_column",
    "profile_table",
    "fit_regression",
    "RegressionType",
    "RegressionResult",
]
