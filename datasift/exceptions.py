from typing import Any, Dict, Iterable, Optional


class DataSiftError(Exception):
    """Base exception for data cleaning errors."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ColumnNotFoundError(DataSiftError):
    """Raised when a requested column is not part of the table headers."""
    def __init__(self, column: str, available: Iterable[str] = ()):
        super().__init__(
            f"Column '{column}' not found",
            details={"column": column, "available_columns": list(available)},
        )
        self.column = column


class UnknownOperationError(DataSiftError):
    """Raised for an unsupported operation, method or strategy name."""
    def __init__(self, kind: str, value: Any, supported: Iterable[str] = ()):
        super().__init__(
            f"Unknown {kind}: {value}",
            details={"kind": kind, "value": value, "supported": list(supported)},
        )


class InvalidConfigurationError(DataSiftError):
    """Raised when a pipeline step configuration is malformed."""
    pass
