from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, Field, model_validator


class KeepStrategy(str, Enum):
    FIRST = "first"
    LAST = "last"
    MIN_NULLS = "min-nulls"


class MissingValueOperation(str, Enum):
    REMOVE_ROWS = "remove-rows"
    FILL_MEAN = "fill-mean"
    FILL_MEDIAN = "fill-median"
    FILL_MODE = "fill-mode"
    FILL_CUSTOM = "fill-custom"


class OutlierMethod(str, Enum):
    ZSCORE = "zscore"
    IQR = "iqr"
    PERCENTILE = "percentile"


class TransformType(str, Enum):
    NUMERIC = "numeric"
    TEXT = "text"
    CATEGORICAL = "categorical"


class NumericOperation(str, Enum):
    NORMALIZE = "normalize"
    SCALE = "scale"
    LOG = "log"
    SQUARE_ROOT = "square-root"


class TextOperation(str, Enum):
    LOWERCASE = "lowercase"
    UPPERCASE = "uppercase"
    TRIM = "trim"
    PREFIX = "prefix"
    SUFFIX = "suffix"
    REGEX = "regex"


class CategoricalOperation(str, Enum):
    ONE_HOT = "one-hot"
    LABEL = "label"


# --- Duplicates ---

class DuplicateGroup(BaseModel):
    key: str
    indices: List[int]
    rows: List[Dict[str, Any]] = Field(default_factory=list)
    count: int

    @model_validator(mode="after")
    def check_count(self) -> "DuplicateGroup":
        if self.count != len(self.indices) or self.count < 2:
            raise ValueError("A duplicate group needs count == len(indices) >= 2")
        return self


class DuplicateStatistics(BaseModel):
    total_rows: int = 0
    unique_rows: int = 0
    duplicate_rows: int = 0
    duplicate_groups_count: int = 0
    duplicate_count: int = 0


class DuplicateReport(BaseModel):
    columns: List[str] = Field(default_factory=list)
    groups: List[DuplicateGroup] = Field(default_factory=list)
    statistics: DuplicateStatistics = Field(default_factory=DuplicateStatistics)


# --- Missing values ---

class MissingColumnSummary(BaseModel):
    column: str
    missing_count: int
    missing_percentage: float


# --- Outliers ---

class OutlierBounds(BaseModel):
    lower_bound: float
    upper_bound: float
    method: OutlierMethod
    threshold: float
    method_details: Dict[str, float] = Field(default_factory=dict)


class OutlierReport(BaseModel):
    column: str
    bounds: OutlierBounds
    outlier_indices: List[int] = Field(default_factory=list)
    outlier_rows: List[Dict[str, Any]] = Field(default_factory=list)
    outlier_count: int = 0
    numeric_count: int = 0
    total_rows: int = 0
