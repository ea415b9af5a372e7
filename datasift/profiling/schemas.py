from typing import Dict, List

from pydantic import BaseModel, Field

from ..preprocessing.schemas import DuplicateStatistics, MissingColumnSummary


class ColumnProfile(BaseModel):
    column: str
    is_empty: bool
    unique_values: int = 0
    is_numeric: bool = False
    is_categorical: bool = False
    is_valid_for_visualization: bool = False
    frequencies: Dict[str, int] = Field(default_factory=dict)
    unique_value_list: List[str] = Field(default_factory=list)
    total_values: int = 0  # non-missing cells


class TableProfile(BaseModel):
    rows: int
    columns: int
    column_profiles: Dict[str, ColumnProfile] = Field(default_factory=dict)
    missing: List[MissingColumnSummary] = Field(default_factory=list)
    duplicates: DuplicateStatistics = Field(default_factory=DuplicateStatistics)
    numeric_columns: List[str] = Field(default_factory=list)
    categorical_columns: List[str] = Field(default_factory=list)
