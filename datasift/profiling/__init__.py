from .analyzer import analyze_column, profile_table
from .schemas import ColumnProfile, TableProfile

__all__ = ["analyze_column", "profile_table", "ColumnProfile", "TableProfile"]
