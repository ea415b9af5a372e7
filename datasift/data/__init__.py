from .table import Row, Table

__all__ = ["Row", "Table"]
