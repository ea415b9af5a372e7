from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

Row = Dict[str, Any]


@dataclass(frozen=True)
class Table:
    """
    Ordered rows keyed by column name.
    Every operation returns a new Table with fresh row dicts; the input is never mutated.
    """
    headers: Tuple[str, ...]
    rows: Tuple[Row, ...]

    def __init__(self, headers: Sequence[str], rows: Iterable[Mapping[str, Any]] = ()):
        # Deduplicate headers, keep first occurrence order
        object.__setattr__(self, "headers", tuple(dict.fromkeys(headers)))
        object.__setattr__(self, "rows", tuple(dict(row) for row in rows))

    @classmethod
    def from_records(
        cls, records: Iterable[Mapping[str, Any]], headers: Optional[Sequence[str]] = None
    ) -> "Table":
        records = list(records)
        if headers is None:
            seen: Dict[str, None] = {}
            for record in records:
                for key in record:
                    seen.setdefault(key, None)
            headers = list(seen)
        return cls(headers, records)

    @classmethod
    def from_frame(cls, df: pd.DataFrame) -> "Table":
        headers = [str(c) for c in df.columns]
        frame = df.copy()
        frame.columns = headers
        frame = frame.astype(object).where(pd.notna(frame), None)
        records = []
        for record in frame.to_dict(orient="records"):
            # numpy scalars become plain Python values
            records.append({k: (v.item() if isinstance(v, np.generic) else v) for k, v in record.items()})
        return cls(headers, records)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame([[row.get(h) for h in self.headers] for row in self.rows], columns=list(self.headers))

    def column(self, name: str) -> List[Any]:
        """Cells of one column, None where the key is absent."""
        return [row.get(name) for row in self.rows]

    def with_rows(self, rows: Iterable[Mapping[str, Any]]) -> "Table":
        return Table(self.headers, rows)

    def with_headers(self, headers: Sequence[str]) -> "Table":
        return Table(headers, self.rows)

    def select(self, indices: Iterable[int]) -> "Table":
        return Table(self.headers, [self.rows[i] for i in indices])

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)
