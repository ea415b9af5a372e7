import math

import numpy as np
import pandas as pd
import pytest

from datasift.data import Table
from datasift.exceptions import ColumnNotFoundError
from datasift.utils import (
    CellKind,
    classify_cell,
    format_cell,
    format_number,
    is_missing,
    numeric_values,
    to_number,
    validate_columns,
)


class TestCellClassification:
    @pytest.mark.parametrize("value", [None, float("nan"), "", "  ", "N/A", "na", "NULL", "undefined", "-", "NaN", "#n/a"])
    def test_missing_values(self, value) -> None:
        assert is_missing(value)

    @pytest.mark.parametrize("value", ["0", 0, "abc", "none", "#value!", False])
    def test_present_values(self, value) -> None:
        assert not is_missing(value)

    def test_classify_cell_kinds(self) -> None:
        row = {"a": None, "b": "n/a", "c": " 3.5 ", "d": "hello", "e": 7}
        assert classify_cell(row, "missing") == CellKind.ABSENT
        assert classify_cell(row, "a") == CellKind.NULL
        assert classify_cell(row, "b") == CellKind.INVALID
        assert classify_cell(row, "c") == CellKind.NUMERIC
        assert classify_cell(row, "d") == CellKind.TEXT
        assert classify_cell(row, "e") == CellKind.NUMERIC
        assert CellKind.ABSENT.is_missing and not CellKind.TEXT.is_missing


class TestNumericCoercion:
    def test_decimal_literals(self) -> None:
        assert to_number("42") == 42.0
        assert to_number(" -1.5 ") == -1.5
        assert to_number("+.5") == 0.5
        assert to_number("1e3") == 1000.0
        assert to_number(3) == 3.0

    @pytest.mark.parametrize("value", ["abc", "1,000", "1_000", "0x10", "inf", float("inf"), True, None, "", "n/a"])
    def test_non_numeric(self, value) -> None:
        assert to_number(value) is None

    def test_numeric_projection_drops_invalid(self) -> None:
        assert numeric_values(["1", "", None, "x", 2, "n/a", "3.5"]) == [1.0, 2.0, 3.5]


class TestFormatting:
    def test_format_number(self) -> None:
        assert format_number(2.0) == "2"
        assert format_number(-3.0) == "-3"
        assert format_number(2.5) == "2.5"
        assert format_number(0.1 + 0.2) == repr(0.1 + 0.2)

    def test_format_cell(self) -> None:
        assert format_cell(None) == ""
        assert format_cell(float("nan")) == ""
        assert format_cell(4.0) == "4"
        assert format_cell("text") == "text"


class TestTable:
    def test_from_records_infers_headers_in_first_seen_order(self) -> None:
        table = Table.from_records([{"a": 1}, {"b": 2, "a": 3}, {"c": 4}])
        assert table.headers == ("a", "b", "c")
        assert len(table) == 3
        assert table.column("b") == [None, 2, None]

    def test_rows_are_copied(self) -> None:
        records = [{"a": "1"}]
        table = Table.from_records(records)
        records[0]["a"] = "changed"
        assert table.rows[0]["a"] == "1"

    def test_select_and_with_rows(self) -> None:
        table = Table(["a"], [{"a": "1"}, {"a": "2"}, {"a": "3"}])
        assert table.select([2, 0]).column("a") == ["3", "1"]
        assert table.with_rows([{"a": "9"}]).headers == ("a",)
        assert [row["a"] for row in table] == ["1", "2", "3"]

    def test_with_headers_keeps_rows(self) -> None:
        table = Table(["a"], [{"a": "1", "b": "x"}])
        renamed = table.with_headers(["a", "b", "a"])
        assert renamed.headers == ("a", "b")
        assert renamed.rows == table.rows
        assert renamed.column("b") == ["x"]
        assert table.headers == ("a",)

    def test_frame_round_trip_turns_nan_into_none(self) -> None:
        df = pd.DataFrame({"x": [1.5, np.nan], "y": ["a", None]})
        table = Table.from_frame(df)
        assert table.headers == ("x", "y")
        assert table.rows[0] == {"x": 1.5, "y": "a"}
        assert table.rows[1]["x"] is None
        assert table.rows[1]["y"] is None

        frame = table.to_frame()
        assert list(frame.columns) == ["x", "y"]
        assert math.isclose(frame.loc[0, "x"], 1.5)

    def test_table_is_frozen(self) -> None:
        table = Table(["a"], [])
        with pytest.raises(Exception):
            table.headers = ("b",)


def test_validate_columns_raises_for_unknown_column() -> None:
    validate_columns(("a", "b"), ["a"])
    with pytest.raises(ColumnNotFoundError) as exc:
        validate_columns(("a", "b"), ["a", "zzz"])
    assert exc.value.column == "zzz"
    assert exc.value.details["available_columns"] == ["a", "b"]
