import pytest

from datasift.data import Table
from datasift.exceptions import UnknownOperationError
from datasift.preprocessing import (
    MissingValueApplier,
    MissingValueCalculator,
    MissingValueOperation,
    handle_missing_values,
    summarize_missing,
)


def test_fill_mean(missing_table):
    result = handle_missing_values(missing_table, "v", "fill-mean")
    assert result.column("v") == ["1", "2", "2", "2", "3"]


def test_fill_median_and_mode():
    table = Table.from_records([{"v": "1"}, {"v": "1"}, {"v": "4"}, {"v": None}, {"v": "10"}])
    assert handle_missing_values(table, "v", "fill-median").column("v")[3] == "2.5"
    assert handle_missing_values(table, "v", MissingValueOperation.FILL_MODE).column("v")[3] == "1"


def test_fill_custom(missing_table):
    result = handle_missing_values(missing_table, "v", "fill-custom", custom_value="unknown")
    assert result.column("v") == ["1", "unknown", "2", "unknown", "3"]


def test_remove_rows(missing_table):
    result = handle_missing_values(missing_table, "v", "remove-rows")
    assert result.column("v") == ["1", "2", "3"]


def test_text_cells_are_left_alone():
    table = Table.from_records([{"v": "abc"}, {"v": ""}, {"v": "4"}])
    result = handle_missing_values(table, "v", "fill-mean")
    assert result.column("v") == ["abc", "4", "4"]


def test_undefined_statistic_fills_empty_string():
    table = Table.from_records([{"v": "abc"}, {"v": None}])
    result = handle_missing_values(table, "v", "fill-mean")
    assert result.column("v") == ["abc", ""]


def test_mean_of_zero_fills_zero():
    table = Table.from_records([{"v": "-1"}, {"v": "1"}, {"v": ""}])
    assert handle_missing_values(table, "v", "fill-mean").column("v")[2] == "0"


def test_absent_keys_are_filled():
    table = Table.from_records([{"v": "2", "w": "a"}, {"w": "b"}])
    result = handle_missing_values(table, "v", "fill-mean")
    assert result.rows[1] == {"w": "b", "v": "2"}


def test_unknown_column_is_all_absent():
    table = Table.from_records([{"v": "1"}])
    result = handle_missing_values(table, "other", "fill-custom", custom_value="z")
    assert result.headers == ("v", "other")
    assert result.column("other") == ["z"]
    assert handle_missing_values(table, "other", "remove-rows").rows == ()


def test_unknown_operation(missing_table):
    with pytest.raises(UnknownOperationError) as exc:
        handle_missing_values(missing_table, "v", "fill-average")
    assert "fill-average" in str(exc.value)


def test_fill_is_idempotent(missing_table):
    once = handle_missing_values(missing_table, "v", "fill-mean")
    assert handle_missing_values(once, "v", "fill-mean").rows == once.rows


def test_input_not_mutated(missing_table):
    handle_missing_values(missing_table, "v", "fill-mean")
    assert missing_table.column("v") == ["1", "", "2", "n/a", "3"]


def test_summarize_missing(mixed_table):
    summary = {s.column: s for s in summarize_missing(mixed_table)}
    assert summary["name"].missing_count == 1
    assert summary["age"].missing_count == 1
    assert summary["color"].missing_percentage == pytest.approx(25.0)
    assert summary["score"].missing_count == 0


def test_calculator_and_applier(missing_table):
    params = MissingValueCalculator().fit(missing_table, {"columns": ["v"], "operation": "fill-median"})
    assert params["fill_values"] == {"v": "2"}
    assert MissingValueApplier().apply(missing_table, params).column("v") == ["1", "2", "2", "2", "3"]

    params = MissingValueCalculator().fit(missing_table, {"column": "v", "operation": "remove-rows"})
    assert len(MissingValueApplier().apply(missing_table, params)) == 3
