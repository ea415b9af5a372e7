import logging

import pytest

from datasift.data import Table
from datasift.exceptions import ColumnNotFoundError, InvalidConfigurationError, UnknownOperationError
from datasift.preprocessing import CleaningPipeline
from datasift.utils import to_number


@pytest.fixture
def raw_table():
    return Table.from_records([
        {"id": "1", "city": " Oslo", "temp": "4", "color": "red"},
        {"id": "1", "city": " Oslo", "temp": "4", "color": "red"},
        {"id": "2", "city": "Rome", "temp": "n/a", "color": "blue"},
        {"id": "3", "city": "Lima", "temp": "19", "color": "red"},
        {"id": "4", "city": "Nuuk", "temp": "-2", "color": ""},
    ])


def test_full_pipeline(raw_table):
    steps = [
        {"name": "dedupe", "transformer": "duplicates", "params": {"columns": ["id", "city"]}},
        {"name": "fill_temp", "transformer": "missing_values", "params": {"columns": ["temp"], "operation": "fill-median"}},
        {"name": "trim_city", "transformer": "text_transform", "params": {"columns": ["city"], "operation": "trim"}},
        {"name": "scale_temp", "transformer": "numeric_transform", "params": {"columns": ["temp"], "operation": "scale"}},
        {"name": "encode", "transformer": "categorical_encoding", "params": {"columns": ["color"], "operation": "one-hot"}},
    ]
    result, metrics = CleaningPipeline(steps).run(raw_table)

    assert len(result) == 4
    assert result.column("city") == ["Oslo", "Rome", "Lima", "Nuuk"]
    # median of [4, 19, -2] is 4; scaled over [-2, 19]
    assert [to_number(v) for v in result.column("temp")] == pytest.approx([6 / 21, 6 / 21, 1.0, 0.0])
    assert result.headers[-2:] == ("color_red", "color_blue")

    assert list(metrics) == ["dedupe", "fill_temp", "trim_city", "scale_temp", "encode"]
    assert metrics["dedupe"]["rows_removed"] == 1
    assert metrics["dedupe"]["statistics"]["duplicate_groups_count"] == 1
    assert metrics["fill_temp"]["fill_values"] == {"temp": "4"}
    assert metrics["encode"]["new_columns"] == ["color_red", "color_blue"]
    assert metrics["encode"]["categories_count"] == {"color": 2}

    # Input untouched
    assert raw_table.column("temp")[2] == "n/a"


def test_outlier_step_remove_and_cap(outlier_table):
    remove = [{"name": "o", "transformer": "outliers", "params": {"columns": ["v"], "method": "zscore", "threshold": 1}}]
    result, metrics = CleaningPipeline(remove).run(outlier_table)
    assert result.column("v") == ["1", "2", "3"]
    assert metrics["o"]["bounds"]["v"]["method"] == "zscore"

    cap = [{"name": "o", "transformer": "outliers",
            "params": {"columns": ["v"], "method": "iqr", "threshold": 0, "action": "cap"}}]
    capped, metrics = CleaningPipeline(cap).run(outlier_table)
    assert len(capped) == 4
    # q1 = 2, q3 = 100: only the low value is pulled up
    assert capped.column("v") == ["2", "2", "3", "100"]


def test_unnamed_steps_get_positional_names(duplicate_table):
    _, metrics = CleaningPipeline([{"transformer": "duplicates"}]).run(duplicate_table)
    assert list(metrics) == ["step_0"]


def test_unknown_column_raises(raw_table):
    steps = [{"name": "fill", "transformer": "missing_values", "params": {"columns": ["nope"]}}]
    with pytest.raises(ColumnNotFoundError):
        CleaningPipeline(steps).run(raw_table)


@pytest.mark.parametrize(
    "step",
    [
        "duplicates",
        {"name": "no transformer"},
        {"transformer": "missing_values", "params": ["temp"]},
        {"transformer": "numeric_transform", "params": {"operation": "log"}},
    ],
)
def test_malformed_steps(raw_table, step):
    with pytest.raises(InvalidConfigurationError):
        CleaningPipeline([step]).run(raw_table)


def test_unknown_transformer_and_action(raw_table):
    with pytest.raises(UnknownOperationError):
        CleaningPipeline([{"transformer": "magic"}]).run(raw_table)
    with pytest.raises(UnknownOperationError):
        CleaningPipeline([{"transformer": "outliers", "params": {"columns": ["temp"], "action": "flag"}}]).run(raw_table)


def test_steps_are_logged(raw_table, caplog):
    steps = [{"name": "dedupe", "transformer": "duplicates", "params": {"columns": ["id"]}}]
    with caplog.at_level(logging.INFO):
        CleaningPipeline(steps).run(raw_table)
    assert "Running step 0: dedupe (duplicates)" in caplog.text
    assert "Action: duplicates" in caplog.text
    assert "Rows: 5 -> 4" in caplog.text


def test_failed_step_is_logged(raw_table, caplog):
    steps = [{"name": "bad", "transformer": "missing_values", "params": {"columns": ["nope"]}}]
    with caplog.at_level(logging.INFO), pytest.raises(ColumnNotFoundError):
        CleaningPipeline(steps).run(raw_table)
    assert "Status: FAILED" in caplog.text
