import math

import pytest

from datasift.data import Table
from datasift.exceptions import UnknownOperationError
from datasift.preprocessing import (
    IQRBoundsCalculator,
    OutlierCappingApplier,
    OutlierMethod,
    OutlierRemovalApplier,
    PercentileBoundsCalculator,
    ZScoreBoundsCalculator,
    cap_outliers,
    compute_bounds,
    detect_outliers,
    find_outlier_indices,
    remove_outliers,
)
from datasift.utils import to_number

STD_A = math.sqrt(1801.25)


class TestZScore:
    def test_scenario_bounds_and_flags(self, outlier_table) -> None:
        report = detect_outliers(outlier_table, "v", "zscore", threshold=1)
        assert report.bounds.method_details["mean"] == pytest.approx(26.5)
        assert report.bounds.method_details["std_dev"] == pytest.approx(STD_A)
        assert report.bounds.upper_bound == pytest.approx(26.5 + STD_A)
        assert report.bounds.lower_bound == pytest.approx(26.5 - STD_A)
        assert report.outlier_indices == [3]
        assert report.outlier_rows == [{"v": "100"}]
        assert report.outlier_count == 1
        assert report.numeric_count == 4
        assert report.total_rows == 4

    def test_cap_replaces_with_upper_bound(self, outlier_table) -> None:
        result = cap_outliers(outlier_table, "v", "zscore", threshold=1)
        assert result.column("v")[:3] == ["1", "2", "3"]
        assert to_number(result.column("v")[3]) == pytest.approx(26.5 + STD_A)

    def test_cap_low_values_to_lower_bound(self) -> None:
        table = Table.from_records([{"v": v} for v in ["-100", "1", "2", "3"]])
        bounds = compute_bounds(table, "v", "zscore", 1)
        result = cap_outliers(table, "v", "zscore", 1)
        assert to_number(result.column("v")[0]) == pytest.approx(bounds.lower_bound)

    def test_default_threshold_is_three(self, outlier_table) -> None:
        assert compute_bounds(outlier_table, "v", "zscore").threshold == 3.0
        assert detect_outliers(outlier_table, "v", "zscore").outlier_indices == []

    def test_default_threshold_from_environment(self, outlier_table, monkeypatch) -> None:
        monkeypatch.setenv("DATASIFT_ZSCORE_THRESHOLD", "1")
        assert detect_outliers(outlier_table, "v", "zscore").outlier_indices == [3]

    def test_explicit_zero_threshold_is_respected(self, outlier_table) -> None:
        report = detect_outliers(outlier_table, "v", OutlierMethod.ZSCORE, threshold=0)
        assert report.bounds.threshold == 0
        assert report.outlier_indices == [0, 1, 2, 3]

    def test_constant_column_flags_nothing(self) -> None:
        table = Table.from_records([{"v": "5"}] * 4)
        assert detect_outliers(table, "v", "zscore", 1).outlier_indices == []


class TestIQR:
    def test_floor_index_quartiles(self) -> None:
        table = Table.from_records([{"v": v} for v in ["5", "1", "4", "2", "100", "3"]])
        bounds = compute_bounds(table, "v", "iqr", 1.5)
        assert bounds.method_details == {"q1": 2.0, "q3": 5.0, "iqr": 3.0}
        assert bounds.lower_bound == pytest.approx(-2.5)
        assert bounds.upper_bound == pytest.approx(9.5)
        assert find_outlier_indices(table, "v", bounds) == [4]


class TestPercentile:
    def test_bounds_use_clamped_indices(self, outlier_table) -> None:
        bounds = compute_bounds(outlier_table, "v", "percentile", 25)
        assert (bounds.lower_bound, bounds.upper_bound) == (2.0, 100.0)
        assert find_outlier_indices(outlier_table, "v", bounds) == [0]

        bounds = compute_bounds(outlier_table, "v", "percentile", 0)
        assert (bounds.lower_bound, bounds.upper_bound) == (1.0, 100.0)
        assert bounds.method_details == {"lower_percentile": 0.0, "upper_percentile": 100.0}


def test_empty_projection():
    table = Table.from_records([{"v": "a"}, {"v": None}])
    for method in OutlierMethod:
        report = detect_outliers(table, "v", method)
        assert (report.bounds.lower_bound, report.bounds.upper_bound) == (0.0, 0.0)
        assert report.outlier_indices == []
        assert report.numeric_count == 0


def test_threshold_monotonicity(outlier_table):
    for low, high in [(0.5, 1.0), (1.0, 2.0)]:
        strict = set(detect_outliers(outlier_table, "v", "zscore", low).outlier_indices)
        loose = set(detect_outliers(outlier_table, "v", "zscore", high).outlier_indices)
        assert loose <= strict


def test_remove_preserves_order_and_other_cells():
    table = Table.from_records([
        {"v": "1", "t": "a"}, {"v": "x", "t": "b"}, {"v": "100", "t": "c"}, {"v": "2", "t": "d"},
    ])
    result = remove_outliers(table, "v", "zscore", 1)
    assert result.column("t") == ["a", "b", "d"]

    capped = cap_outliers(table, "v", "zscore", 1)
    assert capped.column("v")[1] == "x"
    assert capped.column("t") == ["a", "b", "c", "d"]


def test_unknown_method(outlier_table):
    with pytest.raises(UnknownOperationError):
        compute_bounds(outlier_table, "v", "mad")


def test_calculators_and_appliers(outlier_table):
    params = ZScoreBoundsCalculator().fit(outlier_table, {"columns": ["v"], "threshold": 1})
    assert params["type"] == "zscore"
    assert len(OutlierRemovalApplier().apply(outlier_table, params)) == 3

    capped = OutlierCappingApplier().apply(outlier_table, params)
    assert to_number(capped.column("v")[3]) == pytest.approx(26.5 + STD_A)

    iqr_params = IQRBoundsCalculator().fit(outlier_table, {"columns": ["v"]})
    assert iqr_params["bounds"]["v"]["threshold"] == 1.5

    pct_params = PercentileBoundsCalculator().fit(outlier_table, {"columns": ["v"], "threshold": 25})
    assert pct_params["bounds"]["v"]["lower_bound"] == 2.0


@pytest.mark.parametrize("method, threshold", [("zscore", 1), ("iqr", 0), ("percentile", 25)])
def test_every_row_is_kept_or_removed(outlier_table, method, threshold):
    flagged = detect_outliers(outlier_table, "v", method, threshold).outlier_indices
    kept = remove_outliers(outlier_table, "v", method, threshold)
    assert len(kept) + len(flagged) == len(outlier_table)
