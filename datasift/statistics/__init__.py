"""
Descriptive and inferential statistics over one column of raw cells.

Every function filters its input to the numeric projection first and
returns None (or [] for mode) when the sample is too small.
"""
from typing import Any, List, Sequence

from .basic import count, maximum, minimum
from .central_tendency import geometric_mean, harmonic_mean, mean, median, mode
from .dispersion import (
    coefficient_of_dispersion,
    coefficient_of_variation,
    gini_coefficient,
    interquartile_range,
    mean_absolute_deviation,
    standard_deviation,
    value_range,
    variance,
)
from .distribution_shape import (
    fisher_kurtosis,
    fisher_skewness,
    jarque_bera,
    pearson_kurtosis,
    pearson_skewness,
    quartile_skewness,
)
from .inferential import correlation_matrix, mean_confidence_interval, one_sample_t_test
from .schemas import (
    ConfidenceInterval,
    CorrelationMatrix,
    JarqueBeraResult,
    StatisticCategory,
    StatisticResult,
    TTestResult,
)


def format_jarque_bera(result: JarqueBeraResult) -> str:
    if result.statistic is None or result.p_value is None or result.is_normal is None:
        return "insufficient sample"
    verdict = "normally distributed" if result.is_normal else "not normally distributed"
    return f"statistic: {result.statistic:.4f}, p-value: {result.p_value:.4f}, {verdict}"


def get_central_tendency_statistics(cells: Sequence[Any]) -> List[StatisticResult]:
    category = StatisticCategory.CENTRAL_TENDENCY
    return [
        StatisticResult(name="Mean", value=mean(cells), category=category),
        StatisticResult(name="Geometric Mean", value=geometric_mean(cells), category=category),
        StatisticResult(name="Harmonic Mean", value=harmonic_mean(cells), category=category),
        StatisticResult(name="Median", value=median(cells), category=category),
        StatisticResult(name="Mode", value=mode(cells), category=category),
    ]


def get_dispersion_statistics(cells: Sequence[Any]) -> List[StatisticResult]:
    category = StatisticCategory.DISPERSION
    return [
        StatisticResult(name="Variance", value=variance(cells), category=category),
        StatisticResult(name="Standard Deviation", value=standard_deviation(cells), category=category),
        StatisticResult(name="Range", value=value_range(cells), category=category),
        StatisticResult(name="Interquartile Range", value=interquartile_range(cells), category=category),
        StatisticResult(name="Mean Absolute Deviation", value=mean_absolute_deviation(cells), category=category),
        StatisticResult(name="Coefficient of Variation", value=coefficient_of_variation(cells), category=category),
        StatisticResult(name="Coefficient of Dispersion", value=coefficient_of_dispersion(cells), category=category),
        StatisticResult(name="Gini Coefficient", value=gini_coefficient(cells), category=category),
    ]


def get_distribution_shape_statistics(cells: Sequence[Any]) -> List[StatisticResult]:
    category = StatisticCategory.DISTRIBUTION_SHAPE
    return [
        StatisticResult(name="Fisher Skewness", value=fisher_skewness(cells), category=category),
        StatisticResult(name="Pearson Skewness", value=pearson_skewness(cells), category=category),
        StatisticResult(name="Quartile Skewness", value=quartile_skewness(cells), category=category),
        StatisticResult(name="Fisher Kurtosis", value=fisher_kurtosis(cells), category=category),
        StatisticResult(name="Pearson Kurtosis", value=pearson_kurtosis(cells), category=category),
        StatisticResult(name="Jarque-Bera", value=format_jarque_bera(jarque_bera(cells)), category=category),
    ]


def get_basic_statistics(cells: Sequence[Any]) -> List[StatisticResult]:
    category = StatisticCategory.BASIC
    return [
        StatisticResult(name="Minimum", value=minimum(cells), category=category),
        StatisticResult(name="Maximum", value=maximum(cells), category=category),
        StatisticResult(name="Count", value=count(cells), category=category),
    ]


def calculate_descriptive_statistics(cells: Sequence[Any]) -> List[StatisticResult]:
    """Full report for one column, in display order."""
    cells = list(cells)
    return (
        get_central_tendency_statistics(cells)
        + get_dispersion_statistics(cells)
        + get_distribution_shape_statistics(cells)
        + get_basic_statistics(cells)
    )


__all__ = [
    "StatisticCategory",
    "StatisticResult",
    "JarqueBeraResult",
    "TTestResult",
    "ConfidenceInterval",
    "CorrelationMatrix",
    "mean",
    "geometric_mean",
    "harmonic_mean",
    "median",
    "mode",
    "variance",
    "standard_deviation",
    "value_range",
    "interquartile_range",
    "mean_absolute_deviation",
    "coefficient_of_variation",
    "coefficient_of_dispersion",
    "gini_coefficient",
    "fisher_skewness",
    "pearson_skewness",
    "quartile_skewness",
    "fisher_kurtosis",
    "pearson_kurtosis",
    "jarque_bera",
    "format_jarque_bera",
    "minimum",
    "maximum",
    "count",
    "one_sample_t_test",
    "mean_confidence_interval",
    "correlation_matrix",
    "calculate_descriptive_statistics",
    "get_central_tendency_statistics",
    "get_dispersion_statistics",
    "get_distribution_shape_statistics",
    "get_basic_statistics",
]
