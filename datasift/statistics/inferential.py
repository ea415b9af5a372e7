"""
Inferential statistics: one-sample t-test, confidence interval for the mean
and pairwise correlation between numeric columns.
"""
import logging
from typing import Any, Optional, Sequence

import numpy as np
import pandas as pd
from scipy import stats

from ..config import get_settings
from ..data.table import Table
from ..exceptions import UnknownOperationError
from ..utils import numeric_values, to_number
from .schemas import ConfidenceInterval, CorrelationMatrix, TTestResult

logger = logging.getLogger(__name__)

CORRELATION_METHODS = ("pearson", "spearman", "kendall")


def one_sample_t_test(
    cells: Sequence[Any], mu: float = 0.0, alpha: Optional[float] = None
) -> Optional[TTestResult]:
    """
    Two-sided one-sample t-test of H0: population mean == mu.
    Returns None for fewer than two values or a constant sample.
    """
    if alpha is None:
        alpha = get_settings().NORMALITY_ALPHA

    values = numeric_values(cells)
    if len(values) < 2 or float(np.std(values)) == 0:
        return None

    result = stats.ttest_1samp(values, popmean=mu)
    p_value = float(result.pvalue)

    return TTestResult(
        mu=mu,
        mean=float(np.mean(values)),
        standard_error=float(stats.sem(values)),
        t_statistic=float(result.statistic),
        degrees_of_freedom=len(values) - 1,
        p_value=p_value,
        alpha=alpha,
        significant=p_value < alpha,
    )


def mean_confidence_interval(
    cells: Sequence[Any], confidence: Optional[float] = None
) -> Optional[ConfidenceInterval]:
    if confidence is None:
        confidence = get_settings().CONFIDENCE_LEVEL

    values = numeric_values(cells)
    n = len(values)
    if n < 2:
        return None

    avg = float(np.mean(values))
    sem = float(stats.sem(values))
    critical = float(stats.t.ppf((1 + confidence) / 2, n - 1))
    margin = critical * sem

    return ConfidenceInterval(
        confidence=confidence,
        mean=avg,
        lower=avg - margin,
        upper=avg + margin,
        margin_of_error=margin,
        variance=float(np.var(values)),
        standard_deviation=float(np.std(values)),
        observations=n,
    )


def correlation_matrix(
    table: Table, columns: Sequence[str], method: str = "pearson"
) -> CorrelationMatrix:
    """
    Pairwise correlation over the numeric cells of each column.
    Pairs without enough overlapping numeric values (or with a constant
    side) are None; the diagonal is always 1.
    """
    if method not in CORRELATION_METHODS:
        raise UnknownOperationError("correlation method", method, CORRELATION_METHODS)

    columns = list(dict.fromkeys(columns))
    frame = pd.DataFrame(
        {col: [to_number(cell) for cell in table.column(col)] for col in columns},
        dtype=float,
    )
    corr = frame.corr(method=method) if columns else pd.DataFrame()

    values = {}
    for left in columns:
        values[left] = {}
        for right in columns:
            if left == right:
                values[left][right] = 1.0
                continue
            coefficient = corr.at[left, right]
            values[left][right] = None if pd.isna(coefficient) else float(coefficient)

    logger.debug(f"Computed {method} correlation for {len(columns)} columns")
    return CorrelationMatrix(method=method, columns=columns, values=values)
