import logging
from typing import Any, Optional, Sequence

import numpy as np
from scipy import stats

from ..config import get_settings
from ..utils import numeric_values
from .schemas import JarqueBeraResult

logger = logging.getLogger(__name__)


def _has_spread(values) -> bool:
    return float(np.var(values)) > 0


def fisher_skewness(cells: Sequence[Any]) -> Optional[float]:
    """Adjusted Fisher-Pearson skewness (G1)."""
    values = numeric_values(cells)
    if len(values) < 3 or not _has_spread(values):
        return None
    return float(stats.skew(values, bias=False))


def pearson_skewness(cells: Sequence[Any]) -> Optional[float]:
    """Pearson's second skewness coefficient: 3 * (mean - median) / std."""
    values = numeric_values(cells)
    if len(values) < 3:
        return None
    std = float(np.std(values))
    if std == 0:
        return None
    return 3 * (float(np.mean(values)) - float(np.median(values))) / std


def quartile_skewness(cells: Sequence[Any]) -> Optional[float]:
    """Bowley skewness on interpolated quartiles."""
    values = numeric_values(cells)
    if len(values) < 4:
        return None
    q1, q2, q3 = (float(q) for q in np.quantile(values, [0.25, 0.5, 0.75]))
    if q3 - q1 == 0:
        return None
    return ((q3 - q2) - (q2 - q1)) / (q3 - q1)


def fisher_kurtosis(cells: Sequence[Any]) -> Optional[float]:
    """Bias-corrected excess kurtosis (G2)."""
    values = numeric_values(cells)
    if len(values) < 4 or not _has_spread(values):
        return None
    return float(stats.kurtosis(values, fisher=True, bias=False))


def pearson_kurtosis(cells: Sequence[Any]) -> Optional[float]:
    excess = fisher_kurtosis(cells)
    if excess is None:
        return None
    return excess + 3


def jarque_bera(cells: Sequence[Any], alpha: Optional[float] = None) -> JarqueBeraResult:
    """
    Jarque-Bera normality test built on the Fisher skewness and kurtosis.

    Needs at least 8 numeric values; otherwise every field is None.
    The p-value is the chi-square (df=2) survival function, which is exp(-x/2).
    """
    if alpha is None:
        alpha = get_settings().NORMALITY_ALPHA

    values = numeric_values(cells)
    n = len(values)
    if n < 8:
        return JarqueBeraResult()

    skew = fisher_skewness(values)
    kurt = fisher_kurtosis(values)
    if skew is None or kurt is None:
        logger.debug("Jarque-Bera undefined for a constant sample")
        return JarqueBeraResult()

    statistic = n / 6 * (skew ** 2 + kurt ** 2 / 4)
    p_value = float(stats.chi2.sf(statistic, 2))

    return JarqueBeraResult(statistic=statistic, p_value=p_value, is_normal=p_value >= alpha)
