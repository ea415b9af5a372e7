"""
Regression fits over the numeric projection of a table.

Linear models (simple, multiple, and the log-linearised exponential and
power models) use ordinary least squares via scikit-learn; logistic
regression uses an effectively unpenalised LogisticRegression. Every fit
returns None instead of raising when the data cannot support it.
"""
import logging
import math
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np
from sklearn.linear_model import LinearRegression, LogisticRegression
from sklearn.metrics import log_loss, r2_score

from ..data.table import Table
from ..utils import parse_enum, to_number
from .schemas import RegressionResult, RegressionType

logger = logging.getLogger(__name__)

# Large C makes the L2 penalty negligible
LOGISTIC_C = 1e6
LOGISTIC_MAX_ITER = 1000


def paired_observations(
    table: Table, dependent: str, independents: Sequence[str]
) -> Tuple[np.ndarray, np.ndarray]:
    """Rows where the dependent and every independent cell are numeric."""
    xs: List[List[float]] = []
    ys: List[float] = []
    for row in table.rows:
        y = to_number(row.get(dependent))
        x = [to_number(row.get(col)) for col in independents]
        if y is None or any(v is None for v in x):
            continue
        xs.append(x)
        ys.append(y)
    return np.asarray(xs, dtype=float).reshape(len(xs), len(independents)), np.asarray(ys, dtype=float)


def _is_estimable(X: np.ndarray, y: np.ndarray) -> bool:
    n, p = X.shape
    if n < p + 2:
        return False
    design = np.column_stack([np.ones(n), X])
    if np.linalg.matrix_rank(design) < p + 1:
        return False
    # Constant dependent: R² undefined
    return float(np.sum((y - y.mean()) ** 2)) > 0


def _adjusted_r2(r2: float, n: int, p: int) -> float:
    return 1 - (1 - r2) * (n - 1) / (n - p - 1)


def _linear_equation(intercept: float, slopes: Sequence[float]) -> str:
    if len(slopes) == 1:
        return f"y = {slopes[0]:.4f}x + {intercept:.4f}"
    equation = f"y = {intercept:.4f}"
    for i, coef in enumerate(slopes, start=1):
        sign = " + " if coef >= 0 else " - "
        equation += f"{sign}{abs(coef):.4f}x{i}"
    return equation


def _fit_linear(X: np.ndarray, y: np.ndarray, model_type: RegressionType) -> Optional[dict]:
    if not _is_estimable(X, y):
        return None

    n, p = X.shape
    model = LinearRegression().fit(X, y)
    predicted = model.predict(X)
    residuals = y - predicted
    r2 = float(r2_score(y, predicted))
    intercept = float(model.intercept_)
    slopes = [float(c) for c in model.coef_]

    return {
        "model_type": model_type,
        "equation": _linear_equation(intercept, slopes),
        "r2": r2,
        "adjusted_r2": _adjusted_r2(r2, n, p),
        "standard_error": math.sqrt(float(np.sum(residuals ** 2)) / (n - p - 1)),
        "observations": n,
        "coefficients": [intercept] + slopes,
        "slope": slopes[0] if p == 1 else None,
        "intercept": intercept,
        "residuals": residuals.tolist(),
        "predicted_values": predicted.tolist(),
    }


def _fit_log_linear(X: np.ndarray, y: np.ndarray, model_type: RegressionType) -> Optional[dict]:
    """
    Exponential (ln y = ln a + b x) or power (ln y = ln a + b ln x).
    R² is reported on the log scale, standard error on the original scale.
    """
    x = X[:, 0]
    keep = y > 0
    if model_type == RegressionType.POWER:
        keep &= x > 0
    x, y = x[keep], y[keep]

    features = np.log(x) if model_type == RegressionType.POWER else x
    log_fit = _fit_linear(features.reshape(-1, 1), np.log(y), model_type)
    if log_fit is None:
        return None

    n = len(y)
    a = math.exp(log_fit["intercept"])
    b = log_fit["slope"]
    if model_type == RegressionType.POWER:
        predicted = a * np.power(x, b)
        equation = f"y = {a:.4f} * x^{b:.4f}"
    else:
        predicted = a * np.exp(b * x)
        equation = f"y = {a:.4f} * e^({b:.4f}x)"
    residuals = y - predicted

    log_fit.update(
        equation=equation,
        standard_error=math.sqrt(float(np.sum(residuals ** 2)) / (n - 2)),
        coefficients=[a, b],
        slope=b,
        intercept=a,
        residuals=residuals.tolist(),
        predicted_values=predicted.tolist(),
    )
    return log_fit


def _fit_logistic(X: np.ndarray, y: np.ndarray) -> Optional[dict]:
    if not np.all((y == 0) | (y == 1)):
        logger.debug("Logistic regression needs a 0/1 dependent")
        return None
    if not _is_estimable(X, y):
        # A constant 0/1 dependent means one class only
        return None

    n, p = X.shape
    labels = y.astype(int)
    model = LogisticRegression(C=LOGISTIC_C, max_iter=LOGISTIC_MAX_ITER).fit(X, labels)
    probabilities = model.predict_proba(X)[:, 1]
    predicted_class = (probabilities >= 0.5).astype(float)
    accuracy = float(np.mean(predicted_class == y))

    # McFadden pseudo-R²: 1 - LL(model) / LL(intercept only)
    full_ll = -log_loss(labels, probabilities, normalize=False, labels=[0, 1])
    null_ll = -log_loss(labels, np.full(n, y.mean()), normalize=False, labels=[0, 1])
    r2 = 1 - full_ll / null_ll

    intercept = float(model.intercept_[0])
    slopes = [float(c) for c in model.coef_[0]]
    if p == 1:
        equation = f"logit(p) = {intercept:.4f} + {slopes[0]:.4f}x"
    else:
        equation = "logit(p)" + _linear_equation(intercept, slopes)[1:]

    return {
        "model_type": RegressionType.LOGISTIC,
        "equation": equation,
        "r2": r2,
        "adjusted_r2": _adjusted_r2(r2, n, p),
        "standard_error": math.sqrt(accuracy * (1 - accuracy) / n),
        "observations": n,
        "coefficients": [intercept] + slopes,
        "slope": slopes[0] if p == 1 else None,
        "intercept": intercept,
        "accuracy": accuracy,
        "residuals": (y - probabilities).tolist(),
        "predicted_values": probabilities.tolist(),
    }


def fit_regression(
    table: Table,
    dependent: str,
    independents: Sequence[str],
    model_type: Union[str, RegressionType] = RegressionType.SIMPLE,
) -> Optional[RegressionResult]:
    """
    Fit one regression model.

    simple, exponential and power use the first independent column; multiple
    and logistic use all of them. Returns None when too few usable rows
    remain, the design is rank deficient or the dependent is constant.
    """
    model_type = parse_enum(RegressionType, model_type, "regression type")
    independents = list(independents)
    if not independents:
        return None

    if model_type in (RegressionType.SIMPLE, RegressionType.EXPONENTIAL, RegressionType.POWER):
        independents = independents[:1]

    X, y = paired_observations(table, dependent, independents)

    if model_type in (RegressionType.SIMPLE, RegressionType.MULTIPLE):
        fit = _fit_linear(X, y, model_type)
    elif model_type == RegressionType.LOGISTIC:
        fit = _fit_logistic(X, y)
    else:
        fit = _fit_log_linear(X, y, model_type)

    if fit is None:
        logger.info(f"{model_type.value} regression of '{dependent}' on {independents} is not estimable")
        return None

    return RegressionResult(dependent=dependent, independents=independents, **fit)
