from .regression import fit_regression, paired_observations
from .schemas import RegressionResult, RegressionType

__all__ = ["fit_regression", "paired_observations", "RegressionResult", "RegressionType"]
