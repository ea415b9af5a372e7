from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class RegressionType(str, Enum):
    SIMPLE = "simple"
    MULTIPLE = "multiple"
    LOGISTIC = "logistic"
    EXPONENTIAL = "exponential"
    POWER = "power"


class RegressionResult(BaseModel):
    model_type: RegressionType
    dependent: str
    independents: List[str] = Field(default_factory=list)
    equation: str
    r2: float
    adjusted_r2: float
    standard_error: float
    observations: int
    coefficients: List[float] = Field(default_factory=list)  # intercept first
    slope: Optional[float] = None
    intercept: Optional[float] = None
    accuracy: Optional[float] = None  # logistic only
    residuals: List[float] = Field(default_factory=list)
    predicted_values: List[float] = Field(default_factory=list)
