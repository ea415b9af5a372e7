from enum import Enum
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field


class StatisticCategory(str, Enum):
    CENTRAL_TENDENCY = "Central Tendency"
    DISPERSION = "Dispersion"
    DISTRIBUTION_SHAPE = "Distribution Shape"
    BASIC = "Basic"


StatisticValue = Union[float, int, str, List[Union[float, str]], None]


class StatisticResult(BaseModel):
    name: str
    value: StatisticValue = None  # None means undefined for this sample
    category: StatisticCategory


class JarqueBeraResult(BaseModel):
    statistic: Optional[float] = None
    p_value: Optional[float] = None
    is_normal: Optional[bool] = None


class TTestResult(BaseModel):
    mu: float
    mean: float
    standard_error: float
    t_statistic: float
    degrees_of_freedom: int
    p_value: float
    alpha: float
    significant: bool


class ConfidenceInterval(BaseModel):
    confidence: float
    mean: float
    lower: float
    upper: float
    margin_of_error: float
    variance: float  # population point estimate
    standard_deviation: float
    observations: int


class CorrelationMatrix(BaseModel):
    method: str
    columns: List[str] = Field(default_factory=list)
    values: Dict[str, Dict[str, Optional[float]]] = Field(default_factory=dict)
