"""
Configuration Management

Defaults for the cleaning engine (outlier thresholds, normality alpha,
scaling range, profiling heuristics) loaded from the environment with
Pydantic validation, plus the logging bootstrap used by applications that
embed the engine.
"""

import logging
import os
from functools import lru_cache
from logging import Handler
from logging.handlers import RotatingFileHandler
from typing import Optional

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
    console_log_level: str = "WARNING",
) -> None:
    """
    Logging setup for applications embedding datasift.

    Args:
        log_level: Logging level for the root logger and the file handler
        log_file: Optional path to a rotating log file (directory is created)
        console_log_level: Logging level for console output
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # Remove all existing handlers to prevent duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        try:
            file_handler: Handler = RotatingFileHandler(
                log_file,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
            file_handler.setLevel(getattr(logging, log_level.upper(), logging.INFO))
            file_handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s [%(levelname)8s] %(name)s: %(message)s "
                    "[%(filename)s:%(lineno)d in %(funcName)s()]"
                )
            )
            root_logger.addHandler(file_handler)
        except OSError as e:
            root_logger.warning(f"Could not setup file logging to {log_file}: {e}")

    console_handler = logging.StreamHandler()
    console_handler.setLevel(getattr(logging, console_log_level.upper(), logging.WARNING))
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root_logger.addHandler(console_handler)

    root_logger.info(f"Logging initialized. Level: {log_level}, file: {log_file or 'none'}")


class Settings(BaseSettings):
    """
    Engine settings with automatic environment variable loading.
    Every field can be overridden with a DATASIFT_-prefixed variable.
    """

    model_config = SettingsConfigDict(
        env_prefix="DATASIFT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # === LOGGING ===
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    # === OUTLIER DEFAULTS ===
    ZSCORE_THRESHOLD: float = 3.0
    IQR_THRESHOLD: float = 1.5
    PERCENTILE_THRESHOLD: float = 5.0  # 5th / 95th percentile

    # === STATISTICS ===
    NORMALITY_ALPHA: float = 0.05
    CONFIDENCE_LEVEL: float = 0.95

    # === TRANSFORMS ===
    SCALE_MIN: float = 0.0
    SCALE_MAX: float = 1.0

    # === PROFILING ===
    CATEGORICAL_MIN_UNIQUE: int = 15
    CATEGORICAL_UNIQUE_RATIO: float = 0.1
    VISUALIZATION_UNIQUE_RATIO: float = 0.9

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"LOG_LEVEL must be one of {sorted(valid)}")
        return v.upper()

    @field_validator("PERCENTILE_THRESHOLD")
    @classmethod
    def validate_percentile(cls, v: float) -> float:
        if not 0 <= v <= 50:
            raise ValueError("PERCENTILE_THRESHOLD must be between 0 and 50")
        return v

    @field_validator("NORMALITY_ALPHA", "CONFIDENCE_LEVEL")
    @classmethod
    def validate_probability(cls, v: float) -> float:
        if not 0 < v < 1:
            raise ValueError("Probabilities must be strictly between 0 and 1")
        return v

    @model_validator(mode="after")
    def validate_scale_range(self) -> "Settings":
        if self.SCALE_MIN >= self.SCALE_MAX:
            raise ValueError("SCALE_MIN must be lower than SCALE_MAX")
        return self

    def setup_logging(self) -> None:
        """Initialize logging from LOG_LEVEL and LOG_FILE."""
        setup_logging(log_level=self.LOG_LEVEL, log_file=self.LOG_FILE)


@lru_cache()
def get_settings() -> Settings:
    """
    Get engine settings.
    Uses lru_cache to avoid re-reading the environment on every call.
    """
    return Settings()
