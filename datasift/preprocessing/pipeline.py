"""Cleaning Pipeline Orchestrator."""

import logging
from typing import Any, Dict, List, Tuple

from ..data.table import Table
from ..exceptions import DataSiftError, InvalidConfigurationError, UnknownOperationError
from ..logging_utils import log_data_action
from ..utils import parse_enum, resolve_columns, validate_columns
from .base import BaseApplier, BaseCalculator
from .cleaning import TextCleaningApplier, TextCleaningCalculator
from .duplicates import DeduplicateApplier, DuplicateCalculator
from .encoding import CategoricalEncoderApplier, CategoricalEncoderCalculator
from .missing import MissingValueApplier, MissingValueCalculator
from .outliers import BOUNDS_CALCULATORS, OutlierCappingApplier, OutlierRemovalApplier
from .schemas import OutlierMethod
from .transformations import NumericTransformApplier, NumericTransformCalculator

logger = logging.getLogger(__name__)

TRANSFORMERS = (
    "duplicates",
    "missing_values",
    "outliers",
    "numeric_transform",
    "text_transform",
    "categorical_encoding",
)

OUTLIER_ACTIONS = ("remove", "cap")


class CleaningPipeline:
    """
    Runs a sequence of cleaning steps over a table.

    Each step is {"name": str, "transformer": str, "params": dict}. The step's
    calculator is fitted on the current table and its applier produces the
    next one.
    """

    def __init__(self, steps: List[Dict[str, Any]]):
        self.steps = steps

    def run(self, table: Table) -> Tuple[Table, Dict[str, Any]]:
        """
        Runs the pipeline on a table.
        Returns: (cleaned_table, metrics) with metrics keyed by step name.
        """
        current = table
        metrics: Dict[str, Any] = {}

        for i, step in enumerate(self.steps):
            name, transformer_type, params = self._parse_step(i, step)
            logger.info(f"Running step {i}: {name} ({transformer_type})")

            try:
                columns = resolve_columns(params)
                if transformer_type != "duplicates" and not columns:
                    raise InvalidConfigurationError(
                        f"Step '{name}' needs at least one column",
                        details={"step": name, "transformer": transformer_type},
                    )
                validate_columns(current.headers, columns)

                calculator, applier = self._get_transformer_components(transformer_type, params)

                rows_before = len(current)
                headers_before = current.headers

                fitted = calculator.fit(current, params)
                current = applier.apply(current, fitted)
            except DataSiftError as e:
                log_data_action(transformer_type, success=False, details=f"{name}: {e.message}")
                raise

            metrics[name] = self._step_metrics(transformer_type, fitted, rows_before, headers_before, current)
            log_data_action(
                transformer_type,
                details=f"{name} on {fitted.get('columns') or 'all columns'}",
                rows_before=rows_before,
                rows_after=len(current),
            )

        return current, metrics

    @staticmethod
    def _parse_step(i: int, step: Any) -> Tuple[str, str, Dict[str, Any]]:
        if not isinstance(step, dict) or "transformer" not in step:
            raise InvalidConfigurationError(
                f"Step {i} must be a mapping with a 'transformer' key", details={"step": step}
            )
        params = step.get("params") or {}
        if not isinstance(params, dict):
            raise InvalidConfigurationError(f"Step {i} params must be a mapping", details={"step": step})

        transformer_type = step["transformer"]
        if transformer_type not in TRANSFORMERS:
            raise UnknownOperationError("transformer", transformer_type, TRANSFORMERS)

        return step.get("name") or f"step_{i}", transformer_type, params

    def _get_transformer_components(
        self, type_name: str, params: Dict[str, Any]
    ) -> Tuple[BaseCalculator, BaseApplier]:
        if type_name == "duplicates":
            return DuplicateCalculator(), DeduplicateApplier()
        elif type_name == "missing_values":
            return MissingValueCalculator(), MissingValueApplier()
        elif type_name == "outliers":
            method = parse_enum(OutlierMethod, params.get("method", "zscore"), "outlier method")
            action = params.get("action", "remove")
            if action not in OUTLIER_ACTIONS:
                raise UnknownOperationError("outlier action", action, OUTLIER_ACTIONS)
            applier = OutlierCappingApplier() if action == "cap" else OutlierRemovalApplier()
            return BOUNDS_CALCULATORS[method](), applier
        elif type_name == "numeric_transform":
            return NumericTransformCalculator(), NumericTransformApplier()
        elif type_name == "text_transform":
            return TextCleaningCalculator(), TextCleaningApplier()
        else:
            return CategoricalEncoderCalculator(), CategoricalEncoderApplier()

    @staticmethod
    def _step_metrics(
        transformer_type: str,
        fitted: Dict[str, Any],
        rows_before: int,
        headers_before: Tuple[str, ...],
        table: Table,
    ) -> Dict[str, Any]:
        step_metrics: Dict[str, Any] = {
            "transformer": transformer_type,
            "rows_before": rows_before,
            "rows_after": len(table),
            "rows_removed": rows_before - len(table),
        }

        if transformer_type == "duplicates":
            step_metrics["statistics"] = fitted.get("statistics", {})
        elif transformer_type == "missing_values":
            step_metrics["fill_values"] = fitted.get("fill_values", {})
        elif transformer_type == "outliers":
            step_metrics["bounds"] = fitted.get("bounds", {})
        elif transformer_type == "categorical_encoding":
            new_cols = [h for h in table.headers if h not in headers_before]
            step_metrics["new_columns"] = new_cols
            step_metrics["categories_count"] = {
                col: len(levels) for col, levels in fitted.get("categories", {}).items()
            }

        return step_metrics
