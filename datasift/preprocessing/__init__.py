from .cleaning import TextCleaningApplier, TextCleaningCalculator, transform_text
from .duplicates import (
    DeduplicateApplier,
    DuplicateCalculator,
    duplicate_key,
    find_duplicates,
    remove_duplicates,
    rows_to_remove,
)
from .encoding import CategoricalEncoderApplier, CategoricalEncoderCalculator, encode_categorical
from .missing import (
    MissingValueApplier,
    MissingValueCalculator,
    handle_missing_values,
    summarize_missing,
)
from .outliers import (
    IQRBoundsCalculator,
    OutlierCappingApplier,
    OutlierRemovalApplier,
    PercentileBoundsCalculator,
    ZScoreBoundsCalculator,
    cap_outliers,
    compute_bounds,
    detect_outliers,
    find_outlier_indices,
    remove_outliers,
)
from .pipeline import CleaningPipeline
from .schemas import (
    CategoricalOperation,
    DuplicateGroup,
    DuplicateReport,
    DuplicateStatistics,
    KeepStrategy,
    MissingColumnSummary,
    MissingValueOperation,
    NumericOperation,
    OutlierBounds,
    OutlierMethod,
    OutlierReport,
    TextOperation,
    TransformType,
)
from .transformations import (
    NumericTransformApplier,
    NumericTransformCalculator,
    transform_columns,
    transform_numeric,
)

__all__ = [
    "CleaningPipeline",
    "find_duplicates",
    "duplicate_key",
    "rows_to_remove",
    "remove_duplicates",
    "handle_missing_values",
    "summarize_missing",
    "compute_bounds",
    "find_outlier_indices",
    "detect_outliers",
    "remove_outliers",
    "cap_outliers",
    "transform_numeric",
    "transform_text",
    "encode_categorical",
    "transform_columns",
    "DuplicateCalculator",
    "DeduplicateApplier",
    "MissingValueCalculator",
    "MissingValueApplier",
    "ZScoreBoundsCalculator",
    "IQRBoundsCalculator",
    "PercentileBoundsCalculator",
    "OutlierRemovalApplier",
    "OutlierCappingApplier",
    "NumericTransformCalculator",
    "NumericTransformApplier",
    "TextCleaningCalculator",
    "TextCleaningApplier",
    "CategoricalEncoderCalculator",
    "CategoricalEncoderApplier",
    "KeepStrategy",
    "MissingValueOperation",
    "OutlierMethod",
    "TransformType",
    "NumericOperation",
    "TextOperation",
    "CategoricalOperation",
    "DuplicateGroup",
    "DuplicateStatistics",
    "DuplicateReport",
    "MissingColumnSummary",
    "OutlierBounds",
    "OutlierReport",
]
