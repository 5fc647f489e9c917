"""Product comparison: bounded selection and typed feature matrix."""

from marketplace.comparison.features import FEATURES, Feature, FeatureId, read_feature
from marketplace.comparison.matrix import ComparisonMatrix, MatrixRow, build_comparison_matrix
from marketplace.comparison.selection import (
    DEFAULT_COMPARISON_LIMIT,
    AddOutcome,
    AddStatus,
    ComparisonSelection,
)

__all__ = [
    "DEFAULT_COMPARISON_LIMIT",
    "FEATURES",
    "AddOutcome",
    "AddStatus",
    "ComparisonMatrix",
    "ComparisonSelection",
    "Feature",
    "FeatureId",
    "MatrixRow",
    "build_comparison_matrix",
    "read_feature",
]
