"""Side-by-side feature matrix over the selected products."""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel

from marketplace.comparison.features import FEATURES, FeatureId, FeatureValue
from marketplace.comparison.selection import DEFAULT_COMPARISON_LIMIT
from marketplace.domain.errors import ComparisonLimitError
from marketplace.domain.models import ComparisonProduct


class MatrixRow(BaseModel, frozen=True):
    """One feature across all compared products, in product order."""

    feature: FeatureId
    label: str
    values: list[FeatureValue]


class ComparisonMatrix(BaseModel, frozen=True):
    """Product headers plus one row per feature."""

    product_ids: list[str]
    product_names: list[str]
    rows: list[MatrixRow]
    descriptions: list[str]


def build_comparison_matrix(
    products: Sequence[ComparisonProduct],
    limit: int = DEFAULT_COMPARISON_LIMIT,
) -> ComparisonMatrix:
    """Build the comparison matrix for *products*.

    An empty product list yields an empty matrix (no rows).

    Raises:
        ComparisonLimitError: If more than *limit* products are given.
    """
    if len(products) > limit:
        raise ComparisonLimitError(len(products), limit)

    if not products:
        return ComparisonMatrix(product_ids=[], product_names=[], rows=[], descriptions=[])

    rows = [
        MatrixRow(
            feature=feature.id,
            label=feature.label,
            values=[feature.read(product) for product in products],
        )
        for feature in FEATURES
    ]
    return ComparisonMatrix(
        product_ids=[p.id for p in products],
        product_names=[p.name for p in products],
        rows=rows,
        descriptions=[p.description for p in products],
    )
