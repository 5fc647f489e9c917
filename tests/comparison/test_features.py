"""Tests for typed comparison feature accessors."""

from decimal import Decimal

import pytest

from marketplace.comparison.features import (
    FEATURES,
    FeatureId,
    read_feature,
    read_origin,
    read_price,
    read_stock,
)
from marketplace.domain.models import ComparisonProduct, ProductOrigin


class TestDisplayValues:
    def test_price(self, apples: ComparisonProduct) -> None:
        assert read_price(apples) == "$12.99 / case"

    def test_price_pads_cents(self, honey: ComparisonProduct) -> None:
        assert read_price(honey) == "$8.50 / jar"

    def test_seller(self, apples: ComparisonProduct) -> None:
        assert read_feature(apples, FeatureId.SELLER) == "Green Valley Farms (4.5 ★)"

    def test_rating(self, apples: ComparisonProduct) -> None:
        assert read_feature(apples, FeatureId.RATING) == "4.8 (120 reviews)"

    def test_stock(self, apples: ComparisonProduct, honey: ComparisonProduct) -> None:
        assert read_stock(apples) == "In Stock (40)"
        assert read_stock(honey) == "Out of Stock"

    def test_origin_with_region(self, apples: ComparisonProduct) -> None:
        assert read_origin(apples) == "Washington, USA"

    def test_origin_country_only(self, honey: ComparisonProduct) -> None:
        product = honey.model_copy(update={"origin": ProductOrigin(country="Mexico")})
        assert read_origin(product) == "Mexico"

    def test_origin_absent(self, honey: ComparisonProduct) -> None:
        assert read_origin(honey) is None
        product = honey.model_copy(update={"origin": ProductOrigin(region="Oaxaca")})
        assert read_origin(product) is None


class TestSpecifications:
    @pytest.mark.parametrize(
        ("feature", "expected"),
        [
            (FeatureId.GLUTEN_FREE, True),
            (FeatureId.VEGAN, True),
            (FeatureId.ECOFRIENDLY, True),
            (FeatureId.COMPOSTABLE, False),
            (FeatureId.BIODEGRADABLE, None),
            (FeatureId.RECYCLABLE, None),
        ],
    )
    def test_specified_values(
        self, apples: ComparisonProduct, feature: FeatureId, expected: bool | None
    ) -> None:
        assert read_feature(apples, feature) is expected

    @pytest.mark.parametrize(
        "feature",
        [
            FeatureId.GLUTEN_FREE,
            FeatureId.VEGAN,
            FeatureId.VEGETARIAN,
            FeatureId.ECOFRIENDLY,
            FeatureId.COMPOSTABLE,
            FeatureId.BIODEGRADABLE,
            FeatureId.RECYCLABLE,
        ],
    )
    def test_missing_specifications_read_as_absent(
        self, honey: ComparisonProduct, feature: FeatureId
    ) -> None:
        assert read_feature(honey, feature) is None

    def test_listing_flags(self, apples: ComparisonProduct) -> None:
        assert read_feature(apples, FeatureId.ORGANIC) is True
        assert read_feature(apples, FeatureId.NON_GMO) is True
        assert read_feature(apples, FeatureId.FREE_SHIPPING) is False
        assert read_feature(apples, FeatureId.BULK_DISCOUNT) is True


class TestFeatureTable:
    def test_every_feature_has_one_row_in_order(self) -> None:
        assert [f.id for f in FEATURES] == list(FeatureId)

    def test_labels(self) -> None:
        labels = {f.id: f.label for f in FEATURES}
        assert labels[FeatureId.STOCK] == "Availability"
        assert labels[FeatureId.NON_GMO] == "Non-GMO"

    def test_float_price_is_rejected(self, apples: ComparisonProduct) -> None:
        data = apples.model_dump()
        data["price"] = 12.99
        with pytest.raises(ValueError, match="not float"):
            ComparisonProduct.model_validate(data)
        data["price"] = "12.99"
        assert ComparisonProduct.model_validate(data).price == Decimal("12.99")
