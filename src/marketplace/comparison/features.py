"""Typed feature accessors for the product comparison matrix.

Each comparable feature has one accessor reading a known field of
``ComparisonProduct``.  Missing nested specifications read as ``None``
("absent").
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from marketplace.domain.models import (
    ComparisonProduct,
    DietarySpecs,
    EnvironmentalSpecs,
)


class FeatureId(StrEnum):
    """Rows of the comparison matrix, in display order."""

    PRICE = "price"
    SELLER = "seller"
    RATING = "rating"
    STOCK = "stock"
    ORIGIN = "origin"
    ORGANIC = "organic"
    GLUTEN_FREE = "gluten_free"
    VEGAN = "vegan"
    VEGETARIAN = "vegetarian"
    NON_GMO = "non_gmo"
    ECOFRIENDLY = "ecofriendly"
    COMPOSTABLE = "compostable"
    BIODEGRADABLE = "biodegradable"
    RECYCLABLE = "recyclable"
    LOCALLY_SOURCED = "locally_sourced"
    FREE_SHIPPING = "free_shipping"
    BULK_DISCOUNT = "bulk_discount"


FeatureValue = str | bool | None


@dataclass(frozen=True)
class Feature:
    """A matrix row: its label and how to read a product's value."""

    id: FeatureId
    label: str
    read: Callable[[ComparisonProduct], FeatureValue]


def _dietary(product: ComparisonProduct) -> DietarySpecs | None:
    specs = product.specifications
    return specs.dietary if specs is not None else None


def _environmental(product: ComparisonProduct) -> EnvironmentalSpecs | None:
    specs = product.specifications
    return specs.environmental if specs is not None else None


def read_price(product: ComparisonProduct) -> str:
    return f"${product.price:.2f} / {product.unit}"


def read_seller(product: ComparisonProduct) -> str:
    return f"{product.seller.name} ({product.seller.rating} ★)"


def read_rating(product: ComparisonProduct) -> str:
    return f"{product.rating} ({product.reviews} reviews)"


def read_stock(product: ComparisonProduct) -> str:
    if product.stock > 0:
        return f"In Stock ({product.stock})"
    return "Out of Stock"


def read_origin(product: ComparisonProduct) -> str | None:
    """``"Region, Country"``, just the country, or absent without a country."""
    origin = product.origin
    if origin is None or not origin.country:
        return None
    if origin.region:
        return f"{origin.region}, {origin.country}"
    return origin.country


def read_gluten_free(product: ComparisonProduct) -> bool | None:
    dietary = _dietary(product)
    return dietary.gluten_free if dietary is not None else None


def read_vegan(product: ComparisonProduct) -> bool | None:
    dietary = _dietary(product)
    return dietary.vegan if dietary is not None else None


def read_vegetarian(product: ComparisonProduct) -> bool | None:
    dietary = _dietary(product)
    return dietary.vegetarian if dietary is not None else None


def read_ecofriendly(product: ComparisonProduct) -> bool | None:
    environmental = _environmental(product)
    return environmental.ecofriendly if environmental is not None else None


def read_compostable(product: ComparisonProduct) -> bool | None:
    environmental = _environmental(product)
    return environmental.compostable if environmental is not None else None


def read_biodegradable(product: ComparisonProduct) -> bool | None:
    environmental = _environmental(product)
    return environmental.biodegradable if environmental is not None else None


def read_recyclable(product: ComparisonProduct) -> bool | None:
    environmental = _environmental(product)
    return environmental.recyclable if environmental is not None else None


FEATURES: tuple[Feature, ...] = (
    Feature(FeatureId.PRICE, "Price", read_price),
    Feature(FeatureId.SELLER, "Seller", read_seller),
    Feature(FeatureId.RATING, "Rating", read_rating),
    Feature(FeatureId.STOCK, "Availability", read_stock),
    Feature(FeatureId.ORIGIN, "Origin", read_origin),
    # Dietary specifications
    Feature(FeatureId.ORGANIC, "Organic", lambda p: p.organic),
    Feature(FeatureId.GLUTEN_FREE, "Gluten-Free", read_gluten_free),
    Feature(FeatureId.VEGAN, "Vegan", read_vegan),
    Feature(FeatureId.VEGETARIAN, "Vegetarian", read_vegetarian),
    Feature(FeatureId.NON_GMO, "Non-GMO", lambda p: p.non_gmo),
    # Environmental specifications
    Feature(FeatureId.ECOFRIENDLY, "Eco-Friendly", read_ecofriendly),
    Feature(FeatureId.COMPOSTABLE, "Compostable", read_compostable),
    Feature(FeatureId.BIODEGRADABLE, "Biodegradable", read_biodegradable),
    Feature(FeatureId.RECYCLABLE, "Recyclable", read_recyclable),
    # Listing flags
    Feature(FeatureId.LOCALLY_SOURCED, "Locally Sourced", lambda p: p.locally_sourced),
    Feature(FeatureId.FREE_SHIPPING, "Free Shipping", lambda p: p.free_shipping),
    Feature(FeatureId.BULK_DISCOUNT, "Bulk Discount", lambda p: p.bulk_discount),
)

FEATURES_BY_ID: dict[FeatureId, Feature] = {feature.id: feature for feature in FEATURES}


def read_feature(product: ComparisonProduct, feature_id: FeatureId) -> FeatureValue:
    """Read a single feature value from *product*."""
    return FEATURES_BY_ID[feature_id].read(product)
