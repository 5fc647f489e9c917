"""Shared pytest fixtures for the marketplace test suite."""

from decimal import Decimal

import pytest

from marketplace.domain.models import (
    ComparisonProduct,
    DietarySpecs,
    EnvironmentalSpecs,
    OrderItem,
    ProductListing,
    ProductOrigin,
    ProductSpecifications,
    SellerInfo,
)


@pytest.fixture
def sample_listing() -> ProductListing:
    """Organic apples listed at $12.99 per case."""
    return ProductListing(
        product_id="prod-apples",
        product_name="Organic Apples",
        seller_name="Green Valley Farms",
        initial_price=Decimal("12.99"),
        unit="case",
    )


@pytest.fixture
def sample_order_items() -> list[OrderItem]:
    """A two-line order to split across destinations."""
    return [
        OrderItem(id="item-1", name="Organic Apples", quantity=10, unit="case"),
        OrderItem(id="item-2", name="Heirloom Tomatoes", quantity=5, unit="crate"),
    ]


@pytest.fixture
def apples() -> ComparisonProduct:
    """A fully specified product."""
    return ComparisonProduct(
        id="p-1",
        name="Organic Apples",
        price=Decimal("12.99"),
        unit="case",
        seller=SellerInfo(name="Green Valley Farms", rating=4.5),
        rating=4.8,
        reviews=120,
        stock=40,
        organic=True,
        non_gmo=True,
        locally_sourced=True,
        free_shipping=False,
        bulk_discount=True,
        description="Crisp apples picked weekly.",
        specifications=ProductSpecifications(
            dietary=DietarySpecs(organic=True, gluten_free=True, vegan=True, vegetarian=True),
            environmental=EnvironmentalSpecs(ecofriendly=True, compostable=False),
        ),
        origin=ProductOrigin(country="USA", region="Washington"),
    )


@pytest.fixture
def honey() -> ComparisonProduct:
    """A product with no specifications and no origin."""
    return ComparisonProduct(
        id="p-2",
        name="Wildflower Honey",
        price=Decimal("8.5"),
        unit="jar",
        seller=SellerInfo(name="Bee Happy", rating=4.0),
        rating=4.2,
        reviews=8,
        stock=0,
        description="Raw honey.",
    )
