"""Pydantic v2 models for the marketplace widgets' view-local records."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from marketplace.domain.types import NegotiationStatus, OfferStatus, Sender, TimeSlot


def _reject_float(v: object) -> object:
    if isinstance(v, float):
        raise ValueError("Use Decimal or string, not float, for monetary values")
    return v


# ---------------------------------------------------------------------------
# Negotiation
# ---------------------------------------------------------------------------


class Offer(BaseModel):
    """A proposed price/quantity/delivery tuple exchanged during negotiation."""

    model_config = ConfigDict(frozen=True)

    price: Decimal
    quantity: int
    delivery_date: date | None = None

    @field_validator("price", mode="before")
    @classmethod
    def reject_float_price(cls, v: object) -> object:
        """Reject float inputs for the price to prevent precision errors."""
        return _reject_float(v)

    @field_validator("price")
    @classmethod
    def price_must_not_be_negative(cls, v: Decimal) -> Decimal:
        """Ensure the price is zero or more."""
        if v < 0:
            raise ValueError("price must not be negative")
        return v

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        """Ensure quantity is at least 1."""
        if v < 1:
            raise ValueError("quantity must be at least 1")
        return v


class NegotiationMessage(BaseModel):
    """One entry in a negotiation thread.

    Messages are never mutated after they are appended; answering an offer
    appends a new message instead.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    sender: Sender
    message: str
    timestamp: datetime
    offer: Offer | None = None
    status: OfferStatus | None = None


class NegotiationResult(BaseModel):
    """Payload handed to the completion callback once an offer is accepted."""

    model_config = ConfigDict(frozen=True)

    final_price: Decimal
    quantity: int
    delivery_date: date | None = None
    messages: list[NegotiationMessage]


class ProductListing(BaseModel):
    """The product under negotiation, as shown to the buyer."""

    model_config = ConfigDict(frozen=True)

    product_id: str
    product_name: str
    seller_name: str
    initial_price: Decimal
    unit: str

    @field_validator("initial_price", mode="before")
    @classmethod
    def reject_float_price(cls, v: object) -> object:
        """Reject float inputs for the list price."""
        return _reject_float(v)

    @field_validator("initial_price")
    @classmethod
    def price_must_be_positive(cls, v: Decimal) -> Decimal:
        """Ensure the list price is strictly positive."""
        if v <= 0:
            raise ValueError("initial_price must be positive")
        return v

    @field_validator("product_name", "unit")
    @classmethod
    def must_not_be_empty(cls, v: str) -> str:
        """Ensure display fields are not empty or whitespace-only."""
        if not v.strip():
            raise ValueError("must not be empty")
        return v


class BoardMessage(BaseModel):
    """A message on a seller-side negotiation."""

    model_config = ConfigDict(frozen=True)

    sender: Sender
    message: str
    timestamp: datetime


class SellerNegotiation(BaseModel):
    """A negotiation as it appears on the seller's board."""

    model_config = ConfigDict(frozen=True)

    id: str
    buyer: str
    product: str
    quantity: int
    initial_price: Decimal
    current_offer: Decimal
    counter_offer: Decimal | None = None
    status: NegotiationStatus = NegotiationStatus.PENDING
    messages: list[BoardMessage] = Field(default_factory=list)
    expires_at: datetime | None = None

    @field_validator("initial_price", "current_offer", "counter_offer", mode="before")
    @classmethod
    def reject_float_money(cls, v: object) -> object:
        """Reject float inputs for monetary fields."""
        return _reject_float(v)


# ---------------------------------------------------------------------------
# Split shipment
# ---------------------------------------------------------------------------


class OrderItem(BaseModel):
    """An order line item available for allocation."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    quantity: int
    unit: str

    @field_validator("quantity")
    @classmethod
    def quantity_must_not_be_negative(cls, v: int) -> int:
        """Ensure the ordered quantity is zero or more."""
        if v < 0:
            raise ValueError("quantity must not be negative")
        return v


class ItemAllocation(BaseModel):
    """Quantity of one order item sent to a destination."""

    model_config = ConfigDict(frozen=True)

    item_id: str
    quantity: int

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        """Zero allocations are represented by absence, not by a row."""
        if v < 1:
            raise ValueError("quantity must be at least 1")
        return v


class ShipmentDestination(BaseModel):
    """A shipping target receiving a subset of the order's items."""

    model_config = ConfigDict(frozen=True)

    id: str
    location: str = ""
    delivery_date: date | None = None
    time_slot: TimeSlot | None = None
    items: list[ItemAllocation] = Field(default_factory=list)


class SplitShipmentDetails(BaseModel):
    """Payload handed to the completion callback when the split is submitted."""

    model_config = ConfigDict(frozen=True)

    order_id: str
    destinations: list[ShipmentDestination]
    special_instructions: str = ""


# ---------------------------------------------------------------------------
# Product comparison
# ---------------------------------------------------------------------------


class SellerInfo(BaseModel):
    """Seller summary shown alongside a product."""

    model_config = ConfigDict(frozen=True)

    name: str
    rating: float = 0.0


class DietarySpecs(BaseModel):
    """Dietary attributes; ``None`` means the seller did not say."""

    model_config = ConfigDict(frozen=True)

    organic: bool | None = None
    gluten_free: bool | None = None
    lactose_free: bool | None = None
    vegan: bool | None = None
    vegetarian: bool | None = None
    non_gmo: bool | None = None


class EnvironmentalSpecs(BaseModel):
    """Environmental attributes; ``None`` means the seller did not say."""

    model_config = ConfigDict(frozen=True)

    ecofriendly: bool | None = None
    compostable: bool | None = None
    biodegradable: bool | None = None
    recyclable: bool | None = None


class ProductSpecifications(BaseModel):
    """Structured specification tree of a product."""

    model_config = ConfigDict(frozen=True)

    dietary: DietarySpecs | None = None
    environmental: EnvironmentalSpecs | None = None


class ProductOrigin(BaseModel):
    """Where a product comes from."""

    model_config = ConfigDict(frozen=True)

    country: str | None = None
    region: str | None = None


class ComparisonProduct(BaseModel):
    """A product record as consumed by the comparison matrix."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    price: Decimal
    unit: str
    image: str = ""
    seller: SellerInfo
    rating: float = 0.0
    reviews: int = 0
    stock: int = 0
    organic: bool = False
    non_gmo: bool = False
    locally_sourced: bool = False
    free_shipping: bool = False
    bulk_discount: bool = False
    description: str = ""
    specifications: ProductSpecifications | None = None
    origin: ProductOrigin | None = None
    certifications: list[str] = Field(default_factory=list)

    @field_validator("price", mode="before")
    @classmethod
    def reject_float_price(cls, v: object) -> object:
        """Reject float inputs for the price."""
        return _reject_float(v)
