"""Request and response bodies for the widget HTTP endpoints."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, field_validator

from marketplace.comparison.selection import AddOutcome
from marketplace.domain.models import (
    NegotiationMessage,
    NegotiationResult,
    OrderItem,
    ProductListing,
    ShipmentDestination,
    SplitShipmentDetails,
)
from marketplace.domain.types import TimeSlot
from marketplace.shipment.allocator import AllocationResult


def _reject_float(v: object) -> object:
    if isinstance(v, float):
        raise ValueError("Use a string, not a JSON number, for monetary values")
    return v


# ---------------------------------------------------------------------------
# Negotiation
# ---------------------------------------------------------------------------


class MessageRequest(BaseModel):
    text: str


class OfferRequest(BaseModel):
    """A buyer offer; a missing price is ignored like an empty form."""

    price: Decimal | None = None
    quantity: int = 10
    delivery_date: date | None = None

    @field_validator("price", mode="before")
    @classmethod
    def reject_float_price(cls, v: object) -> object:
        return _reject_float(v)


class NegotiationView(BaseModel):
    id: str
    listing: ProductListing
    messages: list[NegotiationMessage]
    pending_offer_ids: list[str]
    completed: bool
    result: NegotiationResult | None = None


class BoardOpenRequest(BaseModel):
    buyer: str
    product: str
    quantity: int
    initial_price: Decimal
    offer: Decimal
    message: str

    @field_validator("initial_price", "offer", mode="before")
    @classmethod
    def reject_float_money(cls, v: object) -> object:
        return _reject_float(v)


class CounterRequest(BaseModel):
    price: Decimal
    message: str = ""

    @field_validator("price", mode="before")
    @classmethod
    def reject_float_price(cls, v: object) -> object:
        return _reject_float(v)


# ---------------------------------------------------------------------------
# Split shipment
# ---------------------------------------------------------------------------


class CreateShipmentRequest(BaseModel):
    order_id: str
    items: list[OrderItem]


class UpdateDestinationRequest(BaseModel):
    location: str | None = None
    delivery_date: date | None = None
    time_slot: TimeSlot | None = None


class AllocateRequest(BaseModel):
    quantity: int


class SubmitShipmentRequest(BaseModel):
    special_instructions: str = ""


class ShipmentView(BaseModel):
    id: str
    order_id: str
    order_items: list[OrderItem]
    destinations: list[ShipmentDestination]
    remaining: dict[str, int]
    fully_allocated: bool
    submitted: SplitShipmentDetails | None = None


class AllocationResponse(BaseModel):
    result: AllocationResult
    shipment: ShipmentView


# ---------------------------------------------------------------------------
# Comparison
# ---------------------------------------------------------------------------


class AddProductRequest(BaseModel):
    product_id: str


class ComparisonView(BaseModel):
    id: str
    selected: list[str]
    limit: int
    cart: list[str] = []


class AddProductResponse(BaseModel):
    outcome: AddOutcome
    comparison: ComparisonView
