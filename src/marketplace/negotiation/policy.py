"""Deterministic seller response policy for buyer offers.

The seller's answer to an offer is a pure function of the offer and the list
price, returned as a tagged ``Decision``.  Scheduling the reply and rendering
it as a message are left to the negotiation session.

All monetary calculations use Decimal arithmetic.  Counter and floor prices
are exact multiples of the list price; they are rounded to cents (ROUND_HALF_UP)
only when rendered in a message.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Annotated, Literal

from pydantic import BaseModel, Field

from marketplace.domain.errors import PricingError
from marketplace.domain.models import Offer

# Precision: displayed and board prices are quantized to 2 decimal places
TWO_PLACES = Decimal("0.01")

# Offers at or above this share of list price are accepted (given enough volume)
ACCEPT_RATIO = Decimal("0.9")
MIN_ACCEPT_QUANTITY = 10

# Offers at or above this share of list price get a counter-offer
COUNTER_RATIO = Decimal("0.8")
COUNTER_DISCOUNT = Decimal("0.05")

# Lowest price quoted when rejecting an offer
FLOOR_RATIO = Decimal("0.9")


class Accept(BaseModel, frozen=True):
    """The seller accepts the offer at the offered price."""

    kind: Literal["accept"] = "accept"
    price: Decimal


class Counter(BaseModel, frozen=True):
    """The seller proposes a different price for the same quantity."""

    kind: Literal["counter"] = "counter"
    price: Decimal


class Reject(BaseModel, frozen=True):
    """The seller declines and quotes the lowest price it would take."""

    kind: Literal["reject"] = "reject"
    floor: Decimal


Decision = Annotated[Accept | Counter | Reject, Field(discriminator="kind")]


def quantize_money(amount: Decimal) -> Decimal:
    """Round *amount* to cents using ROUND_HALF_UP."""
    return amount.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def counter_price(list_price: Decimal, discount: Decimal = COUNTER_DISCOUNT) -> Decimal:
    """Price the seller counters with: *discount* below list, unrounded."""
    return list_price * (Decimal("1") - discount)


def floor_price(list_price: Decimal, floor_ratio: Decimal = FLOOR_RATIO) -> Decimal:
    """Lowest price the seller quotes when rejecting, unrounded."""
    return list_price * floor_ratio


def decide(
    offer: Offer,
    list_price: Decimal,
    accept_ratio: Decimal = ACCEPT_RATIO,
    min_accept_quantity: int = MIN_ACCEPT_QUANTITY,
    counter_ratio: Decimal = COUNTER_RATIO,
    counter_discount: Decimal = COUNTER_DISCOUNT,
    floor_ratio: Decimal = FLOOR_RATIO,
) -> Accept | Counter | Reject:
    """Decide how the seller answers *offer*.

    Rules (evaluated in order):
    1. price >= accept_ratio * list and quantity >= min_accept_quantity: Accept
       at the offered price.
    2. price >= counter_ratio * list: Counter at ``counter_discount`` below list.
    3. Otherwise: Reject, quoting ``floor_ratio * list`` as the floor.

    Ratios are compared by scaling the list price rather than dividing the
    offer, so no rounding happens before the comparison.

    Args:
        offer: The buyer's offer.
        list_price: The seller's list price per unit.
        accept_ratio: Minimum share of list price that can be accepted.
        min_accept_quantity: Minimum quantity that can be accepted.
        counter_ratio: Minimum share of list price that earns a counter-offer.
        counter_discount: Discount off list used for the counter-offer.
        floor_ratio: Share of list price quoted when rejecting.

    Returns:
        An ``Accept``, ``Counter`` or ``Reject`` decision.

    Raises:
        PricingError: If *list_price* is zero or negative.
    """
    if list_price <= 0:
        raise PricingError(f"list_price must be positive, got {list_price}")

    if offer.price >= list_price * accept_ratio and offer.quantity >= min_accept_quantity:
        return Accept(price=offer.price)

    if offer.price >= list_price * counter_ratio:
        return Counter(price=counter_price(list_price, counter_discount))

    return Reject(floor=floor_price(list_price, floor_ratio))
