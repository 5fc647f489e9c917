"""Canned message templates for the negotiation thread.

Templates use Python string placeholders ({variable_name}); money values are
passed pre-formatted with ``format_money``.
"""

from datetime import date
from decimal import Decimal

from marketplace.negotiation.policy import quantize_money

SELLER_GREETING = (
    "Thank you for your interest in our {product_name}. The listed price is "
    "{price} per {unit}. We're open to discussing volume discounts for larger orders."
)

SELLER_ACKNOWLEDGEMENT = (
    "Thank you for your message. I'm reviewing your inquiry and will get back to you shortly."
)

BUYER_OFFER = "I would like to offer {price} per {unit} for a quantity of {quantity} units{delivery}."

SELLER_ACCEPT = (
    "Thank you for your offer. I'm pleased to accept your offer of {price} per {unit} "
    "for {quantity} units."
)

SELLER_COUNTER = (
    "Thank you for your offer. I can offer a 5% discount at {price} per {unit} "
    "for a quantity of {quantity} units."
)

SELLER_REJECT = (
    "Thank you for your offer. Unfortunately, I cannot accept that price. "
    "The lowest I can go is {floor} per {unit} for that quantity."
)

BUYER_ACCEPT = "I accept your offer of {price} per {unit} for {quantity} units."

BUYER_REJECT = "I'm sorry, but I cannot accept this offer. Let's continue negotiating."

# Seller board
BOARD_SELLER_ACCEPT = "We accept your offer of {price} per unit for {quantity} units of {product}."

BOARD_SELLER_REJECT = (
    "We're unable to accept this offer at this time. Thank you for your interest."
)


def format_money(amount: Decimal) -> str:
    """Format *amount* as dollars rounded half-up to cents, e.g. ``$12.99``."""
    return f"${quantize_money(amount):.2f}"


def format_delivery(delivery_date: date | None) -> str:
    """Render the optional delivery clause of a buyer offer."""
    if delivery_date is None:
        return ""
    return f" with delivery by {delivery_date.isoformat()}"
