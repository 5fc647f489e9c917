"""Negotiation widgets: seller decision policy, buyer session, and seller board.

Re-exports key functions and types for convenient access:
    from marketplace.negotiation import decide, NegotiationSession
"""

from marketplace.negotiation.board import (
    BoardTab,
    SellerNegotiationBoard,
    discount_percent,
    suggested_counter,
)
from marketplace.negotiation.policy import (
    ACCEPT_RATIO,
    COUNTER_DISCOUNT,
    COUNTER_RATIO,
    FLOOR_RATIO,
    MIN_ACCEPT_QUANTITY,
    Accept,
    Counter,
    Decision,
    Reject,
    decide,
)
from marketplace.negotiation.session import NegotiationSession, ReplyDelays

__all__ = [
    "ACCEPT_RATIO",
    "COUNTER_DISCOUNT",
    "COUNTER_RATIO",
    "FLOOR_RATIO",
    "MIN_ACCEPT_QUANTITY",
    "Accept",
    "BoardTab",
    "Counter",
    "Decision",
    "NegotiationSession",
    "Reject",
    "ReplyDelays",
    "SellerNegotiationBoard",
    "decide",
    "discount_percent",
    "suggested_counter",
]
