"""Seller-side negotiation state machine with transition validation."""

from marketplace.state_machine.machine import NegotiationStateMachine
from marketplace.state_machine.transitions import (
    ACTIVE_STATES,
    TERMINAL_STATES,
    TRANSITIONS,
    BoardEvent,
)

__all__ = [
    "ACTIVE_STATES",
    "BoardEvent",
    "NegotiationStateMachine",
    "TERMINAL_STATES",
    "TRANSITIONS",
]
