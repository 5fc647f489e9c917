"""Transition map for seller-side negotiation status changes."""

from enum import StrEnum

from marketplace.domain.types import NegotiationStatus


class BoardEvent(StrEnum):
    """Seller (or clock) actions that change a negotiation's status."""

    COUNTER = "counter"
    ACCEPT = "accept"
    REJECT = "reject"
    EXPIRE = "expire"


# All valid (current_status, event) -> next_status mappings.
# Any pair not in this dict is an invalid transition.
TRANSITIONS: dict[tuple[NegotiationStatus, str], NegotiationStatus] = {
    # From PENDING
    (NegotiationStatus.PENDING, BoardEvent.COUNTER): NegotiationStatus.COUNTERED,
    (NegotiationStatus.PENDING, BoardEvent.ACCEPT): NegotiationStatus.ACCEPTED,
    (NegotiationStatus.PENDING, BoardEvent.REJECT): NegotiationStatus.REJECTED,
    (NegotiationStatus.PENDING, BoardEvent.EXPIRE): NegotiationStatus.EXPIRED,
    # From COUNTERED (a revised counter replaces the previous one)
    (NegotiationStatus.COUNTERED, BoardEvent.COUNTER): NegotiationStatus.COUNTERED,
    (NegotiationStatus.COUNTERED, BoardEvent.ACCEPT): NegotiationStatus.ACCEPTED,
    (NegotiationStatus.COUNTERED, BoardEvent.REJECT): NegotiationStatus.REJECTED,
    (NegotiationStatus.COUNTERED, BoardEvent.EXPIRE): NegotiationStatus.EXPIRED,
}

# States that reject all events -- no outgoing transitions allowed.
TERMINAL_STATES: frozenset[NegotiationStatus] = frozenset(
    {NegotiationStatus.ACCEPTED, NegotiationStatus.REJECTED, NegotiationStatus.EXPIRED}
)

# States shown on the "active" tab of the seller board.
ACTIVE_STATES: frozenset[NegotiationStatus] = frozenset(
    {NegotiationStatus.PENDING, NegotiationStatus.COUNTERED}
)
