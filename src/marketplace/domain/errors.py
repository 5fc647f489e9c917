"""Domain-specific exception classes for the marketplace engine."""

from marketplace.domain.types import NegotiationStatus


class MarketplaceError(Exception):
    """Base class for all domain errors in the marketplace engine."""


class InvalidTransitionError(MarketplaceError):
    """Raised when an event is not allowed from the current state.

    Attributes:
        current_state: The state the negotiation or offer was in.
        event: The event that was rejected.
    """

    def __init__(self, current_state: NegotiationStatus | str, event: str) -> None:
        self.current_state = current_state
        self.event = event
        super().__init__(f"Cannot apply event '{event}' in state '{current_state}'")


class UnknownOfferError(MarketplaceError):
    """Raised when an offer id does not name a message carrying an offer."""

    def __init__(self, offer_id: str) -> None:
        self.offer_id = offer_id
        super().__init__(f"No offer with id '{offer_id}'")


class UnknownNegotiationError(MarketplaceError):
    """Raised when a seller negotiation id is not on the board."""

    def __init__(self, negotiation_id: str) -> None:
        self.negotiation_id = negotiation_id
        super().__init__(f"No negotiation with id '{negotiation_id}'")


class UnknownDestinationError(MarketplaceError):
    """Raised when a destination id is not part of the split shipment."""

    def __init__(self, destination_id: str) -> None:
        self.destination_id = destination_id
        super().__init__(f"No destination with id '{destination_id}'")


class PricingError(MarketplaceError):
    """Raised when a price calculation receives an unusable list price."""


class ComparisonLimitError(MarketplaceError):
    """Raised when a comparison matrix is built over too many products."""

    def __init__(self, count: int, limit: int) -> None:
        self.count = count
        self.limit = limit
        super().__init__(f"Cannot compare {count} products; the limit is {limit}")
