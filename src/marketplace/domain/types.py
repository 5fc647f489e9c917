"""Domain enumerations for the marketplace interaction engine."""

from enum import StrEnum


class Sender(StrEnum):
    """Party that authored a negotiation message."""

    BUYER = "buyer"
    SELLER = "seller"


class OfferStatus(StrEnum):
    """Status stamped on a negotiation message when it is appended."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class NegotiationStatus(StrEnum):
    """States of a seller-side negotiation."""

    PENDING = "pending"
    COUNTERED = "countered"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    EXPIRED = "expired"


class TimeSlot(StrEnum):
    """Delivery windows offered for a shipment destination."""

    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"

    @property
    def label(self) -> str:
        """Human-readable label for the slot."""
        return TIME_SLOT_LABELS[self]


TIME_SLOT_LABELS: dict[TimeSlot, str] = {
    TimeSlot.MORNING: "Morning (8am - 12pm)",
    TimeSlot.AFTERNOON: "Afternoon (12pm - 4pm)",
    TimeSlot.EVENING: "Evening (4pm - 8pm)",
}
