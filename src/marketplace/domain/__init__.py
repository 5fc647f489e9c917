"""Domain types, models, and errors for the marketplace engine."""

from marketplace.domain.errors import (
    ComparisonLimitError,
    InvalidTransitionError,
    MarketplaceError,
    PricingError,
    UnknownDestinationError,
    UnknownNegotiationError,
    UnknownOfferError,
)
from marketplace.domain.models import (
    BoardMessage,
    ComparisonProduct,
    DietarySpecs,
    EnvironmentalSpecs,
    ItemAllocation,
    NegotiationMessage,
    NegotiationResult,
    Offer,
    OrderItem,
    ProductListing,
    ProductOrigin,
    ProductSpecifications,
    SellerInfo,
    SellerNegotiation,
    ShipmentDestination,
    SplitShipmentDetails,
)
from marketplace.domain.types import (
    TIME_SLOT_LABELS,
    NegotiationStatus,
    OfferStatus,
    Sender,
    TimeSlot,
)

__all__ = [
    "TIME_SLOT_LABELS",
    "BoardMessage",
    "ComparisonLimitError",
    "ComparisonProduct",
    "DietarySpecs",
    "EnvironmentalSpecs",
    "InvalidTransitionError",
    "ItemAllocation",
    "MarketplaceError",
    "NegotiationMessage",
    "NegotiationResult",
    "NegotiationStatus",
    "Offer",
    "OfferStatus",
    "OrderItem",
    "PricingError",
    "ProductListing",
    "ProductOrigin",
    "ProductSpecifications",
    "SellerInfo",
    "SellerNegotiation",
    "Sender",
    "ShipmentDestination",
    "SplitShipmentDetails",
    "TimeSlot",
    "UnknownDestinationError",
    "UnknownNegotiationError",
    "UnknownOfferError",
]
