"""HTTP surface for the marketplace widgets."""

from marketplace.api.comparisons import router as comparisons_router
from marketplace.api.negotiations import router as negotiations_router
from marketplace.api.shipments import router as shipments_router

__all__ = ["comparisons_router", "negotiations_router", "shipments_router"]
