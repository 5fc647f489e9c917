"""In-memory registry of live widget sessions.

Each buyer negotiation, split shipment, and comparison selection lives here
under a generated id for as long as the process runs.  This is a v1
in-memory implementation; restarting the service discards every session.
"""

from __future__ import annotations

import uuid
from typing import Any

import structlog

from marketplace.comparison.selection import ComparisonSelection
from marketplace.config import Settings
from marketplace.domain.errors import MarketplaceError
from marketplace.domain.models import (
    NegotiationResult,
    OrderItem,
    ProductListing,
    SplitShipmentDetails,
)
from marketplace.negotiation.board import SellerNegotiationBoard
from marketplace.negotiation.session import NegotiationSession, ReplyDelays
from marketplace.observability.metrics import (
    ACTIVE_SESSIONS,
    NEGOTIATIONS_COMPLETED,
    SHIPMENTS_SUBMITTED,
)
from marketplace.scheduling import AsyncioScheduler, ImmediateScheduler, Scheduler
from marketplace.shipment.allocator import SplitShipmentAllocator

logger = structlog.get_logger()

NEGOTIATION = "negotiation"
SHIPMENT = "shipment"
COMPARISON = "comparison"


class SessionNotFoundError(MarketplaceError):
    """Raised when a session id is not in the registry."""

    def __init__(self, kind: str, session_id: str) -> None:
        self.kind = kind
        self.session_id = session_id
        super().__init__(f"No {kind} session with id '{session_id}'")


class SessionRegistry:
    """Creates, stores, and looks up widget sessions by id."""

    def __init__(self, settings: Settings, scheduler: Scheduler | None = None) -> None:
        self._settings = settings
        if scheduler is None:
            scheduler = AsyncioScheduler() if settings.simulate_latency else ImmediateScheduler()
        self._scheduler = scheduler
        self._delays = ReplyDelays(
            message_reply=settings.message_reply_delay,
            offer_reply=settings.offer_reply_delay,
            seller_acceptance=settings.seller_acceptance_delay,
            buyer_acceptance=settings.buyer_acceptance_delay,
        )
        self._sessions: dict[str, dict[str, Any]] = {
            NEGOTIATION: {},
            SHIPMENT: {},
            COMPARISON: {},
        }
        self.board = SellerNegotiationBoard()
        self.submitted: dict[str, SplitShipmentDetails] = {}
        self.carts: dict[str, list[str]] = {}

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    def create_negotiation(self, listing: ProductListing) -> tuple[str, NegotiationSession]:
        """Start a buyer negotiation over *listing*."""

        def _on_complete(result: NegotiationResult) -> None:
            NEGOTIATIONS_COMPLETED.inc()

        session = NegotiationSession(
            listing,
            on_complete=_on_complete,
            scheduler=self._scheduler,
            delays=self._delays,
        )
        return self._store(NEGOTIATION, session), session

    def create_shipment(
        self, order_id: str, order_items: list[OrderItem]
    ) -> tuple[str, SplitShipmentAllocator]:
        """Start splitting *order_id* across destinations."""
        session_id = uuid.uuid4().hex

        def _on_complete(details: SplitShipmentDetails) -> None:
            self.submitted[session_id] = details
            SHIPMENTS_SUBMITTED.inc()

        allocator = SplitShipmentAllocator(order_id, order_items, on_complete=_on_complete)
        return self._store(SHIPMENT, allocator, session_id), allocator

    def create_comparison(self) -> tuple[str, ComparisonSelection]:
        """Start an empty comparison selection.

        Products the buyer adds to the cart from the comparison are recorded
        in ``carts`` under the session id, in request order.
        """
        session_id = uuid.uuid4().hex
        cart = self.carts.setdefault(session_id, [])

        def _on_remove(product_id: str) -> None:
            logger.info("comparison_product_removed", session_id=session_id, product_id=product_id)

        def _on_add_to_cart(product_id: str) -> None:
            cart.append(product_id)
            logger.info("comparison_added_to_cart", session_id=session_id, product_id=product_id)

        selection = ComparisonSelection(
            limit=self._settings.comparison_limit,
            on_remove=_on_remove,
            on_add_to_cart=_on_add_to_cart,
        )
        return self._store(COMPARISON, selection, session_id), selection

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get_negotiation(self, session_id: str) -> NegotiationSession:
        return self._get(NEGOTIATION, session_id)

    def get_shipment(self, session_id: str) -> SplitShipmentAllocator:
        return self._get(SHIPMENT, session_id)

    def get_comparison(self, session_id: str) -> ComparisonSelection:
        return self._get(COMPARISON, session_id)

    def count(self, kind: str) -> int:
        return len(self._sessions[kind])

    def discard(self, kind: str, session_id: str) -> None:
        """Forget a session.

        Raises:
            SessionNotFoundError: If no *kind* session has *session_id*.
        """
        self._get(kind, session_id)
        del self._sessions[kind][session_id]
        self.submitted.pop(session_id, None)
        self.carts.pop(session_id, None)
        ACTIVE_SESSIONS.labels(kind=kind).dec()
        logger.info("session_discarded", kind=kind, session_id=session_id)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _store(self, kind: str, session: Any, session_id: str | None = None) -> str:
        session_id = session_id or uuid.uuid4().hex
        self._sessions[kind][session_id] = session
        ACTIVE_SESSIONS.labels(kind=kind).inc()
        logger.info("session_created", kind=kind, session_id=session_id)
        return session_id

    def _get(self, kind: str, session_id: str) -> Any:
        try:
            return self._sessions[kind][session_id]
        except KeyError:
            raise SessionNotFoundError(kind, session_id) from None
