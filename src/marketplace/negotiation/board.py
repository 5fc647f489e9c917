"""Seller-side negotiation board.

Holds every negotiation a seller has received, drives each one through the
``NegotiationStateMachine``, and appends a seller message for every
decision.  Records are immutable; each change stores an updated copy.
"""

from __future__ import annotations

import itertools
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from enum import StrEnum

import structlog

from marketplace.domain.errors import PricingError, UnknownNegotiationError
from marketplace.domain.models import BoardMessage, SellerNegotiation
from marketplace.domain.types import NegotiationStatus, Sender
from marketplace.negotiation import replies
from marketplace.negotiation.policy import quantize_money
from marketplace.state_machine import ACTIVE_STATES, BoardEvent, NegotiationStateMachine

logger = structlog.get_logger()

# How long a buyer has to respond to an open offer or counter
OFFER_TTL = timedelta(days=2)

ONE_DECIMAL = Decimal("0.1")


class BoardTab(StrEnum):
    """Filters offered on the seller board."""

    ACTIVE = "active"
    COMPLETED = "completed"
    ALL = "all"


def discount_percent(initial_price: Decimal, offer: Decimal) -> Decimal:
    """Percentage below *initial_price* that *offer* represents, to one decimal.

    Raises:
        PricingError: If *initial_price* is zero or negative.
    """
    if initial_price <= 0:
        raise PricingError(f"initial_price must be positive, got {initial_price}")
    return ((initial_price - offer) / initial_price * 100).quantize(ONE_DECIMAL)


def suggested_counter(initial_price: Decimal, offer: Decimal) -> Decimal:
    """Midpoint between the list price and the buyer's offer."""
    return quantize_money((initial_price + offer) / 2)


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


class SellerNegotiationBoard:
    """In-memory collection of seller negotiations keyed by id.

    Every status change goes through a per-negotiation state machine, so
    acting on an accepted, rejected, or expired negotiation raises
    ``InvalidTransitionError``.
    """

    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock
        self._ids = itertools.count(1)
        self._negotiations: dict[str, SellerNegotiation] = {}
        self._machines: dict[str, NegotiationStateMachine] = {}

    def open(
        self,
        buyer: str,
        product: str,
        quantity: int,
        initial_price: Decimal,
        offer: Decimal,
        message: str,
    ) -> SellerNegotiation:
        """Record a buyer's opening offer.

        Args:
            buyer: Buyer business name.
            product: Product description.
            quantity: Requested quantity.
            initial_price: The seller's list price per unit.
            offer: The buyer's offered price per unit.
            message: The buyer's opening message.

        Returns:
            The new negotiation, in ``PENDING`` status.
        """
        now = self._clock()
        negotiation = SellerNegotiation(
            id=f"neg-{next(self._ids)}",
            buyer=buyer,
            product=product,
            quantity=quantity,
            initial_price=initial_price,
            current_offer=offer,
            messages=[BoardMessage(sender=Sender.BUYER, message=message, timestamp=now)],
            expires_at=now + OFFER_TTL,
        )
        self._negotiations[negotiation.id] = negotiation
        self._machines[negotiation.id] = NegotiationStateMachine()
        logger.info("board_negotiation_opened", negotiation_id=negotiation.id, buyer=buyer)
        return negotiation

    def get(self, negotiation_id: str) -> SellerNegotiation:
        """Look up a negotiation by id.

        Raises:
            UnknownNegotiationError: If the id is not on the board.
        """
        try:
            return self._negotiations[negotiation_id]
        except KeyError:
            raise UnknownNegotiationError(negotiation_id) from None

    def history(self, negotiation_id: str) -> list[tuple[NegotiationStatus, str, NegotiationStatus]]:
        """Return the status transition history of a negotiation."""
        self.get(negotiation_id)
        return self._machines[negotiation_id].history

    def accept(self, negotiation_id: str) -> SellerNegotiation:
        """Accept the buyer's current offer."""
        negotiation = self.get(negotiation_id)
        text = replies.BOARD_SELLER_ACCEPT.format(
            price=replies.format_money(negotiation.current_offer),
            quantity=negotiation.quantity,
            product=negotiation.product,
        )
        return self._apply(negotiation, BoardEvent.ACCEPT, text, expires_at=None)

    def reject(self, negotiation_id: str) -> SellerNegotiation:
        """Decline the buyer's current offer."""
        negotiation = self.get(negotiation_id)
        return self._apply(
            negotiation, BoardEvent.REJECT, replies.BOARD_SELLER_REJECT, expires_at=None
        )

    def counter(self, negotiation_id: str, price: Decimal, message: str = "") -> SellerNegotiation:
        """Send a counter-offer, restarting the response window.

        Args:
            negotiation_id: The negotiation to counter.
            price: The seller's counter price per unit.
            message: Explanation sent with the counter; a default is used if blank.

        Raises:
            PricingError: If *price* is zero or negative.
        """
        if price <= 0:
            raise PricingError(f"counter price must be positive, got {price}")
        negotiation = self.get(negotiation_id)
        price = quantize_money(price)
        text = message.strip() or (
            f"We can offer {replies.format_money(price)} per unit for this quantity."
        )
        return self._apply(
            negotiation,
            BoardEvent.COUNTER,
            text,
            expires_at=self._clock() + OFFER_TTL,
            counter_offer=price,
        )

    def expire_overdue(self, now: datetime | None = None) -> list[SellerNegotiation]:
        """Expire every open negotiation whose response window has passed.

        Returns:
            The negotiations that were expired by this call.
        """
        now = now or self._clock()
        expired: list[SellerNegotiation] = []
        for negotiation in list(self._negotiations.values()):
            updated = self._expire_if_overdue(negotiation, now)
            if updated is not None:
                expired.append(updated)
        if expired:
            logger.info("board_negotiations_expired", count=len(expired))
        return expired

    def filter(self, tab: BoardTab = BoardTab.ACTIVE) -> list[SellerNegotiation]:
        """Return negotiations shown on *tab*, in the order they were opened."""
        negotiations = list(self._negotiations.values())
        if tab == BoardTab.ACTIVE:
            return [n for n in negotiations if n.status in ACTIVE_STATES]
        if tab == BoardTab.COMPLETED:
            return [
                n
                for n in negotiations
                if n.status in (NegotiationStatus.ACCEPTED, NegotiationStatus.REJECTED)
            ]
        return negotiations

    def _expire_if_overdue(
        self, negotiation: SellerNegotiation, now: datetime
    ) -> SellerNegotiation | None:
        machine = self._machines[negotiation.id]
        if machine.is_terminal or negotiation.expires_at is None:
            return None
        if negotiation.expires_at > now:
            return None
        status = machine.trigger(BoardEvent.EXPIRE)
        updated = negotiation.model_copy(update={"status": status})
        self._negotiations[negotiation.id] = updated
        return updated

    def _apply(
        self,
        negotiation: SellerNegotiation,
        event: BoardEvent,
        text: str,
        expires_at: datetime | None,
        counter_offer: Decimal | None = None,
    ) -> SellerNegotiation:
        # An overdue record expires first, so answering it is an invalid transition.
        negotiation = self._expire_if_overdue(negotiation, self._clock()) or negotiation
        status = self._machines[negotiation.id].trigger(event)
        update: dict[str, object] = {
            "status": status,
            "messages": [
                *negotiation.messages,
                BoardMessage(sender=Sender.SELLER, message=text, timestamp=self._clock()),
            ],
            "expires_at": expires_at,
        }
        if counter_offer is not None:
            update["counter_offer"] = counter_offer
        updated = negotiation.model_copy(update=update)
        self._negotiations[negotiation.id] = updated
        logger.info(
            "board_status_changed",
            negotiation_id=negotiation.id,
            board_event=event,
            status=status,
        )
        return updated
