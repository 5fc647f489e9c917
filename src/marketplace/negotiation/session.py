"""Buyer-side negotiation process over a single product.

A ``NegotiationSession`` keeps an append-only thread of messages between the
buyer and a simulated seller.  Seller replies are produced by
``policy.decide`` and delivered through a ``Scheduler`` after a fixed delay;
the completion callback fires once, when an offer is accepted by either side.
"""

from __future__ import annotations

import itertools
from collections.abc import Callable
from datetime import UTC, date, datetime, timedelta
from decimal import Decimal

import structlog
from pydantic import BaseModel, ConfigDict

from marketplace.domain.errors import InvalidTransitionError, UnknownOfferError
from marketplace.domain.models import (
    NegotiationMessage,
    NegotiationResult,
    Offer,
    ProductListing,
)
from marketplace.domain.types import OfferStatus, Sender
from marketplace.negotiation import replies
from marketplace.negotiation.policy import Accept, Counter, decide
from marketplace.scheduling import ImmediateScheduler, Scheduler

logger = structlog.get_logger()

CompletionCallback = Callable[[NegotiationResult], None]


class ReplyDelays(BaseModel):
    """Simulated latencies, in seconds, for each scripted step."""

    model_config = ConfigDict(frozen=True)

    message_reply: float = 2.0
    offer_reply: float = 3.0
    seller_acceptance: float = 3.0
    buyer_acceptance: float = 1.0


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


class NegotiationSession:
    """Simulated price/quantity/delivery negotiation between a buyer and a seller.

    The thread opens with a seller greeting that carries a pending offer at the
    list price.  Every later change appends a message; nothing is edited in
    place.  Each seller offer can be answered at most once.

    Usage::

        session = NegotiationSession(listing, on_complete=handle_result)
        session.send_offer(Decimal("12.99"), 15)   # seller accepts after a delay
    """

    def __init__(
        self,
        listing: ProductListing,
        on_complete: CompletionCallback | None = None,
        scheduler: Scheduler | None = None,
        delays: ReplyDelays | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._listing = listing
        self._on_complete = on_complete
        self._scheduler = scheduler or ImmediateScheduler()
        self._delays = delays or ReplyDelays()
        self._clock = clock
        self._ids = itertools.count(1)
        self._messages: list[NegotiationMessage] = []
        self._answered: dict[str, OfferStatus] = {}
        self._result: NegotiationResult | None = None

        self._append(
            sender=Sender.SELLER,
            message=replies.SELLER_GREETING.format(
                product_name=listing.product_name,
                price=replies.format_money(listing.initial_price),
                unit=listing.unit,
            ),
            offer=Offer(price=listing.initial_price, quantity=1),
            status=OfferStatus.PENDING,
            timestamp=self._clock() - timedelta(hours=1),
        )

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def listing(self) -> ProductListing:
        """The product under negotiation."""
        return self._listing

    @property
    def messages(self) -> list[NegotiationMessage]:
        """Return a copy of the thread in chronological order."""
        return list(self._messages)

    @property
    def completed(self) -> bool:
        """Return True once the completion callback has fired."""
        return self._result is not None

    @property
    def result(self) -> NegotiationResult | None:
        """The payload passed to the completion callback, if any."""
        return self._result

    def pending_offers(self) -> list[NegotiationMessage]:
        """Return seller offers the buyer can still accept or reject."""
        return [m for m in self._messages if self._is_answerable(m)]

    # ------------------------------------------------------------------
    # Buyer actions
    # ------------------------------------------------------------------

    def send_message(self, text: str) -> NegotiationMessage | None:
        """Append a free-text buyer message and schedule the canned seller reply.

        Args:
            text: The message body.  Blank text is ignored.

        Returns:
            The appended buyer message, or ``None`` if *text* was blank.
        """
        if not text.strip():
            return None

        message = self._append(sender=Sender.BUYER, message=text)
        logger.debug("buyer_message_sent", message_id=message.id)
        self._scheduler.call_later(
            self._delays.message_reply,
            lambda: self._append(sender=Sender.SELLER, message=replies.SELLER_ACKNOWLEDGEMENT),
        )
        return message

    def send_offer(
        self,
        price: Decimal | None,
        quantity: int,
        delivery_date: date | None = None,
    ) -> NegotiationMessage | None:
        """Append a pending buyer offer and schedule the seller's decision.

        Args:
            price: Offered price per unit.  ``None`` (no price entered) and
                negative prices are ignored.
            quantity: Requested quantity; values below 1 are clamped to 1.
            delivery_date: Optional requested delivery date.

        Returns:
            The appended buyer offer message, or ``None`` if the price was ignored.
        """
        if price is None or price < 0:
            return None

        offer = Offer(price=price, quantity=max(quantity, 1), delivery_date=delivery_date)
        unit = self._listing.unit
        message = self._append(
            sender=Sender.BUYER,
            message=replies.BUYER_OFFER.format(
                price=replies.format_money(offer.price),
                unit=unit,
                quantity=offer.quantity,
                delivery=replies.format_delivery(offer.delivery_date),
            ),
            offer=offer,
            status=OfferStatus.PENDING,
        )
        logger.info(
            "buyer_offer_sent",
            message_id=message.id,
            price=str(offer.price),
            quantity=offer.quantity,
        )
        self._scheduler.call_later(self._delays.offer_reply, lambda: self._seller_reply(offer))
        return message

    def accept_offer(self, offer_id: str) -> NegotiationMessage:
        """Accept a pending seller offer and schedule completion.

        Args:
            offer_id: Id of the seller message carrying the offer.

        Returns:
            The appended buyer acceptance message.

        Raises:
            UnknownOfferError: If no message with *offer_id* carries an offer.
            InvalidTransitionError: If the offer cannot be answered (not a
                pending seller offer, already answered, or negotiation complete).
        """
        offer = self._answerable_offer(offer_id, "accept")
        self._answered[offer_id] = OfferStatus.ACCEPTED
        message = self._append(
            sender=Sender.BUYER,
            message=replies.BUYER_ACCEPT.format(
                price=replies.format_money(offer.price),
                unit=self._listing.unit,
                quantity=offer.quantity,
            ),
            offer=offer,
            status=OfferStatus.ACCEPTED,
        )
        logger.info("buyer_accepted_offer", offer_id=offer_id, price=str(offer.price))
        self._schedule_completion(offer, self._delays.buyer_acceptance)
        return message

    def reject_offer(self, offer_id: str) -> NegotiationMessage:
        """Reject a pending seller offer; the negotiation continues.

        Raises:
            UnknownOfferError: If no message with *offer_id* carries an offer.
            InvalidTransitionError: If the offer cannot be answered.
        """
        self._answerable_offer(offer_id, "reject")
        self._answered[offer_id] = OfferStatus.REJECTED
        logger.info("buyer_rejected_offer", offer_id=offer_id)
        return self._append(
            sender=Sender.BUYER,
            message=replies.BUYER_REJECT,
            status=OfferStatus.REJECTED,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _append(
        self,
        sender: Sender,
        message: str,
        offer: Offer | None = None,
        status: OfferStatus | None = None,
        timestamp: datetime | None = None,
    ) -> NegotiationMessage:
        entry = NegotiationMessage(
            id=str(next(self._ids)),
            sender=sender,
            message=message,
            timestamp=timestamp or self._clock(),
            offer=offer,
            status=status,
        )
        self._messages.append(entry)
        return entry

    def _seller_reply(self, offer: Offer) -> None:
        decision = decide(offer, self._listing.initial_price)
        unit = self._listing.unit

        if isinstance(decision, Accept):
            self._append(
                sender=Sender.SELLER,
                message=replies.SELLER_ACCEPT.format(
                    price=replies.format_money(decision.price),
                    unit=unit,
                    quantity=offer.quantity,
                ),
                offer=offer,
                status=OfferStatus.ACCEPTED,
            )
            self._schedule_completion(offer, self._delays.seller_acceptance)
        elif isinstance(decision, Counter):
            self._append(
                sender=Sender.SELLER,
                message=replies.SELLER_COUNTER.format(
                    price=replies.format_money(decision.price),
                    unit=unit,
                    quantity=offer.quantity,
                ),
                offer=Offer(
                    price=decision.price,
                    quantity=offer.quantity,
                    delivery_date=offer.delivery_date,
                ),
                status=OfferStatus.PENDING,
            )
        else:
            self._append(
                sender=Sender.SELLER,
                message=replies.SELLER_REJECT.format(
                    floor=replies.format_money(decision.floor),
                    unit=unit,
                ),
                status=OfferStatus.REJECTED,
            )
        logger.info("seller_replied", decision=decision.kind, offer_price=str(offer.price))

    def _schedule_completion(self, offer: Offer, delay: float) -> None:
        snapshot = list(self._messages)

        def _complete() -> None:
            if self._result is not None:
                return
            self._result = NegotiationResult(
                final_price=offer.price,
                quantity=offer.quantity,
                delivery_date=offer.delivery_date,
                messages=snapshot,
            )
            logger.info(
                "negotiation_completed",
                product_id=self._listing.product_id,
                final_price=str(offer.price),
                quantity=offer.quantity,
            )
            if self._on_complete is not None:
                self._on_complete(self._result)

        self._scheduler.call_later(delay, _complete)

    def _is_answerable(self, message: NegotiationMessage) -> bool:
        return (
            message.sender == Sender.SELLER
            and message.offer is not None
            and message.status == OfferStatus.PENDING
            and message.id not in self._answered
        )

    def _answerable_offer(self, offer_id: str, event: str) -> Offer:
        target = next((m for m in self._messages if m.id == offer_id), None)
        if target is None or target.offer is None:
            raise UnknownOfferError(offer_id)
        if self.completed:
            raise InvalidTransitionError("completed", event)
        if offer_id in self._answered:
            raise InvalidTransitionError(self._answered[offer_id], event)
        if not self._is_answerable(target):
            raise InvalidTransitionError(target.status or "none", event)
        return target.offer
