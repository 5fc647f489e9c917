"""Tests for the buyer-side NegotiationSession."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, date, datetime, timedelta
from decimal import Decimal

import pytest

from marketplace.domain.errors import InvalidTransitionError, UnknownOfferError
from marketplace.domain.models import NegotiationResult, ProductListing
from marketplace.domain.types import OfferStatus, Sender
from marketplace.negotiation.session import NegotiationSession, ReplyDelays
from marketplace.scheduling import Scheduler

NOW = datetime(2026, 3, 2, 9, 30, tzinfo=UTC)


class ManualScheduler(Scheduler):
    """Collects callbacks so tests decide when seller replies arrive."""

    def __init__(self) -> None:
        self.calls: list[tuple[float, Callable[[], None]]] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        self.calls.append((delay, callback))

    @property
    def pending(self) -> int:
        return len(self.calls)

    def run_next(self) -> float:
        delay, callback = self.calls.pop(0)
        callback()
        return delay


@pytest.fixture
def results() -> list[NegotiationResult]:
    return []


@pytest.fixture
def session(sample_listing: ProductListing, results: list[NegotiationResult]) -> NegotiationSession:
    return NegotiationSession(sample_listing, on_complete=results.append, clock=lambda: NOW)


class TestOpening:
    """The thread opens with a seller greeting carrying the list price."""

    def test_greeting_is_pending_seller_offer(self, session: NegotiationSession) -> None:
        [greeting] = session.messages
        assert greeting.id == "1"
        assert greeting.sender == Sender.SELLER
        assert greeting.status == OfferStatus.PENDING
        assert greeting.offer is not None
        assert greeting.offer.price == Decimal("12.99")
        assert greeting.offer.quantity == 1

    def test_greeting_text_mentions_product_and_price(self, session: NegotiationSession) -> None:
        text = session.messages[0].message
        assert "Organic Apples" in text
        assert "$12.99 per case" in text

    def test_greeting_is_backdated_one_hour(self, session: NegotiationSession) -> None:
        assert session.messages[0].timestamp == NOW - timedelta(hours=1)

    def test_not_completed_initially(self, session: NegotiationSession) -> None:
        assert session.completed is False
        assert session.result is None
        assert [m.id for m in session.pending_offers()] == ["1"]


class TestSendMessage:
    """Free-text buyer messages."""

    def test_message_gets_acknowledgement(self, session: NegotiationSession) -> None:
        sent = session.send_message("Do you deliver on weekends?")
        assert sent is not None
        assert sent.sender == Sender.BUYER
        buyer, reply = session.messages[1:]
        assert buyer.message == "Do you deliver on weekends?"
        assert reply.sender == Sender.SELLER
        assert reply.message.startswith("Thank you for your message.")
        assert reply.offer is None

    @pytest.mark.parametrize("text", ["", "   ", "\n\t"])
    def test_blank_message_is_ignored(self, session: NegotiationSession, text: str) -> None:
        assert session.send_message(text) is None
        assert len(session.messages) == 1

    def test_reply_is_delayed(self, sample_listing: ProductListing) -> None:
        scheduler = ManualScheduler()
        session = NegotiationSession(sample_listing, scheduler=scheduler)
        session.send_message("Hello")
        assert len(session.messages) == 2
        assert scheduler.run_next() == 2.0
        assert len(session.messages) == 3


class TestSendOffer:
    """Buyer offers and the seller's scripted answers."""

    def test_offer_at_list_with_volume_is_accepted(
        self, session: NegotiationSession, results: list[NegotiationResult]
    ) -> None:
        session.send_offer(Decimal("12.99"), 15)
        buyer, seller = session.messages[1:]
        assert buyer.status == OfferStatus.PENDING
        assert buyer.message == (
            "I would like to offer $12.99 per case for a quantity of 15 units."
        )
        assert seller.sender == Sender.SELLER
        assert seller.status == OfferStatus.ACCEPTED
        assert seller.offer == buyer.offer

        [result] = results
        assert result.final_price == Decimal("12.99")
        assert result.quantity == 15
        assert [m.id for m in result.messages] == ["1", "2", "3"]
        assert session.completed is True

    def test_counter_offer_is_pending_seller_offer(self, session: NegotiationSession) -> None:
        session.send_offer(Decimal("11.04"), 5)
        seller = session.messages[-1]
        assert seller.status == OfferStatus.PENDING
        assert seller.offer is not None
        assert seller.offer.price == Decimal("12.3405")
        assert seller.offer.quantity == 5
        assert "$12.34 per case" in seller.message
        assert seller.id in [m.id for m in session.pending_offers()]

    def test_low_offer_is_rejected_with_floor(
        self, session: NegotiationSession, results: list[NegotiationResult]
    ) -> None:
        session.send_offer(Decimal("10.00"), 50)
        seller = session.messages[-1]
        assert seller.status == OfferStatus.REJECTED
        assert seller.offer is None
        assert "$11.69 per case" in seller.message
        assert results == []

    def test_delivery_date_is_quoted_and_carried(self, session: NegotiationSession) -> None:
        session.send_offer(Decimal("11.04"), 5, date(2026, 4, 1))
        buyer, seller = session.messages[1:]
        assert buyer.message.endswith("with delivery by 2026-04-01.")
        assert seller.offer is not None
        assert seller.offer.delivery_date == date(2026, 4, 1)

    def test_missing_price_is_ignored(self, session: NegotiationSession) -> None:
        assert session.send_offer(None, 10) is None
        assert len(session.messages) == 1

    @pytest.mark.parametrize("price", [Decimal("-1"), Decimal("-0.01")])
    def test_negative_price_is_ignored(self, session: NegotiationSession, price: Decimal) -> None:
        pending_before = session.pending_offers()
        assert session.send_offer(price, 5) is None
        assert len(session.messages) == 1
        assert session.pending_offers() == pending_before

    @pytest.mark.parametrize("quantity", [0, -3])
    def test_quantity_is_clamped_to_one(self, session: NegotiationSession, quantity: int) -> None:
        sent = session.send_offer(Decimal("11.04"), quantity)
        assert sent is not None
        assert sent.offer is not None
        assert sent.offer.quantity == 1

    def test_seller_reply_and_completion_delays(self, sample_listing: ProductListing) -> None:
        scheduler = ManualScheduler()
        results: list[NegotiationResult] = []
        session = NegotiationSession(sample_listing, on_complete=results.append, scheduler=scheduler)
        session.send_offer(Decimal("12.99"), 15)
        assert scheduler.run_next() == 3.0
        assert session.completed is False
        assert scheduler.run_next() == 3.0
        assert len(results) == 1

    def test_custom_delays_are_used(self, sample_listing: ProductListing) -> None:
        scheduler = ManualScheduler()
        session = NegotiationSession(
            sample_listing,
            scheduler=scheduler,
            delays=ReplyDelays(offer_reply=0.5),
        )
        session.send_offer(Decimal("12.99"), 15)
        assert scheduler.calls[0][0] == 0.5


class TestAnswerOffers:
    """Buyer accepting or rejecting seller offers."""

    def test_accept_counter_completes_at_counter_price(
        self, session: NegotiationSession, results: list[NegotiationResult]
    ) -> None:
        session.send_offer(Decimal("11.04"), 5)
        counter_id = session.messages[-1].id
        accepted = session.accept_offer(counter_id)

        assert accepted.sender == Sender.BUYER
        assert accepted.status == OfferStatus.ACCEPTED
        assert accepted.message == "I accept your offer of $12.34 per case for 5 units."
        [result] = results
        assert result.final_price == Decimal("12.3405")
        assert result.quantity == 5
        assert result.messages[-1] == accepted

    def test_accept_greeting_completes_at_list_price(
        self, session: NegotiationSession, results: list[NegotiationResult]
    ) -> None:
        session.accept_offer("1")
        assert results[0].final_price == Decimal("12.99")
        assert results[0].quantity == 1

    def test_reject_counter_keeps_negotiating(
        self, session: NegotiationSession, results: list[NegotiationResult]
    ) -> None:
        session.send_offer(Decimal("11.04"), 5)
        counter_id = session.messages[-1].id
        rejected = session.reject_offer(counter_id)

        assert rejected.status == OfferStatus.REJECTED
        assert rejected.offer is None
        assert "continue negotiating" in rejected.message
        assert results == []
        assert counter_id not in [m.id for m in session.pending_offers()]

    def test_offer_can_only_be_answered_once(self, session: NegotiationSession) -> None:
        session.send_offer(Decimal("11.04"), 5)
        counter_id = session.messages[-1].id
        session.reject_offer(counter_id)
        with pytest.raises(InvalidTransitionError):
            session.reject_offer(counter_id)
        with pytest.raises(InvalidTransitionError):
            session.accept_offer(counter_id)

    def test_cannot_answer_after_completion(self, session: NegotiationSession) -> None:
        session.send_offer(Decimal("11.04"), 5)
        counter_id = session.messages[-1].id
        session.accept_offer("1")
        with pytest.raises(InvalidTransitionError, match="completed"):
            session.accept_offer(counter_id)

    def test_cannot_accept_own_offer(self, session: NegotiationSession) -> None:
        sent = session.send_offer(Decimal("10.00"), 5)
        assert sent is not None
        with pytest.raises(InvalidTransitionError):
            session.accept_offer(sent.id)

    def test_cannot_accept_seller_acceptance(self, sample_listing: ProductListing) -> None:
        scheduler = ManualScheduler()
        session = NegotiationSession(sample_listing, scheduler=scheduler)
        session.send_offer(Decimal("12.99"), 15)
        scheduler.run_next()
        with pytest.raises(InvalidTransitionError, match="accepted"):
            session.accept_offer(session.messages[-1].id)

    def test_unknown_offer_id(self, session: NegotiationSession) -> None:
        with pytest.raises(UnknownOfferError):
            session.accept_offer("99")

    def test_message_without_offer_is_unknown_offer(self, session: NegotiationSession) -> None:
        sent = session.send_message("hi")
        assert sent is not None
        with pytest.raises(UnknownOfferError):
            session.reject_offer(sent.id)

    def test_completion_fires_once(self, sample_listing: ProductListing) -> None:
        scheduler = ManualScheduler()
        results: list[NegotiationResult] = []
        session = NegotiationSession(sample_listing, on_complete=results.append, scheduler=scheduler)
        session.send_offer(Decimal("11.04"), 5)
        scheduler.run_next()
        counter_id = session.messages[-1].id
        session.accept_offer(counter_id)
        session.accept_offer("1")
        while scheduler.pending:
            scheduler.run_next()
        assert len(results) == 1
        assert results[0].final_price == Decimal("12.3405")


class TestThreadInvariants:
    """Messages are append-only with unique ids."""

    def test_ids_are_unique_and_increasing(self, session: NegotiationSession) -> None:
        session.send_message("hi")
        session.send_offer(Decimal("11.04"), 5)
        session.reject_offer(session.messages[-1].id)
        session.send_offer(Decimal("10.00"), 5)
        ids = [int(m.id) for m in session.messages]
        assert ids == list(range(1, len(ids) + 1))

    def test_messages_returns_copy(self, session: NegotiationSession) -> None:
        session.messages.clear()
        assert len(session.messages) == 1
