"""HTTP endpoints for buyer negotiations and the seller negotiation board."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from marketplace.api.dependencies import get_registry
from marketplace.api.registry import NEGOTIATION, SessionRegistry
from marketplace.api.schemas import (
    BoardOpenRequest,
    CounterRequest,
    MessageRequest,
    NegotiationView,
    OfferRequest,
)
from marketplace.domain.models import ProductListing, SellerNegotiation
from marketplace.negotiation.board import BoardTab
from marketplace.negotiation.session import NegotiationSession

router = APIRouter()


def _view(session_id: str, session: NegotiationSession) -> NegotiationView:
    return NegotiationView(
        id=session_id,
        listing=session.listing,
        messages=session.messages,
        pending_offer_ids=[m.id for m in session.pending_offers()],
        completed=session.completed,
        result=session.result,
    )


# ---------------------------------------------------------------------------
# Buyer negotiation sessions
# ---------------------------------------------------------------------------


@router.post("/negotiations", status_code=201)
async def create_negotiation(
    listing: ProductListing, registry: SessionRegistry = Depends(get_registry)
) -> NegotiationView:
    session_id, session = registry.create_negotiation(listing)
    return _view(session_id, session)


@router.get("/negotiations/{session_id}")
async def get_negotiation(
    session_id: str, registry: SessionRegistry = Depends(get_registry)
) -> NegotiationView:
    return _view(session_id, registry.get_negotiation(session_id))


@router.delete("/negotiations/{session_id}", status_code=204)
async def delete_negotiation(
    session_id: str, registry: SessionRegistry = Depends(get_registry)
) -> None:
    registry.discard(NEGOTIATION, session_id)


@router.post("/negotiations/{session_id}/messages")
async def send_message(
    session_id: str, body: MessageRequest, registry: SessionRegistry = Depends(get_registry)
) -> NegotiationView:
    session = registry.get_negotiation(session_id)
    session.send_message(body.text)
    return _view(session_id, session)


@router.post("/negotiations/{session_id}/offers")
async def send_offer(
    session_id: str, body: OfferRequest, registry: SessionRegistry = Depends(get_registry)
) -> NegotiationView:
    session = registry.get_negotiation(session_id)
    session.send_offer(body.price, body.quantity, body.delivery_date)
    return _view(session_id, session)


@router.post("/negotiations/{session_id}/offers/{offer_id}/accept")
async def accept_offer(
    session_id: str, offer_id: str, registry: SessionRegistry = Depends(get_registry)
) -> NegotiationView:
    session = registry.get_negotiation(session_id)
    session.accept_offer(offer_id)
    return _view(session_id, session)


@router.post("/negotiations/{session_id}/offers/{offer_id}/reject")
async def reject_offer(
    session_id: str, offer_id: str, registry: SessionRegistry = Depends(get_registry)
) -> NegotiationView:
    session = registry.get_negotiation(session_id)
    session.reject_offer(offer_id)
    return _view(session_id, session)


# ---------------------------------------------------------------------------
# Seller board
# ---------------------------------------------------------------------------


@router.post("/board/negotiations", status_code=201)
async def open_board_negotiation(
    body: BoardOpenRequest, registry: SessionRegistry = Depends(get_registry)
) -> SellerNegotiation:
    return registry.board.open(
        buyer=body.buyer,
        product=body.product,
        quantity=body.quantity,
        initial_price=body.initial_price,
        offer=body.offer,
        message=body.message,
    )


@router.get("/board/negotiations")
async def list_board_negotiations(
    tab: BoardTab = BoardTab.ACTIVE, registry: SessionRegistry = Depends(get_registry)
) -> list[SellerNegotiation]:
    registry.board.expire_overdue()
    return registry.board.filter(tab)


@router.post("/board/negotiations/{negotiation_id}/accept")
async def accept_board_negotiation(
    negotiation_id: str, registry: SessionRegistry = Depends(get_registry)
) -> SellerNegotiation:
    return registry.board.accept(negotiation_id)


@router.post("/board/negotiations/{negotiation_id}/reject")
async def reject_board_negotiation(
    negotiation_id: str, registry: SessionRegistry = Depends(get_registry)
) -> SellerNegotiation:
    return registry.board.reject(negotiation_id)


@router.post("/board/negotiations/{negotiation_id}/counter")
async def counter_board_negotiation(
    negotiation_id: str, body: CounterRequest, registry: SessionRegistry = Depends(get_registry)
) -> SellerNegotiation:
    return registry.board.counter(negotiation_id, body.price, body.message)
