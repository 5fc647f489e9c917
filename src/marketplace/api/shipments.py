"""HTTP endpoints for split shipment allocation."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from marketplace.api.dependencies import get_registry
from marketplace.api.registry import SHIPMENT, SessionRegistry
from marketplace.api.schemas import (
    AllocateRequest,
    AllocationResponse,
    CreateShipmentRequest,
    ShipmentView,
    SubmitShipmentRequest,
    UpdateDestinationRequest,
)

router = APIRouter(prefix="/shipments")


def _view(session_id: str, registry: SessionRegistry) -> ShipmentView:
    allocator = registry.get_shipment(session_id)
    return ShipmentView(
        id=session_id,
        order_id=allocator.order_id,
        order_items=allocator.order_items,
        destinations=allocator.destinations,
        remaining={
            item.id: allocator.get_remaining_quantity(item.id) for item in allocator.order_items
        },
        fully_allocated=allocator.is_fully_allocated(),
        submitted=registry.submitted.get(session_id),
    )


@router.post("", status_code=201)
async def create_shipment(
    body: CreateShipmentRequest, registry: SessionRegistry = Depends(get_registry)
) -> ShipmentView:
    session_id, _ = registry.create_shipment(body.order_id, body.items)
    return _view(session_id, registry)


@router.get("/{session_id}")
async def get_shipment(
    session_id: str, registry: SessionRegistry = Depends(get_registry)
) -> ShipmentView:
    return _view(session_id, registry)


@router.delete("/{session_id}", status_code=204)
async def delete_shipment(
    session_id: str, registry: SessionRegistry = Depends(get_registry)
) -> None:
    registry.discard(SHIPMENT, session_id)


@router.post("/{session_id}/destinations", status_code=201)
async def add_destination(
    session_id: str, registry: SessionRegistry = Depends(get_registry)
) -> ShipmentView:
    registry.get_shipment(session_id).add_destination()
    return _view(session_id, registry)


@router.patch("/{session_id}/destinations/{destination_id}")
async def update_destination(
    session_id: str,
    destination_id: str,
    body: UpdateDestinationRequest,
    registry: SessionRegistry = Depends(get_registry),
) -> ShipmentView:
    registry.get_shipment(session_id).update_destination(
        destination_id,
        location=body.location,
        delivery_date=body.delivery_date,
        time_slot=body.time_slot,
    )
    return _view(session_id, registry)


@router.delete("/{session_id}/destinations/{destination_id}")
async def remove_destination(
    session_id: str, destination_id: str, registry: SessionRegistry = Depends(get_registry)
) -> ShipmentView:
    registry.get_shipment(session_id).remove_destination(destination_id)
    return _view(session_id, registry)


@router.put("/{session_id}/destinations/{destination_id}/items/{item_id}")
async def allocate_item(
    session_id: str,
    destination_id: str,
    item_id: str,
    body: AllocateRequest,
    registry: SessionRegistry = Depends(get_registry),
) -> AllocationResponse:
    result = registry.get_shipment(session_id).allocate_item(
        destination_id, item_id, body.quantity
    )
    return AllocationResponse(result=result, shipment=_view(session_id, registry))


@router.delete("/{session_id}/destinations/{destination_id}/items/{item_id}")
async def remove_item(
    session_id: str,
    destination_id: str,
    item_id: str,
    registry: SessionRegistry = Depends(get_registry),
) -> ShipmentView:
    registry.get_shipment(session_id).remove_item(destination_id, item_id)
    return _view(session_id, registry)


@router.post("/{session_id}/submit")
async def submit_shipment(
    session_id: str,
    body: SubmitShipmentRequest,
    registry: SessionRegistry = Depends(get_registry),
) -> ShipmentView:
    registry.get_shipment(session_id).submit(body.special_instructions)
    return _view(session_id, registry)
