"""Split shipment allocation across multiple destinations.

The invariant lives in ``check_allocation``: for every item, the quantity
allocated across all destinations never exceeds the ordered quantity.
``SplitShipmentAllocator`` applies requested quantities after clamping them
into the allowed range, so a mutation always succeeds.
"""

from __future__ import annotations

import itertools
from collections.abc import Callable, Sequence
from datetime import date
from typing import Annotated, Literal

import structlog
from pydantic import BaseModel, Field

from marketplace.domain.errors import UnknownDestinationError
from marketplace.domain.models import (
    ItemAllocation,
    OrderItem,
    ShipmentDestination,
    SplitShipmentDetails,
)
from marketplace.domain.types import TimeSlot

logger = structlog.get_logger()

CompletionCallback = Callable[[SplitShipmentDetails], None]


class AllocationOk(BaseModel, frozen=True):
    """The requested quantity fits within the order."""

    kind: Literal["ok"] = "ok"


class AllocationExceeds(BaseModel, frozen=True):
    """The requested quantity would over-allocate the item.

    Attributes:
        max: Largest quantity the destination may hold for the item.
    """

    kind: Literal["exceeds"] = "exceeds"
    max: int


AllocationResult = Annotated[AllocationOk | AllocationExceeds, Field(discriminator="kind")]


def quantity_in_destination(destination: ShipmentDestination, item_id: str) -> int:
    """Quantity of *item_id* held by *destination* (0 if absent)."""
    for allocation in destination.items:
        if allocation.item_id == item_id:
            return allocation.quantity
    return 0


def total_allocated(destinations: Sequence[ShipmentDestination], item_id: str) -> int:
    """Quantity of *item_id* allocated across all *destinations*."""
    return sum(quantity_in_destination(dest, item_id) for dest in destinations)


def remaining_quantity(
    destinations: Sequence[ShipmentDestination],
    order_items: Sequence[OrderItem],
    item_id: str,
) -> int:
    """Ordered quantity of *item_id* not yet allocated (0 for unknown items)."""
    order_item = next((item for item in order_items if item.id == item_id), None)
    if order_item is None:
        return 0
    return order_item.quantity - total_allocated(destinations, item_id)


def check_allocation(
    destinations: Sequence[ShipmentDestination],
    order_items: Sequence[OrderItem],
    destination_id: str,
    item_id: str,
    quantity: int,
) -> AllocationOk | AllocationExceeds:
    """Check whether *destination_id* may hold *quantity* of *item_id*.

    The destination's own current allocation is released before comparing,
    since the new quantity replaces it.

    Args:
        destinations: All destinations of the split shipment.
        order_items: The order's line items.
        destination_id: Destination receiving the allocation.
        item_id: Order item being allocated.
        quantity: Requested quantity at the destination.

    Returns:
        ``AllocationOk`` or ``AllocationExceeds`` carrying the maximum allowed.

    Raises:
        UnknownDestinationError: If *destination_id* is not among *destinations*.
    """
    destination = next((d for d in destinations if d.id == destination_id), None)
    if destination is None:
        raise UnknownDestinationError(destination_id)

    allowed = remaining_quantity(destinations, order_items, item_id) + quantity_in_destination(
        destination, item_id
    )
    if quantity > allowed:
        return AllocationExceeds(max=max(allowed, 0))
    return AllocationOk()


class SplitShipmentAllocator:
    """Partitions an order's line items across one or more destinations.

    At least one destination is always present.  Destination ids come from a
    counter and are never reused after a removal.
    """

    def __init__(
        self,
        order_id: str,
        order_items: Sequence[OrderItem],
        on_complete: CompletionCallback | None = None,
    ) -> None:
        self._order_id = order_id
        self._order_items = list(order_items)
        self._on_complete = on_complete
        self._ids = itertools.count(1)
        self._destinations: list[ShipmentDestination] = [self._new_destination()]

    @property
    def order_id(self) -> str:
        return self._order_id

    @property
    def order_items(self) -> list[OrderItem]:
        return list(self._order_items)

    @property
    def destinations(self) -> list[ShipmentDestination]:
        """Return a copy of the destination list."""
        return list(self._destinations)

    # ------------------------------------------------------------------
    # Destinations
    # ------------------------------------------------------------------

    def add_destination(self) -> ShipmentDestination:
        """Append an empty destination and return it."""
        destination = self._new_destination()
        self._destinations.append(destination)
        return destination

    def remove_destination(self, destination_id: str) -> bool:
        """Remove a destination and release its allocations.

        Removing the last remaining destination is a no-op.

        Returns:
            True if a destination was removed.

        Raises:
            UnknownDestinationError: If no destination has *destination_id*.
        """
        self._find(destination_id)
        if len(self._destinations) <= 1:
            logger.debug("last_destination_kept", order_id=self._order_id)
            return False
        self._destinations = [d for d in self._destinations if d.id != destination_id]
        return True

    def update_destination(
        self,
        destination_id: str,
        location: str | None = None,
        delivery_date: date | None = None,
        time_slot: TimeSlot | None = None,
    ) -> ShipmentDestination:
        """Set the address, date, or time slot of a destination.

        Only the arguments that are not ``None`` are changed.
        """
        update: dict[str, object] = {}
        if location is not None:
            update["location"] = location
        if delivery_date is not None:
            update["delivery_date"] = delivery_date
        if time_slot is not None:
            update["time_slot"] = time_slot
        return self._replace(self._find(destination_id).model_copy(update=update))

    # ------------------------------------------------------------------
    # Allocation
    # ------------------------------------------------------------------

    def check_allocation(
        self, destination_id: str, item_id: str, quantity: int
    ) -> AllocationOk | AllocationExceeds:
        """Validate a requested allocation without applying it."""
        return check_allocation(
            self._destinations, self._order_items, destination_id, item_id, quantity
        )

    def allocate_item(
        self, destination_id: str, item_id: str, quantity: int
    ) -> AllocationOk | AllocationExceeds:
        """Set the quantity of *item_id* at a destination, clamping into range.

        The stored quantity is clamped to ``[0, max]``; a quantity of zero
        removes the item from the destination.

        Returns:
            The validation result for the quantity as requested, before clamping.

        Raises:
            UnknownDestinationError: If no destination has *destination_id*.
        """
        result = self.check_allocation(destination_id, item_id, quantity)
        applied = result.max if isinstance(result, AllocationExceeds) else max(quantity, 0)
        if applied != quantity:
            logger.debug(
                "allocation_clamped",
                destination_id=destination_id,
                item_id=item_id,
                requested=quantity,
                applied=applied,
            )

        destination = self._find(destination_id)
        items = [a for a in destination.items if a.item_id != item_id]
        if applied > 0:
            existing = next(
                (i for i, a in enumerate(destination.items) if a.item_id == item_id), None
            )
            allocation = ItemAllocation(item_id=item_id, quantity=applied)
            if existing is None:
                items.append(allocation)
            else:
                items.insert(existing, allocation)
        self._replace(destination.model_copy(update={"items": items}))
        return result

    def remove_item(self, destination_id: str, item_id: str) -> None:
        """Drop *item_id* from a destination."""
        destination = self._find(destination_id)
        items = [a for a in destination.items if a.item_id != item_id]
        self._replace(destination.model_copy(update={"items": items}))

    def get_item_quantity(self, destination_id: str, item_id: str) -> int:
        """Quantity of *item_id* at a destination."""
        return quantity_in_destination(self._find(destination_id), item_id)

    def get_total_allocated(self, item_id: str) -> int:
        """Quantity of *item_id* allocated across all destinations."""
        return total_allocated(self._destinations, item_id)

    def get_remaining_quantity(self, item_id: str) -> int:
        """Ordered quantity of *item_id* not yet allocated."""
        return remaining_quantity(self._destinations, self._order_items, item_id)

    def is_fully_allocated(self) -> bool:
        """Return True when every ordered unit has a destination."""
        return all(self.get_remaining_quantity(item.id) == 0 for item in self._order_items)

    def submit(self, special_instructions: str = "") -> SplitShipmentDetails:
        """Hand the shipping plan to the completion callback.

        Args:
            special_instructions: Free-text notes for the carrier.

        Returns:
            The submitted ``SplitShipmentDetails``.
        """
        details = SplitShipmentDetails(
            order_id=self._order_id,
            destinations=list(self._destinations),
            special_instructions=special_instructions,
        )
        logger.info(
            "split_shipment_submitted",
            order_id=self._order_id,
            destinations=len(details.destinations),
            fully_allocated=self.is_fully_allocated(),
        )
        if self._on_complete is not None:
            self._on_complete(details)
        return details

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _new_destination(self) -> ShipmentDestination:
        return ShipmentDestination(id=str(next(self._ids)))

    def _find(self, destination_id: str) -> ShipmentDestination:
        for destination in self._destinations:
            if destination.id == destination_id:
                return destination
        raise UnknownDestinationError(destination_id)

    def _replace(self, destination: ShipmentDestination) -> ShipmentDestination:
        self._destinations = [
            destination if d.id == destination.id else d for d in self._destinations
        ]
        return destination
