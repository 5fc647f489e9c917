"""Split shipment allocation across destinations."""

from marketplace.shipment.allocator import (
    AllocationExceeds,
    AllocationOk,
    AllocationResult,
    SplitShipmentAllocator,
    check_allocation,
    remaining_quantity,
    total_allocated,
)

__all__ = [
    "AllocationExceeds",
    "AllocationOk",
    "AllocationResult",
    "SplitShipmentAllocator",
    "check_allocation",
    "remaining_quantity",
    "total_allocated",
]
