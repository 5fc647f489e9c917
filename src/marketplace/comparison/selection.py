"""Bounded selection of products chosen for side-by-side comparison."""

from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum

import structlog
from pydantic import BaseModel

logger = structlog.get_logger()

DEFAULT_COMPARISON_LIMIT = 4

LIMIT_NOTICE_TITLE = "Comparison limit reached"
LIMIT_NOTICE = "You can compare up to {limit} products at a time"

ProductCallback = Callable[[str], None]


class AddStatus(StrEnum):
    """Outcome of asking to add a product to the comparison."""

    ADDED = "added"
    ALREADY_SELECTED = "already_selected"
    LIMIT_REACHED = "limit_reached"


class AddOutcome(BaseModel, frozen=True):
    """Result of ``ComparisonSelection.add``.

    Attributes:
        status: What happened to the request.
        notice: User-facing message when the limit was hit.
        selected: The selection after the call.
    """

    status: AddStatus
    notice: str | None = None
    selected: tuple[str, ...]


class ComparisonSelection:
    """Ordered set of at most ``limit`` product ids.

    Additions past the limit are refused with a notice rather than an
    exception; removals always succeed.

    Args:
        limit: Maximum number of products compared at once.
        on_remove: Called with the product id after a selected product is removed.
        on_add_to_cart: Called with the product id when the buyer adds a
            compared product to the cart.
    """

    def __init__(
        self,
        limit: int = DEFAULT_COMPARISON_LIMIT,
        on_remove: ProductCallback | None = None,
        on_add_to_cart: ProductCallback | None = None,
    ) -> None:
        if limit < 1:
            raise ValueError("limit must be at least 1")
        self._limit = limit
        self._on_remove = on_remove
        self._on_add_to_cart = on_add_to_cart
        self._selected: list[str] = []

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def selected(self) -> tuple[str, ...]:
        """Selected product ids in the order they were added."""
        return tuple(self._selected)

    def __len__(self) -> int:
        return len(self._selected)

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._selected

    def add(self, product_id: str) -> AddOutcome:
        """Add *product_id* unless it is already selected or the limit is reached."""
        if product_id in self._selected:
            return AddOutcome(status=AddStatus.ALREADY_SELECTED, selected=self.selected)

        if len(self._selected) >= self._limit:
            logger.info("comparison_limit_reached", product_id=product_id, limit=self._limit)
            return AddOutcome(
                status=AddStatus.LIMIT_REACHED,
                notice=LIMIT_NOTICE.format(limit=self._limit),
                selected=self.selected,
            )

        self._selected.append(product_id)
        return AddOutcome(status=AddStatus.ADDED, selected=self.selected)

    def remove(self, product_id: str) -> tuple[str, ...]:
        """Remove *product_id* if present and return the remaining selection."""
        if product_id in self._selected:
            self._selected.remove(product_id)
            if self._on_remove is not None:
                self._on_remove(product_id)
        return self.selected

    def add_to_cart(self, product_id: str) -> bool:
        """Hand a compared product to the cart callback.

        Returns:
            False if *product_id* is not part of the comparison.
        """
        if product_id not in self._selected:
            logger.info("cart_request_for_unselected_product", product_id=product_id)
            return False
        if self._on_add_to_cart is not None:
            self._on_add_to_cart(product_id)
        return True

    def clear(self) -> None:
        self._selected.clear()
