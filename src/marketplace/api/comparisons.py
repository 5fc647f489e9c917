"""HTTP endpoints for product comparison selections."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from marketplace.api.dependencies import get_registry
from marketplace.api.registry import COMPARISON, SessionRegistry
from marketplace.api.schemas import AddProductRequest, AddProductResponse, ComparisonView
from marketplace.comparison.matrix import ComparisonMatrix, build_comparison_matrix
from marketplace.comparison.selection import ComparisonSelection
from marketplace.domain.models import ComparisonProduct

router = APIRouter(prefix="/comparisons")


def _view(
    session_id: str, selection: ComparisonSelection, registry: SessionRegistry
) -> ComparisonView:
    return ComparisonView(
        id=session_id,
        selected=list(selection.selected),
        limit=selection.limit,
        cart=list(registry.carts.get(session_id, [])),
    )


@router.post("", status_code=201)
async def create_comparison(registry: SessionRegistry = Depends(get_registry)) -> ComparisonView:
    session_id, selection = registry.create_comparison()
    return _view(session_id, selection, registry)


@router.get("/{session_id}")
async def get_comparison(
    session_id: str, registry: SessionRegistry = Depends(get_registry)
) -> ComparisonView:
    return _view(session_id, registry.get_comparison(session_id), registry)


@router.delete("/{session_id}", status_code=204)
async def delete_comparison(
    session_id: str, registry: SessionRegistry = Depends(get_registry)
) -> None:
    registry.discard(COMPARISON, session_id)


@router.post("/{session_id}/products")
async def add_product(
    session_id: str, body: AddProductRequest, registry: SessionRegistry = Depends(get_registry)
) -> AddProductResponse:
    selection = registry.get_comparison(session_id)
    outcome = selection.add(body.product_id)
    return AddProductResponse(outcome=outcome, comparison=_view(session_id, selection, registry))


@router.delete("/{session_id}/products/{product_id}")
async def remove_product(
    session_id: str, product_id: str, registry: SessionRegistry = Depends(get_registry)
) -> ComparisonView:
    selection = registry.get_comparison(session_id)
    selection.remove(product_id)
    return _view(session_id, selection, registry)


@router.post("/{session_id}/products/{product_id}/cart")
async def add_to_cart(
    session_id: str, product_id: str, registry: SessionRegistry = Depends(get_registry)
) -> ComparisonView:
    selection = registry.get_comparison(session_id)
    if not selection.add_to_cart(product_id):
        raise HTTPException(
            status_code=404, detail=f"Product '{product_id}' is not being compared"
        )
    return _view(session_id, selection, registry)


@router.post("/{session_id}/matrix")
async def comparison_matrix(
    session_id: str,
    products: list[ComparisonProduct],
    registry: SessionRegistry = Depends(get_registry),
) -> ComparisonMatrix:
    """Build the matrix for the selected products, in selection order.

    Product records come from the caller; records that are not selected are
    ignored.
    """
    selection = registry.get_comparison(session_id)
    by_id = {product.id: product for product in products}
    chosen = [by_id[pid] for pid in selection.selected if pid in by_id]
    return build_comparison_matrix(chosen, limit=selection.limit)
