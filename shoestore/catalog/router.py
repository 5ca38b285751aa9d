"""
Route definitions for the shoe catalogue API.

Endpoints under /api/shoes:
- GET    /                : list shoes (brand, category, minPrice, maxPrice, size, color)
- GET    /brands          : distinct brands
- GET    /categories      : distinct categories
- GET    /{shoe_id}       : get one shoe
- POST   /                : create a shoe
- PUT    /{shoe_id}       : partially update a shoe
- DELETE /{shoe_id}       : delete a shoe

Every handler delegates to ``ShoeAdapter`` and renders the returned
outcome. Anything the adapter raises is logged and answered with a generic
500 envelope; the process keeps serving.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from fastapi import APIRouter, Body, Depends, Request
from fastapi.responses import JSONResponse

from .adapter import ShoeAdapter
from .outcomes import InternalError, Outcome, render


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/shoes", tags=["shoes"])


def get_adapter(request: Request) -> ShoeAdapter:
    """Build an adapter around the repository created at application start."""
    return ShoeAdapter(request.app.state.shoe_repository)


def _respond(operation: Callable[[], Outcome]) -> JSONResponse:
    try:
        outcome = operation()
    except Exception:
        logger.exception("Unhandled error while processing shoe request")
        outcome = InternalError()
    return render(outcome)


# Static paths are registered before /{shoe_id} so they are not captured by it.

@router.get("")
def list_shoes(request: Request, adapter: ShoeAdapter = Depends(get_adapter)) -> JSONResponse:
    """Return the shoes matching the query-string filters."""
    return _respond(lambda: adapter.list_shoes(request.query_params))


@router.get("/brands")
def list_brands(adapter: ShoeAdapter = Depends(get_adapter)) -> JSONResponse:
    return _respond(adapter.list_brands)


@router.get("/categories")
def list_categories(adapter: ShoeAdapter = Depends(get_adapter)) -> JSONResponse:
    return _respond(adapter.list_categories)


@router.get("/{shoe_id}")
def get_shoe(shoe_id: str, adapter: ShoeAdapter = Depends(get_adapter)) -> JSONResponse:
    return _respond(lambda: adapter.get_shoe(shoe_id))


@router.post("")
def create_shoe(
    payload: Any = Body(default=None),
    adapter: ShoeAdapter = Depends(get_adapter),
) -> JSONResponse:
    """Create a shoe from a JSON body; answers 201 with the stored record."""
    return _respond(lambda: adapter.create_shoe(payload))


@router.put("/{shoe_id}")
def update_shoe(
    shoe_id: str,
    payload: Any = Body(default=None),
    adapter: ShoeAdapter = Depends(get_adapter),
) -> JSONResponse:
    """Apply the supplied fields to an existing shoe.

    An ``id`` in the body is allowed only if it equals ``shoe_id``.
    """
    return _respond(lambda: adapter.update_shoe(shoe_id, payload))


@router.delete("/{shoe_id}")
def delete_shoe(shoe_id: str, adapter: ShoeAdapter = Depends(get_adapter)) -> JSONResponse:
    return _respond(lambda: adapter.delete_shoe(shoe_id))
