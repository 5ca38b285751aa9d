"""
Translation layer between HTTP requests and the shoe repository.

``ShoeAdapter`` takes already-decoded request data (query parameters,
JSON bodies, path ids), validates it with the schemas from ``schemas``,
calls the repository and describes the result as an outcome value from
``outcomes``. It never touches FastAPI request/response objects, so it can
be exercised directly in tests.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping

from fastapi import status
from pydantic import ValidationError

from .outcomes import Conflict, NotFound, Outcome, Success, ValidationFailed
from .schemas import Shoe, ShoeCreate, ShoeFilters, ShoeUpdate
from .store import ShoeRepository


logger = logging.getLogger(__name__)


def format_errors(errors: Iterable[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    """Reduce pydantic error dicts to ``{field, message, type}`` entries.

    The offending input value is deliberately left out of the response.
    """
    return [
        {
            "field": ".".join(str(part) for part in error.get("loc", ())),
            "message": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in errors
    ]


def _dump(shoe: Shoe) -> Dict[str, Any]:
    return shoe.model_dump(mode="json", by_alias=True)


class ShoeAdapter:
    """Validate requests, call the repository and describe the result."""

    def __init__(self, repository: ShoeRepository) -> None:
        self._repository = repository

    def list_shoes(self, params: Mapping[str, str]) -> Outcome:
        try:
            filters = ShoeFilters.model_validate(dict(params))
        except ValidationError as exc:
            return self._invalid(exc)
        shoes = self._repository.list_all(filters)
        return Success(
            {
                "data": [_dump(s) for s in shoes],
                "count": len(shoes),
                "filters": filters.applied(),
            }
        )

    def get_shoe(self, shoe_id: str) -> Outcome:
        shoe = self._repository.get_by_id(shoe_id)
        if shoe is None:
            logger.debug("Shoe %s not found", shoe_id)
            return NotFound()
        return Success({"data": _dump(shoe)})

    def create_shoe(self, payload: Any) -> Outcome:
        try:
            data = ShoeCreate.model_validate(payload)
        except ValidationError as exc:
            return self._invalid(exc)
        shoe = self._repository.create(data)
        return Success(
            {"data": _dump(shoe), "message": "Shoe created successfully"},
            status_code=status.HTTP_201_CREATED,
        )

    def update_shoe(self, shoe_id: str, payload: Any) -> Outcome:
        try:
            update = ShoeUpdate.model_validate(payload)
        except ValidationError as exc:
            return self._invalid(exc)
        if update.id is not None and update.id != shoe_id:
            logger.info("Rejected update of %s: body id %s does not match", shoe_id, update.id)
            return Conflict("ID in URL and body must match")
        shoe = self._repository.update(shoe_id, update.changes())
        if shoe is None:
            logger.debug("Shoe %s not found", shoe_id)
            return NotFound()
        return Success({"data": _dump(shoe), "message": "Shoe updated successfully"})

    def delete_shoe(self, shoe_id: str) -> Outcome:
        if not self._repository.delete(shoe_id):
            logger.debug("Shoe %s not found", shoe_id)
            return NotFound()
        return Success({"message": "Shoe deleted successfully"})

    def list_brands(self) -> Outcome:
        brands = self._repository.distinct_brands()
        return Success({"data": brands, "count": len(brands)})

    def list_categories(self) -> Outcome:
        categories = self._repository.distinct_categories()
        return Success({"data": categories, "count": len(categories)})

    @staticmethod
    def _invalid(exc: ValidationError) -> ValidationFailed:
        errors = format_errors(exc.errors(include_url=False))
        logger.info("Validation failed: %s", ", ".join(e["field"] or "<body>" for e in errors))
        return ValidationFailed(errors)
