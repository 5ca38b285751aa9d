"""
Result values returned by the catalog adapter.

Each adapter operation returns exactly one of the classes below instead of
raising; :func:`render` is the only place that knows how each one looks as
an HTTP response.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

from fastapi import status
from fastapi.responses import JSONResponse


@dataclass(frozen=True)
class Success:
    payload: Dict[str, Any]
    status_code: int = status.HTTP_200_OK


@dataclass(frozen=True)
class ValidationFailed:
    """Input was malformed or incomplete; ``errors`` has one entry per problem."""

    errors: List[Dict[str, Any]] = field(default_factory=list)
    message: str = "Validation failed"


@dataclass(frozen=True)
class NotFound:
    message: str = "Shoe not found"


@dataclass(frozen=True)
class Conflict:
    """The request contradicts itself, e.g. path and body ids differ."""

    message: str


@dataclass(frozen=True)
class InternalError:
    message: str = "Internal server error"


Outcome = Union[Success, ValidationFailed, NotFound, Conflict, InternalError]


def render(outcome: Outcome) -> JSONResponse:
    """Build the JSON envelope for ``outcome``."""
    if isinstance(outcome, Success):
        return JSONResponse(
            status_code=outcome.status_code,
            content={"success": True, **outcome.payload},
        )
    if isinstance(outcome, ValidationFailed):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "message": outcome.message, "errors": outcome.errors},
        )
    if isinstance(outcome, NotFound):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"success": False, "message": outcome.message},
        )
    if isinstance(outcome, Conflict):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "message": outcome.message},
        )
    if isinstance(outcome, InternalError):
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "message": outcome.message},
        )
    raise TypeError(f"Unhandled outcome: {outcome!r}")
