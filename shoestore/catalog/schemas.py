"""
Pydantic schema definitions for the shoe catalog.

``Shoe`` is the stored record. ``ShoeCreate`` and ``ShoeUpdate`` describe
the request payloads accepted by the API; they validate strictly so that a
price sent as ``"120"`` or a stock flag sent as ``"yes"`` is reported back
to the client instead of being silently coerced. ``ShoeFilters`` is the
parsed form of the listing query string.

All models use camelCase aliases on the wire (``inStock``,
``stockQuantity``, ``imageUrl``...) while Python code uses snake_case.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, Dict, List, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def _require_text(value: Optional[str]) -> Optional[str]:
    # Stored verbatim; only a value made of whitespace alone is refused.
    if value is not None and not value.strip():
        raise ValueError("must not be blank")
    return value


Text = Annotated[str, AfterValidator(_require_text)]


class Shoe(BaseModel):
    """A single shoe product held by the repository."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    brand: str
    price: float
    size: float
    color: str
    material: str
    description: Optional[str] = None
    in_stock: bool
    stock_quantity: int
    category: str
    image_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ShoeCreate(BaseModel):
    """Payload for ``POST /api/shoes``.

    Every field except ``description`` and ``image_url`` is required.
    Unknown keys (including ``id`` and the timestamps) are ignored; the
    repository assigns those itself.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        strict=True,
    )

    name: Text
    brand: Text
    price: float = Field(ge=0, allow_inf_nan=False)
    size: float = Field(gt=0, allow_inf_nan=False)
    color: Text
    material: Text
    description: Optional[str] = None
    in_stock: bool
    stock_quantity: int = Field(ge=0)
    category: Text
    image_url: Optional[str] = None


class ShoeUpdate(BaseModel):
    """Partial payload for ``PUT /api/shoes/{id}``.

    Only the keys actually present in the request body are applied, see
    :meth:`changes`. ``id`` may be sent but must match the path id; the
    adapter checks that before anything is written.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        strict=True,
    )

    id: Optional[str] = None
    name: Optional[Text] = None
    brand: Optional[Text] = None
    price: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    size: Optional[float] = Field(default=None, gt=0, allow_inf_nan=False)
    color: Optional[Text] = None
    material: Optional[Text] = None
    description: Optional[str] = None
    in_stock: Optional[bool] = None
    stock_quantity: Optional[int] = Field(default=None, ge=0)
    category: Optional[Text] = None
    image_url: Optional[str] = None

    # Only description and image_url may be cleared with an explicit null.
    @field_validator(
        "id", "name", "brand", "price", "size", "color", "material",
        "in_stock", "stock_quantity", "category",
    )
    @classmethod
    def _reject_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("must not be null")
        return value

    def changes(self) -> Dict[str, Any]:
        """Return the fields supplied by the client, keyed by field name."""
        return self.model_dump(exclude_unset=True, exclude={"id"})


class ShoeFilters(BaseModel):
    """Listing predicates parsed from the query string.

    Values arrive as strings; numeric ones are parsed here and a value that
    is not a finite number fails validation. Empty parameters
    (``?brand=``) count as absent.
    """

    model_config = ConfigDict(alias_generator=to_camel)

    brand: Optional[str] = None
    category: Optional[str] = None
    min_price: Optional[float] = Field(default=None, allow_inf_nan=False)
    max_price: Optional[float] = Field(default=None, allow_inf_nan=False)
    size: Optional[float] = Field(default=None, allow_inf_nan=False)
    color: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def _blank_is_absent(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    def applied(self) -> List[str]:
        """Names (as sent on the wire) of the predicates that are set."""
        return [
            to_camel(name)
            for name in type(self).model_fields
            if getattr(self, name) is not None
        ]
