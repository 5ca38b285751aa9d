"""
In-memory data store for the shoe catalogue.

``ShoeRepository`` owns the list of ``Shoe`` records. It is created once
when the application starts (see ``shoestore.main.create_app``) and is
seeded with the four sample products below, so the catalogue is reset on
every restart. Nothing is written to disk.

Records handed out by the repository are always copies: mutating a
returned ``Shoe`` never changes what is stored. A missing id is reported
by returning ``None`` (or ``False`` for :meth:`ShoeRepository.delete`),
never by raising.

FastAPI runs synchronous endpoints in a worker thread pool, so every
operation holds a single re-entrant lock for its whole duration.
"""

from __future__ import annotations

import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from .schemas import Shoe, ShoeCreate, ShoeFilters


logger = logging.getLogger(__name__)

# Fields the client can never overwrite through ``update``.
_READ_ONLY_FIELDS = frozenset({"id", "created_at", "updated_at"})

SEED_SHOES: List[Dict[str, Any]] = [
    {
        "id": "1",
        "name": "Air Max 90",
        "brand": "Nike",
        "price": 120,
        "size": 9,
        "color": "White/Black",
        "material": "Leather",
        "description": "Classic Nike running shoes",
        "in_stock": True,
        "stock_quantity": 15,
        "category": "Running",
        "image_url": "https://example.com/images/air-max-90.jpg",
    },
    {
        "id": "2",
        "name": "Ultra Boost 22",
        "brand": "Adidas",
        "price": 180,
        "size": 10,
        "color": "Black",
        "material": "Primeknit",
        "description": "High-performance running shoes",
        "in_stock": True,
        "stock_quantity": 8,
        "category": "Running",
        "image_url": "https://example.com/images/ultra-boost-22.jpg",
    },
    {
        "id": "3",
        "name": "Chuck Taylor All Star",
        "brand": "Converse",
        "price": 65,
        "size": 8,
        "color": "Red",
        "material": "Canvas",
        "description": "Classic canvas sneakers",
        "in_stock": True,
        "stock_quantity": 25,
        "category": "Casual",
        "image_url": "https://example.com/images/chuck-taylor.jpg",
    },
    {
        "id": "4",
        "name": "Classic Leather",
        "brand": "Dr. Martens",
        "price": 140,
        "size": 9,
        "color": "Black",
        "material": "Leather",
        "description": "Iconic leather boots",
        "in_stock": True,
        "stock_quantity": 12,
        "category": "Boots",
        "image_url": "https://example.com/images/classic-leather.jpg",
    },
]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _norm(s: Optional[str]) -> str:
    """Normalize a string for case-insensitive comparison.

    Parameters
    ----------
    s : Optional[str]
        The string to normalize.

    Returns
    -------
    str
        The normalized string (lowercased and stripped). An empty string is
        returned when the input is ``None`` or empty.
    """
    return (s or "").strip().lower()


def _matches(shoe: Shoe, filters: ShoeFilters) -> bool:
    """Return True when ``shoe`` satisfies every predicate set in ``filters``."""
    if filters.brand is not None and _norm(shoe.brand) != _norm(filters.brand):
        return False
    if filters.category is not None and _norm(shoe.category) != _norm(filters.category):
        return False
    # Price bounds are inclusive on both ends.
    if filters.min_price is not None and shoe.price < filters.min_price:
        return False
    if filters.max_price is not None and shoe.price > filters.max_price:
        return False
    if filters.size is not None and shoe.size != filters.size:
        return False
    if filters.color is not None and _norm(filters.color) not in _norm(shoe.color):
        return False
    return True


class ShoeRepository:
    """Authoritative in-memory collection of shoes.

    Parameters
    ----------
    seed : Optional[Iterable[Mapping[str, Any]]]
        Records to start with, keyed by field name. ``id`` is optional;
        a fresh one is generated when missing. Defaults to ``SEED_SHOES``.
        Pass an empty list for an empty catalogue.
    clock : Callable[[], datetime]
        Source of timestamps, UTC ``datetime.now`` by default.
    """

    def __init__(
        self,
        seed: Optional[Iterable[Mapping[str, Any]]] = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._lock = threading.RLock()
        self._clock = clock
        self._shoes: List[Shoe] = []
        now = self._clock()
        for entry in SEED_SHOES if seed is None else seed:
            record = dict(entry)
            record.setdefault("id", self._new_id())
            record.setdefault("created_at", now)
            record.setdefault("updated_at", record["created_at"])
            self._shoes.append(Shoe.model_validate(record))

    def __len__(self) -> int:
        with self._lock:
            return len(self._shoes)

    def count(self) -> int:
        return len(self)

    # --- Queries --------------------------------------------------------------

    def list_all(self, filters: Optional[ShoeFilters] = None) -> List[Shoe]:
        """Return the shoes matching ``filters`` in insertion order.

        Every predicate that is set must hold (logical AND); ``None`` or an
        empty ``ShoeFilters`` returns the whole catalogue.
        """
        with self._lock:
            if filters is None:
                matching = list(self._shoes)
            else:
                matching = [s for s in self._shoes if _matches(s, filters)]
            return [s.model_copy(deep=True) for s in matching]

    def get_by_id(self, shoe_id: str) -> Optional[Shoe]:
        """Return a copy of the shoe with ``shoe_id``, or None if not found."""
        with self._lock:
            index = self._index_of(shoe_id)
            if index is None:
                return None
            return self._shoes[index].model_copy(deep=True)

    def distinct_brands(self) -> List[str]:
        """Unique brands in first-seen order, exactly as stored."""
        with self._lock:
            return list(dict.fromkeys(s.brand for s in self._shoes))

    def distinct_categories(self) -> List[str]:
        """Unique categories in first-seen order, exactly as stored."""
        with self._lock:
            return list(dict.fromkeys(s.category for s in self._shoes))

    # --- Mutations ------------------------------------------------------------

    def create(self, data: ShoeCreate) -> Shoe:
        """Store a new shoe with a fresh id and timestamps and return it."""
        with self._lock:
            now = self._clock()
            shoe = Shoe(
                **data.model_dump(),
                id=self._new_id(),
                created_at=now,
                updated_at=now,
            )
            self._shoes.append(shoe)
            logger.info("Created shoe %s (%s %s)", shoe.id, shoe.brand, shoe.name)
            return shoe.model_copy(deep=True)

    def update(self, shoe_id: str, changes: Mapping[str, Any]) -> Optional[Shoe]:
        """Merge ``changes`` into the stored shoe and return the result.

        Keys that are not record fields are ignored, as are ``id``,
        ``created_at`` and ``updated_at``. Returns None if the id is unknown,
        in which case nothing is modified.
        """
        with self._lock:
            index = self._index_of(shoe_id)
            if index is None:
                return None
            current = self._shoes[index]
            merged = {
                key: value
                for key, value in changes.items()
                if key in Shoe.model_fields and key not in _READ_ONLY_FIELDS
            }
            # The clock may step backwards; updated_at must not.
            merged["updated_at"] = max(self._clock(), current.updated_at)
            updated = current.model_copy(update=merged)
            self._shoes[index] = updated
            logger.info("Updated shoe %s (fields: %s)", shoe_id, ", ".join(sorted(merged)))
            return updated.model_copy(deep=True)

    def delete(self, shoe_id: str) -> bool:
        """Remove the shoe; return False when there is nothing to remove."""
        with self._lock:
            index = self._index_of(shoe_id)
            if index is None:
                return False
            del self._shoes[index]
            logger.info("Deleted shoe %s", shoe_id)
            return True

    # --- Helpers --------------------------------------------------------------

    def _index_of(self, shoe_id: str) -> Optional[int]:
        for index, shoe in enumerate(self._shoes):
            if shoe.id == shoe_id:
                return index
        return None

    @staticmethod
    def _new_id() -> str:
        return str(uuid.uuid4())
