"""Tests for ShoeAdapter and outcome rendering."""

import json

import pytest

from shoestore.catalog.adapter import ShoeAdapter, format_errors
from shoestore.catalog.outcomes import (
    Conflict,
    InternalError,
    NotFound,
    Success,
    ValidationFailed,
    render,
)
from shoestore.catalog.store import ShoeRepository


NEW_SHOE = {
    "name": "Gel-Lyte III",
    "brand": "Asics",
    "price": 110,
    "size": 10.5,
    "color": "Grey",
    "material": "Suede",
    "inStock": True,
    "stockQuantity": 4,
    "category": "Casual",
}


class RecordingRepository(ShoeRepository):
    """Repository that remembers which mutating calls reached it."""

    def __init__(self) -> None:
        super().__init__()
        self.update_calls = []

    def update(self, shoe_id, changes):
        self.update_calls.append((shoe_id, dict(changes)))
        return super().update(shoe_id, changes)


def _setup():
    repo = RecordingRepository()
    return repo, ShoeAdapter(repo)


class TestListShoes:

    def test_without_params(self):
        _, adapter = _setup()
        outcome = adapter.list_shoes({})

        assert isinstance(outcome, Success)
        assert outcome.payload["count"] == 4
        assert outcome.payload["filters"] == []
        assert [s["id"] for s in outcome.payload["data"]] == ["1", "2", "3", "4"]

    def test_brand_filter(self):
        _, adapter = _setup()
        outcome = adapter.list_shoes({"brand": "nike"})

        assert outcome.payload["count"] == 1
        assert outcome.payload["data"][0]["name"] == "Air Max 90"
        assert outcome.payload["filters"] == ["brand"]

    def test_price_range(self):
        _, adapter = _setup()
        outcome = adapter.list_shoes({"minPrice": "100", "maxPrice": "150"})

        assert [s["price"] for s in outcome.payload["data"]] == [120, 140]
        assert outcome.payload["filters"] == ["minPrice", "maxPrice"]

    def test_records_use_camel_case_keys(self):
        _, adapter = _setup()
        record = adapter.list_shoes({}).payload["data"][0]

        assert {"inStock", "stockQuantity", "imageUrl", "createdAt", "updatedAt"} <= set(record)
        assert "in_stock" not in record

    def test_malformed_number_is_a_validation_error(self):
        _, adapter = _setup()
        outcome = adapter.list_shoes({"size": "large"})

        assert isinstance(outcome, ValidationFailed)
        assert [e["field"] for e in outcome.errors] == ["size"]


class TestGetShoe:

    def test_found(self):
        _, adapter = _setup()
        outcome = adapter.get_shoe("2")

        assert isinstance(outcome, Success)
        assert outcome.payload["data"]["brand"] == "Adidas"

    def test_not_found(self):
        _, adapter = _setup()
        assert adapter.get_shoe("nope") == NotFound("Shoe not found")


class TestCreateShoe:

    def test_created(self):
        repo, adapter = _setup()
        outcome = adapter.create_shoe(dict(NEW_SHOE))

        assert isinstance(outcome, Success)
        assert outcome.status_code == 201
        assert outcome.payload["message"] == "Shoe created successfully"
        assert outcome.payload["data"]["stockQuantity"] == 4
        assert len(repo) == 5

    def test_validation_failure_does_not_create(self):
        repo, adapter = _setup()
        payload = dict(NEW_SHOE)
        del payload["brand"]
        payload["price"] = -5
        outcome = adapter.create_shoe(payload)

        assert isinstance(outcome, ValidationFailed)
        assert sorted(e["field"] for e in outcome.errors) == ["brand", "price"]
        assert len(repo) == 4

    def test_missing_body(self):
        _, adapter = _setup()
        outcome = adapter.create_shoe(None)

        assert isinstance(outcome, ValidationFailed)
        assert outcome.errors[0]["field"] == ""


class TestUpdateShoe:

    def test_updated(self):
        repo, adapter = _setup()
        outcome = adapter.update_shoe("3", {"price": 59.99, "id": "3"})

        assert isinstance(outcome, Success)
        assert outcome.payload["data"]["price"] == 59.99
        assert outcome.payload["data"]["id"] == "3"
        assert outcome.payload["message"] == "Shoe updated successfully"
        assert repo.update_calls == [("3", {"price": 59.99})]

    def test_conflicting_id_never_reaches_repository(self):
        repo, adapter = _setup()
        before = repo.list_all()
        outcome = adapter.update_shoe("1", {"id": "2", "price": 1})

        assert outcome == Conflict("ID in URL and body must match")
        assert repo.update_calls == []
        assert repo.list_all() == before

    def test_not_found(self):
        repo, adapter = _setup()
        before = repo.list_all()

        assert isinstance(adapter.update_shoe("missing", {"price": 1}), NotFound)
        assert repo.list_all() == before

    def test_invalid_payload(self):
        repo, adapter = _setup()
        outcome = adapter.update_shoe("1", {"inStock": "no"})

        assert isinstance(outcome, ValidationFailed)
        assert repo.update_calls == []


class TestDeleteShoe:

    def test_deleted(self):
        repo, adapter = _setup()
        outcome = adapter.delete_shoe("1")

        assert outcome == Success({"message": "Shoe deleted successfully"})
        assert isinstance(adapter.get_shoe("1"), NotFound)
        assert len(repo) == 3

    def test_not_found(self):
        _, adapter = _setup()
        assert isinstance(adapter.delete_shoe("1x"), NotFound)


class TestDistinctValues:

    def test_brands(self):
        _, adapter = _setup()
        outcome = adapter.list_brands()

        assert outcome.payload == {
            "data": ["Nike", "Adidas", "Converse", "Dr. Martens"],
            "count": 4,
        }

    def test_categories(self):
        _, adapter = _setup()
        assert adapter.list_categories().payload["count"] == 3


class TestRender:

    @pytest.mark.parametrize("outcome,status_code,body", [
        (Success({"data": []}), 200, {"success": True, "data": []}),
        (Success({"message": "ok"}, status_code=201), 201, {"success": True, "message": "ok"}),
        (
            ValidationFailed([{"field": "price", "message": "bad", "type": "x"}]),
            400,
            {
                "success": False,
                "message": "Validation failed",
                "errors": [{"field": "price", "message": "bad", "type": "x"}],
            },
        ),
        (NotFound(), 404, {"success": False, "message": "Shoe not found"}),
        (Conflict("ID in URL and body must match"), 400,
         {"success": False, "message": "ID in URL and body must match"}),
        (InternalError(), 500, {"success": False, "message": "Internal server error"}),
    ])
    def test_envelopes(self, outcome, status_code, body):
        response = render(outcome)

        assert response.status_code == status_code
        assert json.loads(response.body) == body

    def test_unknown_outcome(self):
        with pytest.raises(TypeError):
            render("not an outcome")


class TestFormatErrors:

    def test_joins_location(self):
        errors = format_errors([
            {"loc": ("body", "price"), "msg": "Input should be a valid number", "type": "float_type", "input": "x"},
        ])
        assert errors == [
            {"field": "body.price", "message": "Input should be a valid number", "type": "float_type"},
        ]
