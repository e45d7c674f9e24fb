"""Envelope tests — success bodies and pagination hints.

Tests cover:
    - success_envelope includes message only when given
    - list_envelope pagination, filter echo, and the hasMore hint
    - Failure bodies from RestaurantApiError.to_response()
"""

from restaurant_api.core.enforce_query import ListQuery
from restaurant_api.core.envelope import list_envelope, success_envelope
from restaurant_api.core.errors import (
    DuplicateError, InvalidKeyError, NotFoundError, StorageError,
)


def test_success_envelope_without_message():
    assert success_envelope({"id": "x"}) == {"success": True, "data": {"id": "x"}}


def test_success_envelope_with_message():
    body = success_envelope({"id": "x"}, "Restaurant created successfully")
    assert body["message"] == "Restaurant created successfully"


def test_full_page_hints_more():
    body = list_envelope([{}, {}], ListQuery(page=1, per_page=2, borough=None))
    assert body["pagination"] == {
        "page": 1, "perPage": 2, "totalReturned": 2, "hasMore": True,
    }
    assert body["filter"] is None
    assert body["query"] == {"page": 1, "perPage": 2, "borough": None}


def test_short_page_has_no_more():
    body = list_envelope([{}], ListQuery(page=4, per_page=5, borough="Queens"))
    assert body["pagination"]["hasMore"] is False
    assert body["filter"] == {"borough": "Queens"}
    assert body["query"]["borough"] == "Queens"


def test_empty_page():
    body = list_envelope([], ListQuery(page=99, per_page=10, borough=None))
    assert body["data"] == []
    assert body["pagination"]["totalReturned"] == 0
    assert body["pagination"]["hasMore"] is False


def test_not_found_message_includes_id():
    error = NotFoundError("507f1f77bcf86cd799439011")
    assert error.http_status == 404
    assert error.to_response() == {
        "success": False,
        "message": "Restaurant with ID 507f1f77bcf86cd799439011 not found",
    }


def test_client_errors_are_400():
    assert InvalidKeyError("nope").http_status == 400
    assert DuplicateError().http_status == 400


def test_storage_detail_only_when_requested():
    error = StorageError("fetching restaurant", "connection reset")
    assert error.http_status == 500
    assert "error" not in error.to_response()
    assert error.to_response(include_detail=True)["error"] == "connection reset"
    assert error.message == "Internal server error while fetching restaurant"


def test_client_errors_never_carry_detail():
    assert "error" not in NotFoundError("abc").to_response(include_detail=True)
