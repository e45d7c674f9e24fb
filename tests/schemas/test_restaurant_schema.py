"""Restaurant wire schema — ORM row to camelCase JSON.

Invariants:
    - Nested address is rebuilt from the flattened columns
    - fullAddress is derived from the address parts
    - Timestamps serialize as ISO-8601 strings
"""

from datetime import datetime, timezone

import pytest

from restaurant_api.models.restaurant import Restaurant, generate_restaurant_id
from restaurant_api.schemas.restaurant import parse_restaurant, to_wire


@pytest.fixture
def row():
    created = datetime(2024, 3, 1, 12, 30, tzinfo=timezone.utc)
    row = Restaurant(
        id="65e1c7a0a1b2c3d4e5f60718", created_at=created, updated_at=created,
    )
    row.apply_restaurant(parse_restaurant({
        "name": "Golden Lotus",
        "address": {
            "street": "88 Mott St", "city": "New York", "state": "NY",
            "zipCode": "10013", "borough": None,
        },
        "borough": "Manhattan",
        "cuisine": "Chinese",
        "phone": "(212) 555-0188",
        "email": "info@goldenlotus.com",
        "website": None,
        "rating": 4,
        "priceRange": "$",
        "hours": {day: "Closed" for day in (
            "monday", "tuesday", "wednesday", "thursday",
            "friday", "saturday", "sunday",
        )},
        "isActive": True,
    }))
    return row


def test_wire_keys_are_camel_case(row):
    wire = to_wire(row)
    assert set(wire) == {
        "id", "name", "address", "borough", "cuisine", "phone", "email",
        "website", "rating", "priceRange", "hours", "isActive",
        "createdAt", "updatedAt", "fullAddress",
    }
    assert wire["address"] == {
        "street": "88 Mott St", "city": "New York", "state": "NY",
        "zipCode": "10013", "borough": None,
    }


def test_full_address_derived(row):
    assert to_wire(row)["fullAddress"] == "88 Mott St, New York, NY 10013"


def test_timestamps_are_iso_strings(row):
    assert to_wire(row)["createdAt"].startswith("2024-03-01T12:30:00")


def test_generated_ids_are_24_hex_and_ascending():
    ids = [generate_restaurant_id() for _ in range(50)]
    assert all(len(i) == 24 and int(i, 16) >= 0 for i in ids)
    assert ids == sorted(ids)
