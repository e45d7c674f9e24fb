"""Restaurant ORM — persists the single restaurant entity.

Invariants:
    - id is a 24-char lowercase hex key generated on insert, never reused
    - (name, address_street, address_zip_code) is unique
    - address is flattened into address_* columns; hours is one JSON object
    - created_at is set once; updated_at moves on every overwrite

Design Decisions:
    - ObjectId-shaped keys (4-byte time, 5 random bytes, 3-byte counter):
      ascending id is a stable total order for pagination
    - Flattened address over JSON: borough filter is an indexed ILIKE on plain columns
"""

import itertools
import os
import time
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean, DateTime, Float, Index, JSON, String, Text, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from restaurant_api.db.base import Base

if TYPE_CHECKING:
    from restaurant_api.schemas.restaurant import RestaurantIn

_id_counter = itertools.count(int.from_bytes(os.urandom(3), "big"))
_process_token = os.urandom(5).hex()


def generate_restaurant_id() -> str:
    """New 24-hex key; later calls in a process sort after earlier ones."""
    timestamp = int(time.time()) & 0xFFFFFFFF
    counter = next(_id_counter) & 0xFFFFFF
    return f"{timestamp:08x}{_process_token}{counter:06x}"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Restaurant(Base):
    """Restaurant row — wire shape is produced by schemas/restaurant.py."""
    __tablename__ = "restaurants"
    __table_args__ = (
        UniqueConstraint(
            "name", "address_street", "address_zip_code",
            name="uq_restaurants_name_location",
        ),
        Index("ix_restaurants_borough", "borough"),
        Index("ix_restaurants_address_borough", "address_borough"),
    )

    id: Mapped[str] = mapped_column(
        String(24), primary_key=True, default=generate_restaurant_id,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    address_street: Mapped[str] = mapped_column(Text, nullable=False)
    address_city: Mapped[str] = mapped_column(Text, nullable=False)
    address_state: Mapped[str] = mapped_column(Text, nullable=False)
    address_zip_code: Mapped[str] = mapped_column(Text, nullable=False)
    address_borough: Mapped[str | None] = mapped_column(Text, nullable=True)
    borough: Mapped[str | None] = mapped_column(Text, nullable=True)
    cuisine: Mapped[str] = mapped_column(String(20), nullable=False)
    phone: Mapped[str] = mapped_column(String(14), nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False)
    website: Mapped[str | None] = mapped_column(Text, nullable=True)
    rating: Mapped[float] = mapped_column(Float, nullable=False, default=1)
    price_range: Mapped[str] = mapped_column(
        String(4), nullable=False, default="$$",
    )
    hours: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )

    def apply_restaurant(self, restaurant: "RestaurantIn") -> None:
        """Overwrite every caller-owned column from a validated record."""
        address = restaurant.address
        self.name = restaurant.name
        self.address_street = address.street
        self.address_city = address.city
        self.address_state = address.state
        self.address_zip_code = address.zip_code
        self.address_borough = address.borough
        self.borough = restaurant.borough
        self.cuisine = restaurant.cuisine.value
        self.phone = restaurant.phone
        self.email = restaurant.email
        self.website = restaurant.website
        self.rating = restaurant.rating
        self.price_range = restaurant.price_range.value
        self.hours = restaurant.hours.model_dump()
        self.is_active = restaurant.is_active
