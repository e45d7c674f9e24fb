"""Restaurant Schemas — Pydantic models for the camelCase record, in and out.

Invariants:
    - RestaurantIn is the only place field rules live; every write goes
      through parse_restaurant() before any SQL runs
    - Input strings are trimmed; blank optional strings become None
    - Defaults: rating 1, priceRange $$, isActive true, every hours day "Closed"
    - Unknown and storage-owned keys (id, createdAt, updatedAt) are ignored
    - fullAddress is derived, never stored
    - Timestamps serialize as ISO-8601 strings

Design Decisions:
    - alias_generator=to_camel: Python attributes stay snake_case, JSON stays camelCase
    - rating / isActive are strict: JSON true is not a rating, "yes" is not a boolean
    - Patterns are anchored and run on Pydantic's linear-time regex engine
    - ValidationError.errors() is reworded by core/enforce_restaurant so all
      violations reach the client as one "Validation error: ..." message
    - from_model() over from_attributes: the ORM row keeps the address flattened
"""

from datetime import datetime
from typing import Any

from pydantic import (
    BaseModel, ConfigDict, Field, ValidationError, computed_field,
    field_validator,
)
from pydantic.alias_generators import to_camel

from restaurant_api.core.domain_types import (
    DEFAULT_HOURS,
    DEFAULT_PRICE_RANGE,
    DEFAULT_RATING,
    MAX_NAME_LENGTH,
    MAX_RATING,
    MIN_RATING,
    Cuisine,
    PriceRange,
)
from restaurant_api.core.enforce_restaurant import (
    describe_violations, format_full_address,
)
from restaurant_api.core.errors import RestaurantValidationError
from restaurant_api.models.restaurant import Restaurant

_WORD = "[A-Za-z0-9_]+"
PHONE_PATTERN = r"^\([0-9]{3}\)\s[0-9]{3}-[0-9]{4}$"
EMAIL_PATTERN = (
    rf"^{_WORD}([.-]{_WORD})*@{_WORD}([.-]{_WORD})*\.[A-Za-z0-9_]{{2,3}}$"
)
WEBSITE_PATTERN = r"^https?://.+$"


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Input --------------------------------------------------------------------

class _InputModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, str_strip_whitespace=True, extra="ignore",
    )


def _blank_to_none(v: Any) -> Any:
    if isinstance(v, str) and not v.strip():
        return None
    return v


class AddressIn(_InputModel):
    street: str = Field(min_length=1)
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    zip_code: str = Field(min_length=1)
    borough: str | None = None

    @field_validator("borough", mode="before")
    @classmethod
    def blank_is_absent(cls, v: Any) -> Any:
        return _blank_to_none(v)


class HoursIn(_InputModel):
    """Opening hours per weekday; days not given are "Closed"."""
    monday: str = DEFAULT_HOURS
    tuesday: str = DEFAULT_HOURS
    wednesday: str = DEFAULT_HOURS
    thursday: str = DEFAULT_HOURS
    friday: str = DEFAULT_HOURS
    saturday: str = DEFAULT_HOURS
    sunday: str = DEFAULT_HOURS

    @field_validator("*", mode="before")
    @classmethod
    def null_day_is_closed(cls, v: Any) -> Any:
        return DEFAULT_HOURS if v is None else v


class RestaurantIn(_InputModel):
    """Full restaurant record for create and replace."""
    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    address: AddressIn
    borough: str | None = None
    cuisine: Cuisine
    phone: str = Field(pattern=PHONE_PATTERN)
    email: str = Field(pattern=EMAIL_PATTERN)
    website: str | None = Field(None, pattern=WEBSITE_PATTERN)
    rating: float = Field(
        DEFAULT_RATING, ge=MIN_RATING, le=MAX_RATING,
        strict=True, allow_inf_nan=False,
    )
    price_range: PriceRange = DEFAULT_PRICE_RANGE
    hours: HoursIn = Field(default_factory=HoursIn)
    is_active: bool = Field(True, strict=True)

    @field_validator("borough", "website", mode="before")
    @classmethod
    def blank_is_absent(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator("cuisine", mode="before")
    @classmethod
    def strip_cuisine(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("price_range", mode="before")
    @classmethod
    def default_price_range(cls, v: Any) -> Any:
        if v is None:
            return DEFAULT_PRICE_RANGE
        return v.strip() if isinstance(v, str) else v

    @field_validator("rating", mode="before")
    @classmethod
    def default_rating(cls, v: Any) -> Any:
        return DEFAULT_RATING if v is None else v

    @field_validator("hours", mode="before")
    @classmethod
    def default_hours(cls, v: Any) -> Any:
        return {} if v is None else v

    @field_validator("is_active", mode="before")
    @classmethod
    def default_is_active(cls, v: Any) -> Any:
        return True if v is None else v

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.lower()


def parse_restaurant(data: Any) -> RestaurantIn:
    """Validate a raw record. Raises RestaurantValidationError listing every violation."""
    try:
        return RestaurantIn.model_validate(data)
    except ValidationError as e:
        raise RestaurantValidationError(describe_violations(e.errors())) from None


# --- Output -------------------------------------------------------------------

class AddressOut(_WireModel):
    street: str
    city: str
    state: str
    zip_code: str
    borough: str | None = None


class HoursOut(_WireModel):
    monday: str
    tuesday: str
    wednesday: str
    thursday: str
    friday: str
    saturday: str
    sunday: str


class RestaurantOut(_WireModel):
    """Restaurant response — public-facing record."""
    id: str
    name: str
    address: AddressOut
    borough: str | None = None
    cuisine: str
    phone: str
    email: str
    website: str | None = None
    rating: float
    price_range: str
    hours: HoursOut
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @computed_field(alias="fullAddress")
    @property
    def full_address(self) -> str:
        return format_full_address(self.address.model_dump(by_alias=True))

    @classmethod
    def from_model(cls, row: Restaurant) -> "RestaurantOut":
        return cls(
            id=row.id,
            name=row.name,
            address=AddressOut(
                street=row.address_street,
                city=row.address_city,
                state=row.address_state,
                zip_code=row.address_zip_code,
                borough=row.address_borough,
            ),
            borough=row.borough,
            cuisine=row.cuisine,
            phone=row.phone,
            email=row.email,
            website=row.website,
            rating=row.rating,
            price_range=row.price_range,
            hours=HoursOut(**row.hours),
            is_active=row.is_active,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )


def to_wire(row: Restaurant) -> dict:
    """ORM row -> JSON-ready camelCase dict."""
    return RestaurantOut.from_model(row).model_dump(by_alias=True, mode="json")
