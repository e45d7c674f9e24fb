"""Restaurant Enforcement — turns record validation errors into user-facing messages.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - describe_violations() keeps the order of the errors it is given
      (field order of the record model), one message per violated rule
    - A missing or null address reports every required address part
    - Unrecognized error shapes still produce a message (location + reason)

Design Decisions:
    - Field rules live on the Pydantic input model (schemas/restaurant.py);
      this module only owns the wording, so messages stay stable when
      Pydantic's own error texts change
    - Works on plain error dicts (ValidationError.errors()), not on the
      exception, so it can be tested without building a model
"""

from typing import Any, Sequence

from restaurant_api.core.domain_types import (
    MAX_NAME_LENGTH,
    MAX_RATING,
    MIN_RATING,
    Cuisine,
    PriceRange,
)

ADDRESS_REQUIRED = {
    "street": "Street address is required",
    "city": "City is required",
    "state": "State is required",
    "zipCode": "Zip code is required",
}

_BLANK_TYPES = ("missing", "string_too_short")


def describe_violations(errors: Sequence[dict]) -> list[str]:
    """One message per violated rule, without repeats."""
    messages: list[str] = []
    for error in errors:
        for message in _describe(error):
            if message not in messages:
                messages.append(message)
    return messages


def format_full_address(address: dict) -> str:
    return (
        f"{address['street']}, {address['city']}, "
        f"{address['state']} {address['zipCode']}"
    )


# --- Per-field wording --------------------------------------------------------

def _describe(error: dict) -> list[str]:
    loc = tuple(error.get("loc", ()))
    kind = error.get("type", "")
    value = error.get("input")
    blank = _is_blank(kind, value)

    if not loc:
        return ["Restaurant must be an object"]

    field = loc[0]
    if field == "address":
        return _describe_address(loc[1:], kind, value, blank)
    if field == "hours":
        if len(loc) == 1:
            return ["Hours must be an object keyed by weekday"]
        return [f"Hours for {loc[1]} must be a string"]

    if field == "name":
        if blank:
            return ["Restaurant name is required"]
        if kind == "string_too_long":
            return [
                f"Restaurant name cannot exceed {MAX_NAME_LENGTH} characters",
            ]
        return ["Restaurant name must be a string"]
    if field == "borough":
        return ["Borough must be a string"]
    if field == "cuisine":
        if blank:
            return ["Cuisine type is required"]
        return [
            f"Cuisine '{value}' is not supported. Allowed cuisines: "
            f"{', '.join(c.value for c in Cuisine)}",
        ]
    if field == "phone":
        if blank:
            return ["Phone number is required"]
        return ["Phone number must be in format (XXX) XXX-XXXX"]
    if field == "email":
        if blank:
            return ["Email is required"]
        return ["Please enter a valid email"]
    if field == "website":
        return ["Website must be a valid URL starting with http:// or https://"]
    if field == "rating":
        if kind == "greater_than_equal":
            return [f"Rating must be at least {MIN_RATING}"]
        if kind == "less_than_equal":
            return [f"Rating cannot exceed {MAX_RATING}"]
        return ["Rating must be a number"]
    if field == "priceRange":
        return [
            f"Price range '{value}' is not supported. Allowed values: "
            f"{', '.join(p.value for p in PriceRange)}",
        ]
    if field == "isActive":
        return ["isActive must be a boolean"]

    where = ".".join(str(part) for part in loc)
    return [f"{where}: {error.get('msg', 'is invalid')}"]


def _describe_address(
    loc: tuple, kind: str, value: Any, blank: bool,
) -> list[str]:
    if not loc:
        if kind == "missing" or value is None:
            return list(ADDRESS_REQUIRED.values())
        return ["Address must be an object"]
    part = loc[0]
    if part in ADDRESS_REQUIRED and blank:
        return [ADDRESS_REQUIRED[part]]
    return [f"Address {part} must be a string"]


def _is_blank(kind: str, value: Any) -> bool:
    # "missing" carries the parent object as input, so test the kind first
    if kind in _BLANK_TYPES or value is None:
        return True
    return isinstance(value, str) and not value.strip()
