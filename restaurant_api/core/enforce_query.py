"""Query Enforcement — validates list query parameters and path ids.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Checks are fail-fast in a fixed order: unknown keys, page, perPage, borough
    - Only the first failing check is reported (raised as InvalidInputError)
    - A repeated query key is a non-scalar value and fails its grammar check

Design Decisions:
    - Raw multi-valued params in, normalized ListQuery out: the route never
      sees unvalidated strings (impureim sandwich, validation is the pure middle)
    - Digit-only grammar before int(): rejects signs, decimals, whitespace
    - Over-long digit strings are never handed to int(); they are simply
      above the limit, which keeps the conversion bounded
"""

import re
from typing import Mapping, NamedTuple, Sequence

from restaurant_api.core.domain_types import (
    ALLOWED_LIST_PARAMS,
    DEFAULT_PAGE,
    DEFAULT_PER_PAGE,
    MAX_BOROUGH_LENGTH,
    MAX_PAGE,
    MAX_PER_PAGE,
    RestaurantId,
)
from restaurant_api.core.errors import InvalidInputError

_DIGITS = re.compile(r"\d+", re.ASCII)
_BOROUGH_CHARS = re.compile(r"[A-Za-z\s\-']+", re.ASCII)
_RESTAURANT_ID = re.compile(r"[0-9a-fA-F]{24}")


class ListQuery(NamedTuple):
    """Normalized list parameters actually used for the query."""
    page: int
    per_page: int
    borough: str | None


def parse_list_query(params: Mapping[str, Sequence[str]]) -> ListQuery:
    """Validate raw query params (key -> all values) into a ListQuery."""
    check_unknown_params(params)
    page = parse_page(params.get("page"))
    per_page = parse_per_page(params.get("perPage"))
    borough = parse_borough(params.get("borough"))
    return ListQuery(page, per_page, borough)


def check_unknown_params(params: Mapping[str, Sequence[str]]) -> None:
    unknown = [key for key in params if key not in ALLOWED_LIST_PARAMS]
    if unknown:
        raise InvalidInputError(
            f"Invalid query parameters: {', '.join(unknown)}. "
            f"Allowed parameters: {', '.join(ALLOWED_LIST_PARAMS)}",
        )


def parse_page(values: Sequence[str] | None) -> int:
    if values is None:
        return DEFAULT_PAGE
    page = _parse_digits(
        values, MAX_PAGE, "Page parameter must be a positive integer",
    )
    if page < 1:
        raise InvalidInputError("Page parameter must be greater than 0")
    if page > MAX_PAGE:
        raise InvalidInputError(f"Page parameter cannot exceed {MAX_PAGE}")
    return page


def parse_per_page(values: Sequence[str] | None) -> int:
    if values is None:
        return DEFAULT_PER_PAGE
    per_page = _parse_digits(
        values, MAX_PER_PAGE, "perPage parameter must be a positive integer",
    )
    if per_page < 1:
        raise InvalidInputError("perPage parameter must be greater than 0")
    if per_page > MAX_PER_PAGE:
        raise InvalidInputError(
            f"perPage parameter cannot exceed {MAX_PER_PAGE} items",
        )
    return per_page


def parse_borough(values: Sequence[str] | None) -> str | None:
    """Trimmed borough filter, or None when the param is absent."""
    if values is None:
        return None
    if len(values) != 1:
        raise InvalidInputError("Borough parameter must be a string")
    borough = values[0].strip()
    if not borough:
        raise InvalidInputError("Borough parameter cannot be empty")
    if len(borough) > MAX_BOROUGH_LENGTH:
        raise InvalidInputError(
            f"Borough parameter cannot exceed {MAX_BOROUGH_LENGTH} characters",
        )
    if not _BOROUGH_CHARS.fullmatch(borough):
        raise InvalidInputError(
            "Borough parameter can only contain letters, spaces, "
            "hyphens, and apostrophes",
        )
    return borough


def is_valid_restaurant_id(value: str) -> bool:
    return bool(_RESTAURANT_ID.fullmatch(value))


def check_restaurant_id(value: str) -> RestaurantId:
    """Path-id pre-filter; storage lower-cases the key itself."""
    if not is_valid_restaurant_id(value):
        raise InvalidInputError("Invalid restaurant ID format")
    return RestaurantId(value)


def _parse_digits(values: Sequence[str], limit: int, message: str) -> int:
    """Digit string to int; anything wider than the limit comes back as limit + 1."""
    if len(values) != 1 or not _DIGITS.fullmatch(values[0]):
        raise InvalidInputError(message)
    digits = values[0].lstrip("0") or "0"
    if len(digits) > len(str(limit)):
        return limit + 1
    return int(digits)
