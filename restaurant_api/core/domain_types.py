"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - RestaurantId wraps a 24-char lowercase hex string — never a bare str in domain logic
    - Rating is bounded 1.0–5.0
    - All enumerated field values encoded as Enums — no raw string lists scattered around

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

RestaurantId = NewType("RestaurantId", str)


# ─── Value Types ─────────────────────────────────────────────────

Rating = NewType("Rating", float)   # 1.0–5.0


# ─── Enums ───────────────────────────────────────────────────────

class Cuisine(str, Enum):
    """Accepted cuisine types — maps to DB `cuisine` column."""
    ITALIAN = "Italian"
    CHINESE = "Chinese"
    MEXICAN = "Mexican"
    INDIAN = "Indian"
    AMERICAN = "American"
    FRENCH = "French"
    JAPANESE = "Japanese"
    THAI = "Thai"
    MEDITERRANEAN = "Mediterranean"
    OTHER = "Other"


class PriceRange(str, Enum):
    """Price tiers, cheapest first."""
    BUDGET = "$"
    MODERATE = "$$"
    EXPENSIVE = "$$$"
    LUXURY = "$$$$"


class Weekday(str, Enum):
    """The seven keys of the `hours` mapping, in calendar order."""
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"


# ─── Limits & Defaults ───────────────────────────────────────────

MAX_NAME_LENGTH = 100
MIN_RATING = 1
MAX_RATING = 5
DEFAULT_RATING = 1
DEFAULT_PRICE_RANGE = PriceRange.MODERATE
DEFAULT_HOURS = "Closed"

DEFAULT_PAGE = 1
MAX_PAGE = 10_000
DEFAULT_PER_PAGE = 10
MAX_PER_PAGE = 100
MAX_BOROUGH_LENGTH = 50

ALLOWED_LIST_PARAMS = ("page", "perPage", "borough")
