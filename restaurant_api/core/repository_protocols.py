"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Records cross the boundary as plain dicts in wire shape (camelCase),
      so routes never touch ORM rows
"""

from typing import Protocol

from restaurant_api.core.domain_types import RestaurantId


class RestaurantRepository(Protocol):
    """Contract for restaurant persistence — implemented by shell.

    Write methods validate the full record before touching storage.
    Keyed methods raise InvalidKeyError for malformed ids and
    NotFoundError when no row matches.
    """
    async def create(self, record: dict) -> dict: ...
    async def list_page(
        self, page: int, per_page: int, borough: str | None = None,
    ) -> list[dict]: ...
    async def get_by_key(self, restaurant_id: RestaurantId) -> dict: ...
    async def replace_by_key(
        self, restaurant_id: RestaurantId, record: dict,
    ) -> dict: ...
    async def delete_by_key(self, restaurant_id: RestaurantId) -> None: ...
    async def deactivate_by_key(self, restaurant_id: RestaurantId) -> dict: ...
