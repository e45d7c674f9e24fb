"""Restaurant Repository — SQLAlchemy implementation of the RestaurantRepository protocol.

Invariants:
    - Writes validate the FULL record (schemas.parse_restaurant) before any SQL runs
    - list_page orders by ascending id only; borough matches top-level OR
      address borough as a case-insensitive substring
    - delete_by_key is one DELETE statement; zero affected rows means NotFoundError,
      so the loser of two concurrent deletes sees a not-found, not a failure
    - Every SQLAlchemy failure leaves as DuplicateError (unique key) or StorageError

Design Decisions:
    - Session injected per request (FastAPI dependency), engine shared process-wide
    - Returns wire dicts, not ORM rows: routes stay free of persistence types
    - deactivate_by_key is the soft-delete variant (isActive=false); DELETE stays hard
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator

from sqlalchemy import delete, func, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_api.core.domain_types import RestaurantId
from restaurant_api.core.enforce_query import is_valid_restaurant_id
from restaurant_api.core.errors import (
    DuplicateError, InvalidKeyError, NotFoundError, StorageError,
)
from restaurant_api.models.restaurant import Restaurant
from restaurant_api.schemas.restaurant import parse_restaurant, to_wire

logger = logging.getLogger(__name__)


class SqlRestaurantRepository:
    """Restaurant persistence over one AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, record: dict) -> dict:
        """Validate and insert a new restaurant."""
        restaurant = parse_restaurant(record)
        row = Restaurant()
        row.apply_restaurant(restaurant)
        async with self._storage_errors("creating restaurant"):
            self.db.add(row)
            await self.db.commit()
        logger.info(
            f"Restaurant created: {row.name}",
            extra={"restaurant_id": row.id},
        )
        return to_wire(row)

    async def list_page(
        self, page: int, per_page: int, borough: str | None = None,
    ) -> list[dict]:
        """One page of restaurants in ascending id order."""
        query = select(Restaurant).order_by(Restaurant.id.asc())
        if borough:
            pattern = _contains_pattern(borough)
            query = query.where(or_(
                Restaurant.borough.ilike(pattern, escape="\\"),
                Restaurant.address_borough.ilike(pattern, escape="\\"),
            ))
        query = query.offset((page - 1) * per_page).limit(per_page)

        async with self._storage_errors("fetching restaurants"):
            result = await self.db.execute(query)
            rows = result.scalars().all()
        return [to_wire(row) for row in rows]

    async def get_by_key(self, restaurant_id: RestaurantId) -> dict:
        row = await self._get_row_or_raise(restaurant_id, "fetching restaurant")
        return to_wire(row)

    async def replace_by_key(
        self, restaurant_id: RestaurantId, record: dict,
    ) -> dict:
        """Overwrite every caller-owned field; absent optional fields reset to defaults."""
        key = _check_key(restaurant_id)
        restaurant = parse_restaurant(record)
        row = await self._get_row_or_raise(restaurant_id, "updating restaurant")
        row.apply_restaurant(restaurant)
        row.updated_at = datetime.now(timezone.utc)
        async with self._storage_errors("updating restaurant"):
            await self.db.commit()
        logger.info("Restaurant replaced", extra={"restaurant_id": key})
        return to_wire(row)

    async def delete_by_key(self, restaurant_id: RestaurantId) -> None:
        """Hard delete. No tombstone is kept."""
        key = _check_key(restaurant_id)
        async with self._storage_errors("deleting restaurant"):
            result = await self.db.execute(
                delete(Restaurant).where(Restaurant.id == key),
            )
            await self.db.commit()
        if result.rowcount == 0:
            raise NotFoundError(restaurant_id)
        logger.info("Restaurant deleted", extra={"restaurant_id": key})

    async def deactivate_by_key(self, restaurant_id: RestaurantId) -> dict:
        """Soft delete: keep the row, set isActive=false."""
        row = await self._get_row_or_raise(
            restaurant_id, "deactivating restaurant",
        )
        row.is_active = False
        row.updated_at = datetime.now(timezone.utc)
        async with self._storage_errors("deactivating restaurant"):
            await self.db.commit()
        logger.info("Restaurant deactivated", extra={"restaurant_id": row.id})
        return to_wire(row)

    async def delete_all(self) -> int:
        """Remove every restaurant. Used by the sample data loader."""
        async with self._storage_errors("clearing restaurants"):
            result = await self.db.execute(delete(Restaurant))
            await self.db.commit()
        return result.rowcount

    async def count(self) -> int:
        async with self._storage_errors("counting restaurants"):
            result = await self.db.execute(
                select(func.count()).select_from(Restaurant),
            )
        return result.scalar_one()

    async def _get_row_or_raise(
        self, restaurant_id: RestaurantId, operation: str,
    ) -> Restaurant:
        key = _check_key(restaurant_id)
        async with self._storage_errors(operation):
            row = await self.db.get(Restaurant, key)
        if row is None:
            raise NotFoundError(restaurant_id)
        return row

    @asynccontextmanager
    async def _storage_errors(self, operation: str) -> AsyncIterator[None]:
        """Map SQLAlchemy failures to domain errors, rolling back first."""
        try:
            yield
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"Unique constraint hit while {operation}: {e}")
            raise DuplicateError()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"Storage failure while {operation}: {e}",
                extra={"error_code": "STORAGE_ERROR"},
            )
            raise StorageError(operation, str(e))


def _check_key(restaurant_id: str) -> RestaurantId:
    if not isinstance(restaurant_id, str) or not is_valid_restaurant_id(restaurant_id):
        raise InvalidKeyError(str(restaurant_id))
    return RestaurantId(restaurant_id.lower())


def _contains_pattern(text: str) -> str:
    escaped = (
        text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    )
    return f"%{escaped}%"
