"""Restaurant Routes — CRUD endpoints, paged listing with borough filter.

Invariants:
    - Input is validated BEFORE any repository call: query params on list,
      path id on item routes, non-empty body on create/replace
    - Routes never build failure bodies; they raise RestaurantApiError and the
      global handlers map it (api/error_handlers.py)
    - DELETE is a hard delete answering 204 with no body;
      POST /{id}/deactivate is the soft-delete variant

Design Decisions:
    - Query params read raw from request.query_params: unknown keys must be
      rejected, which declared Query(...) parameters cannot see
    - Body taken as a raw object, not a RestaurantIn parameter: an empty body must
      answer "Request body is required ..." before any field rule runs; the
      repository then validates it through RestaurantIn (schemas.parse_restaurant)
"""

import logging

from fastapi import APIRouter, Body, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant_api.core.enforce_query import check_restaurant_id, parse_list_query
from restaurant_api.core.envelope import list_envelope, success_envelope
from restaurant_api.core.errors import InvalidInputError
from restaurant_api.core.repository_protocols import RestaurantRepository
from restaurant_api.infrastructure.database import get_db
from restaurant_api.services.restaurant_repository import SqlRestaurantRepository

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/restaurants", tags=["restaurants"])


def get_repository(db: AsyncSession = Depends(get_db)) -> RestaurantRepository:
    return SqlRestaurantRepository(db)


@router.get("")
async def list_restaurants(
    request: Request, repo: RestaurantRepository = Depends(get_repository),
):
    """Page through restaurants in id order, optionally filtered by borough."""
    params = {
        key: request.query_params.getlist(key)
        for key in request.query_params.keys()
    }
    query = parse_list_query(params)
    items = await repo.list_page(query.page, query.per_page, query.borough)
    logger.debug(
        f"Listed {len(items)} restaurants",
        extra={
            "page": query.page, "per_page": query.per_page,
            "borough": query.borough,
        },
    )
    return list_envelope(items, query)


@router.get("/{restaurant_id}")
async def get_restaurant(
    restaurant_id: str, repo: RestaurantRepository = Depends(get_repository),
):
    key = check_restaurant_id(restaurant_id)
    return success_envelope(await repo.get_by_key(key))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_restaurant(
    body: dict | None = Body(None),
    repo: RestaurantRepository = Depends(get_repository),
):
    """Create a restaurant from a full record."""
    _require_body(body, "create")
    restaurant = await repo.create(body)
    return success_envelope(restaurant, "Restaurant created successfully")


@router.put("/{restaurant_id}")
async def replace_restaurant(
    restaurant_id: str,
    body: dict | None = Body(None),
    repo: RestaurantRepository = Depends(get_repository),
):
    """Overwrite a restaurant with a full replacement record."""
    key = check_restaurant_id(restaurant_id)
    _require_body(body, "update")
    restaurant = await repo.replace_by_key(key, body)
    return success_envelope(restaurant, "Restaurant updated successfully")


@router.delete("/{restaurant_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_restaurant(
    restaurant_id: str, repo: RestaurantRepository = Depends(get_repository),
):
    key = check_restaurant_id(restaurant_id)
    await repo.delete_by_key(key)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{restaurant_id}/deactivate")
async def deactivate_restaurant(
    restaurant_id: str, repo: RestaurantRepository = Depends(get_repository),
):
    """Soft delete: the row stays, isActive becomes false."""
    key = check_restaurant_id(restaurant_id)
    restaurant = await repo.deactivate_by_key(key)
    return success_envelope(restaurant, "Restaurant deactivated successfully")


def _require_body(body: dict | None, action: str) -> None:
    if not body:
        raise InvalidInputError(
            f"Request body is required to {action} a restaurant",
        )
