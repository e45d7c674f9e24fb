"""Response Envelope — canonical success payloads for every restaurant endpoint.

Invariants:
    - Every success body carries success=True and data
    - List bodies add pagination, filter and query (the normalized params used)
    - hasMore is a hint: True only means the page came back full
    - Failure bodies are built by RestaurantApiError.to_response(), not here
"""

from typing import Any

from restaurant_api.core.enforce_query import ListQuery


def success_envelope(data: Any, message: str | None = None) -> dict:
    body: dict = {"success": True, "data": data}
    if message:
        body["message"] = message
    return body


def list_envelope(items: list[dict], query: ListQuery) -> dict:
    """List success body with pagination hints and the echoed query."""
    total_returned = len(items)
    return {
        "success": True,
        "data": items,
        "pagination": {
            "page": query.page,
            "perPage": query.per_page,
            "totalReturned": total_returned,
            "hasMore": total_returned == query.per_page,
        },
        "filter": {"borough": query.borough} if query.borough else None,
        "query": {
            "page": query.page,
            "perPage": query.per_page,
            "borough": query.borough,
        },
    }
