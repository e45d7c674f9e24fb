"""Health & Index — liveness with database connectivity, plus the service index.

Invariants:
    - GET /health always returns 200 while the process is up
    - database connectivity is reported, never used to fail the health check
    - GET / lists the public endpoints
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, status

import restaurant_api.infrastructure.database as db_module

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])

SERVICE_NAME = "Restaurant Web API"
SERVICE_VERSION = "1.0.0"


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check():
    """Liveness check with a fresh database ping."""
    manager = db_module.db_manager
    connected = await manager.health_check() if manager else False
    return {
        "success": True,
        "message": "Server is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": "connected" if connected else "disconnected",
        "databaseConnected": connected,
    }


@router.get("/", status_code=status.HTTP_200_OK)
async def service_index():
    return {
        "success": True,
        "message": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "endpoints": {
            "restaurants": "/api/restaurants",
            "health": "/health",
        },
    }
