"""Restaurant Web API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map every outcome to the `{success, ...}` envelope
    - CORS configured from settings (not hardcoded)
    - The database must answer before the app accepts traffic: init_db runs in
      the lifespan and a failure aborts startup

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Engine disposed on shutdown so pooled connections close cleanly
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from restaurant_api.api.error_handlers import register_error_handlers
from restaurant_api.api.routes import health, restaurants
from restaurant_api.config import get_settings
from restaurant_api.infrastructure.database import close_db, init_db
from restaurant_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    logger.info("Initializing database connection")
    await init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Restaurant API started")
    yield
    logger.info("Restaurant API shutting down")
    await close_db()


app = FastAPI(
    title=health.SERVICE_NAME, version=health.SERVICE_VERSION,
    lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(restaurants.router)

register_error_handlers(app)


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "restaurant_api.main:app", host=settings.host, port=settings.port,
    )


if __name__ == "__main__":
    run()
