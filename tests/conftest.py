"""Root conftest — shared test configuration, async DB, FastAPI test client.

Invariants:
    - Settings never point at a real database (env set before app import)
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB
    - db_manager patched so /health sees the test engine

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features are not exercised here)
"""

import copy
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)

from restaurant_api.config import get_settings  # noqa: E402
from restaurant_api.db.base import Base  # noqa: E402
from restaurant_api.infrastructure.database import (  # noqa: E402
    DatabaseSessionManager, get_db,
)
import restaurant_api.infrastructure.database as db_module  # noqa: E402
import restaurant_api.models  # noqa: E402,F401
from restaurant_api.main import app  # noqa: E402


VALID_RESTAURANT = {
    "name": "Trattoria Lucca",
    "address": {
        "street": "142 Mulberry St",
        "city": "New York",
        "state": "NY",
        "zipCode": "10013",
        "borough": "Manhattan",
    },
    "borough": "Manhattan",
    "cuisine": "Italian",
    "phone": "(212) 555-0142",
    "email": "hello@trattorialucca.com",
    "website": "https://trattorialucca.com",
    "rating": 4.5,
    "priceRange": "$$$",
    "hours": {
        "monday": "Closed",
        "tuesday": "12:00-22:00",
        "wednesday": "12:00-22:00",
        "thursday": "12:00-22:00",
        "friday": "12:00-23:00",
        "saturday": "11:00-23:00",
        "sunday": "11:00-21:00",
    },
    "isActive": True,
}


def make_restaurant(**overrides) -> dict:
    """Deep copy of a valid record with top-level fields overridden."""
    record = copy.deepcopy(VALID_RESTAURANT)
    record.update(overrides)
    return record


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    fake_manager._connected = True
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def development_mode(monkeypatch):
    """Switch settings to development so failure bodies carry `error`."""
    monkeypatch.setenv("ENVIRONMENT", "development")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def restaurant_payload():
    """Factory for valid restaurant records: restaurant_payload(name=...)."""
    return make_restaurant
