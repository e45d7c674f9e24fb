"""Database Session Manager — async connection pool, startup check and connection state.

Invariants:
    - One manager (one engine, one pool) per process, created by init_db on startup
    - init_db blocks until SELECT 1 succeeds; on failure it disposes the engine,
      raises, and the app never starts
    - Connection state lives on the manager and is read via is_connected()
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Unmapped SQLAlchemy exceptions leave a session as StorageError

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
      (no global import side effects)
    - expire_on_commit=False: rows stay readable after commit in async context
    - Pool sizing only applies to server databases; SQLite picks its own pool
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from restaurant_api.core.errors import StorageError

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        engine_options: dict = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            engine_options.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_options)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        self._connected = False

    async def connect(self) -> None:
        """Verify the database answers. Raises StorageError if it does not."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            self._connected = False
            logger.error(f"Database connection failed: {e}")
            raise StorageError("connecting to the database", str(e))
        self._connected = True
        logger.info("Database connection established")

    def is_connected(self) -> bool:
        return self._connected

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error: {e}")
            raise StorageError("accessing the database", str(e))
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Re-check connectivity and record the result (for /health)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            self._connected = True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            self._connected = False
        return self._connected

    async def dispose(self) -> None:
        await self.engine.dispose()
        self._connected = False
        logger.info("Database connection closed")


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


async def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    """Create the process-wide manager and wait for the database to answer."""
    global db_manager
    manager = DatabaseSessionManager(database_url, **kwargs)
    try:
        await manager.connect()
    except StorageError:
        await manager.dispose()
        raise
    db_manager = manager
    return manager


async def close_db() -> None:
    global db_manager
    if db_manager is not None:
        await db_manager.dispose()
        db_manager = None


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
