"""Alembic environment — migrates the restaurants schema with the app's own settings.

The database URL comes from restaurant_api.config.Settings, so migrations,
the API and the sample data loader always target the same database
(DATABASE_URL or .env; postgresql:// is rewritten for asyncpg there).
alembic.ini's sqlalchemy.url is only a placeholder for offline SQL output
when no setting is available.

Design Decisions:
    - Online migrations run on an async engine with NullPool: one short-lived
      connection, nothing left open after `alembic upgrade`
    - restaurant_api.models is imported for its side effect of registering
      the restaurants table on Base.metadata (autogenerate needs it)
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context

from restaurant_api.config import get_settings
from restaurant_api.db.base import Base
import restaurant_api.models  # noqa: F401

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _database_url() -> str:
    return get_settings().database_url or config.get_main_option("sqlalchemy.url")


def run_migrations_offline() -> None:
    """Emit SQL to stdout instead of connecting."""
    context.configure(
        url=_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(connection=connection, target_metadata=target_metadata)
    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    configuration = config.get_section(config.config_ini_section, {})
    configuration["sqlalchemy.url"] = _database_url()
    connectable = async_engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)
    await connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_async_migrations())
