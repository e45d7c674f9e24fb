"""Sample Data Loader — inserts restaurants from a JSON file through the repository.

Usage:
    python -m restaurant_api.scripts.load_sample_data [--replace] [--file PATH]

Invariants:
    - Every record goes through the same validation as POST /api/restaurants
    - Default mode keeps existing rows; duplicates and invalid records
      (including array entries that are not objects) are skipped and logged
    - --replace deletes every existing restaurant first
    - Exit code 1 when the file is missing/unreadable or the database is unreachable
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from restaurant_api.config import get_settings
from restaurant_api.core.errors import (
    DuplicateError, RestaurantValidationError, StorageError,
)
from restaurant_api.db.session import create_session_factory
from restaurant_api.infrastructure.observability import setup_logging
from restaurant_api.services.restaurant_repository import SqlRestaurantRepository

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_FILE = Path(__file__).with_name("sample_data.json")


def read_sample_file(path: Path) -> list[dict]:
    with path.open(encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON array of restaurants")
    return data


async def load_sample_data(
    database_url: str, records: list[dict], replace: bool = False,
) -> dict:
    """Insert records; returns counts of inserted/skipped/removed rows."""
    engine, session_factory = create_session_factory(database_url)
    summary = {"inserted": 0, "skipped": 0, "removed": 0, "total": 0}
    try:
        async with session_factory() as session:
            repo = SqlRestaurantRepository(session)
            if replace:
                summary["removed"] = await repo.delete_all()
                logger.info(f"Cleared {summary['removed']} existing restaurants")

            for index, record in enumerate(records, start=1):
                try:
                    created = await repo.create(record)
                except (RestaurantValidationError, DuplicateError) as e:
                    summary["skipped"] += 1
                    logger.warning(f"Record {index} skipped: {e.message}")
                    continue
                summary["inserted"] += 1
                logger.info(
                    f"Record {index}: {created['name']} ({created['cuisine']})",
                    extra={"restaurant_id": created["id"]},
                )

            summary["total"] = await repo.count()
    finally:
        await engine.dispose()
    return summary


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Load sample restaurants into the database.",
    )
    parser.add_argument(
        "--file", type=Path, default=DEFAULT_SAMPLE_FILE,
        help="JSON array of restaurant records",
    )
    parser.add_argument(
        "--replace", action="store_true",
        help="delete all existing restaurants before inserting",
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging(settings.log_level, "text")

    try:
        records = read_sample_file(args.file)
    except (OSError, ValueError) as e:
        logger.error(f"Cannot read sample data: {e}")
        return 1

    mode = "replace" if args.replace else "keep existing"
    logger.info(f"Loading {len(records)} restaurants ({mode} mode)")
    try:
        summary = asyncio.run(
            load_sample_data(settings.database_url, records, args.replace),
        )
    except StorageError as e:
        logger.error(f"{e.message}: {e.detail}")
        return 1
    except OSError as e:
        logger.error(f"Cannot reach the database: {e}")
        return 1

    logger.info(
        f"Inserted {summary['inserted']}, skipped {summary['skipped']}. "
        f"Database now holds {summary['total']} restaurants.",
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
