#!/usr/bin/env python3
"""
Database Initialization Script
==============================

Create the regulations analyzer schema, optionally dropping it first, and
report the tables, columns and row counts found.

Usage:
    python scripts/init_database.py
    python scripts/init_database.py --drop
    python scripts/init_database.py --inspect

Version: 0.1.0
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import func, inspect, select
from sqlalchemy.exc import SQLAlchemyError

import services.regulations_analyzer.models  # noqa: F401  (registers tables)
from shared.config import get_settings
from shared.database import Base, DatabaseClient
from shared.logging import get_logger, setup_logging

setup_logging(log_level="INFO", json_logs=False, service_name="init-db")
logger = get_logger(__name__)


async def inspect_schema(db: DatabaseClient) -> None:
    """Log every table with its columns and row count."""

    def describe(sync_conn) -> dict[str, list[dict]]:  # type: ignore[no-untyped-def]
        inspector = inspect(sync_conn)
        return {name: inspector.get_columns(name) for name in inspector.get_table_names()}

    async with db.engine.connect() as conn:
        tables = await conn.run_sync(describe)

        for name, columns in sorted(tables.items()):
            table = Base.metadata.tables.get(name)
            rows = None
            if table is not None:
                rows = (await conn.execute(select(func.count()).select_from(table))).scalar_one()

            logger.info("table", name=name, rows=rows)
            for column in columns:
                logger.info(
                    "column",
                    table=name,
                    name=column["name"],
                    type=str(column["type"]),
                    nullable=column["nullable"],
                )


async def main(args: argparse.Namespace) -> int:
    """Main initialization function."""
    settings = get_settings()
    db = DatabaseClient(settings.database)

    logger.info("database_init_started", backend=db.engine.dialect.name)

    try:
        if args.drop:
            await db.drop_schema()
        await db.create_schema()

        if args.inspect:
            await inspect_schema(db)
    except SQLAlchemyError as e:
        logger.error("database_init_failed", error=str(e))
        return 1
    finally:
        await db.close()

    logger.info("database_init_completed")
    return 0


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Initialize the regulations analyzer database",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--drop",
        action="store_true",
        help="Drop all tables before creating them (destroys data)",
    )
    parser.add_argument(
        "--inspect",
        action="store_true",
        help="Log tables, columns and row counts after initialization",
    )

    return parser.parse_args()


if __name__ == "__main__":
    args = parse_args()
    exit_code = asyncio.run(main(args))
    sys.exit(exit_code)
