#!/usr/bin/env python3
"""
Data Import Script
==================

Run one import pass from the command line and print the report.

Usage:
    python scripts/import_data.py
    python scripts/import_data.py --sample-only --seed 42
    python scripts/import_data.py --metrics-only

Version: 0.1.0
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from services.regulations_analyzer.errors import AnalyzerError
from services.regulations_analyzer.importer import build_importer
from shared.config import get_settings
from shared.database import DatabaseClient
from shared.logging import get_logger, setup_logging

setup_logging(log_level="INFO", json_logs=False, service_name="import-data")
logger = get_logger(__name__)


async def main(args: argparse.Namespace) -> int:
    """Main import function."""
    settings = get_settings()
    if args.sample_only:
        settings.importer.use_live_source = False
    if args.seed is not None:
        settings.importer.sample_seed = args.seed

    db = DatabaseClient(settings.database)
    try:
        await db.create_schema()
        importer = build_importer(db, settings)

        if args.metrics_only:
            scored = await importer.calculate_metrics()
            logger.info("metrics_refreshed", agencies=scored)
            return 0

        report = await importer.run()
    except AnalyzerError as e:
        logger.error("import_failed", error=str(e))
        return 1
    finally:
        await db.close()

    print(json.dumps(report.to_dict(), indent=2))
    return 1 if report.errors else 0


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Import federal regulations and refresh analysis metrics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--sample-only",
        action="store_true",
        help="Skip the live Federal Register source and use generated data",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the sample data generator",
    )
    parser.add_argument(
        "--metrics-only",
        action="store_true",
        help="Only recompute per-agency metrics from stored regulations",
    )

    return parser.parse_args()


if __name__ == "__main__":
    args = parse_args()
    exit_code = asyncio.run(main(args))
    sys.exit(exit_code)
