"""CLI command for creating the history store schema ahead of first use.

The API creates the table lazily on its first history request; this command
does it eagerly, e.g. as a deploy step.

Usage:
    python -m image_studio.cli.init_db [OPTIONS]

Examples:
    # Create tables and indexes in DATABASE_URL
    python -m image_studio.cli.init_db

    # Target another database
    python -m image_studio.cli.init_db --database-url sqlite+aiosqlite:///./history.db
"""

import asyncio
import sys
from argparse import ArgumentParser, Namespace
from typing import Optional, Sequence

import structlog

from image_studio.core.config import BaseAppSettings, configure_logging
from image_studio.core.database import create_db_engine, create_schema

logger = structlog.get_logger()


def parse_args(argv: Optional[Sequence[str]] = None) -> Namespace:
    """Parse command-line arguments."""
    parser = ArgumentParser(description="Create the history_items table and its index")

    parser.add_argument(
        "--database-url",
        help="SQLAlchemy async URL (default: DATABASE_URL from environment)",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging (DEBUG level)",
    )

    return parser.parse_args(argv)


async def async_main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point (async).

    Returns:
        Exit code: 0 (success), 1 (error)
    """
    args = parse_args(argv)

    settings = BaseAppSettings()
    if args.verbose:
        settings.log_level = "DEBUG"
    configure_logging(settings)

    db_url = args.database_url or settings.database_url
    if not db_url:
        logger.error("init_db.not_configured", reason="DATABASE_URL not set")
        return 1

    engine = create_db_engine(
        db_url, auth_token=settings.database_auth_token, pool_size=settings.db_pool_size
    )
    try:
        await create_schema(engine)
    except Exception as e:
        logger.error("init_db.failed", error=str(e), error_type=type(e).__name__)
        return 1
    finally:
        await engine.dispose()

    logger.info("init_db.completed", db_url=db_url.split("@")[-1])
    return 0


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Synchronous entry point for CLI."""
    sys.exit(asyncio.run(async_main(argv)))


if __name__ == "__main__":
    main()
