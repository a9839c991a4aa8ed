#!/usr/bin/env python3
"""
Feed Store Database Setup Script
Creates MongoDB indexes for the feeds collection.

Run this once during initial setup. It makes rss_url unique and indexes the
other lookup keys (title, link).

Usage:
    python -m feedstore.setup_indexes [--dry-run] [--verbose]

Environment Variables:
    MONGODB_CONNECTION_STRING - MongoDB connection string
    MONGODB_DATABASE - MongoDB database name
    MONGODB_COLLECTION - Feeds collection name (default: feeds)
"""

import argparse
import asyncio
import logging
import sys

from pymongo.errors import PyMongoError

from feedstore.config import Config
from feedstore.database import open_repository, validate_connection

logger = logging.getLogger(__name__)


async def create_feed_indexes(config: Config) -> bool:
    """
    Create the lookup indexes on the feeds collection.

    Args:
        config: Configuration object with MongoDB settings

    Returns:
        bool: True if indexes were created successfully
    """
    try:
        async with open_repository(config) as repository:
            logger.info(f"Creating indexes for {config.mongodb_collection} collection...")
            names = await repository.create_indexes()
            for name in names:
                logger.info(f"Created index {name}")
        return True

    except PyMongoError as e:
        logger.error(f"Error creating feed indexes: {e}")
        return False


async def main(argv=None) -> int:
    """Main function for feed database setup."""
    parser = argparse.ArgumentParser(
        description="Set up MongoDB indexes for the feed store",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Use environment variables (or a .env file)
    export MONGODB_CONNECTION_STRING="mongodb://localhost:27017"
    export MONGODB_DATABASE="rss_reader"
    python -m feedstore.setup_indexes

    # Only check configuration and connectivity
    python -m feedstore.setup_indexes --dry-run
        """
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate configuration and connection without creating indexes"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        logger.info("Feed Store Database Setup")
        logger.info("=" * 50)

        logger.info("Loading configuration from environment variables")
        config = Config.load()
        logger.info("Configuration is valid")

        if not await validate_connection(config):
            logger.error("MongoDB connection validation failed")
            return 1

        if args.dry_run:
            logger.info("Dry run completed successfully - configuration and connection are valid")
            return 0

        if await create_feed_indexes(config):
            logger.info("Feed store database setup completed successfully")
            return 0

        logger.error("Feed store database setup failed")
        return 1

    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        return 1


def cli() -> None:
    """Console script entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
