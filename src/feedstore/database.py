"""
MongoDB connection helpers for the feed store.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from pymongo import AsyncMongoClient
from pymongo.errors import PyMongoError

from feedstore.config import Config
from feedstore.feed_repository import FeedRepository

logger = logging.getLogger(__name__)


def create_client(config: Config) -> AsyncMongoClient:
    """Create an async MongoDB client from configuration."""
    return AsyncMongoClient(
        config.mongodb_connection_string,
        serverSelectionTimeoutMS=config.server_selection_timeout_ms,
    )


async def validate_connection(config: Config) -> bool:
    """
    Validate MongoDB connection and database access.

    Args:
        config: Configuration object with MongoDB settings

    Returns:
        bool: True if connection is valid
    """
    client = create_client(config)
    try:
        logger.info("Validating MongoDB connection...")

        await client.admin.command("ping")
        logger.info("MongoDB connection successful")

        db = client[config.mongodb_database]
        collections = await db.list_collection_names()
        logger.info(f"Database '{config.mongodb_database}' accessible")
        logger.info(f"  Found {len(collections)} existing collections: {collections}")
        return True

    except PyMongoError as e:
        logger.error(f"MongoDB connection failed: {e}")
        return False
    finally:
        await client.close()


@asynccontextmanager
async def open_repository(config: Config) -> AsyncIterator[FeedRepository]:
    """Yield a FeedRepository on a fresh client, closing the client on exit."""
    client = create_client(config)
    try:
        yield FeedRepository(client[config.mongodb_database], config.mongodb_collection)
    finally:
        await client.close()
