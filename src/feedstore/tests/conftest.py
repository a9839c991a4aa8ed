"""Shared test fixtures for the feed store tests."""

import os

import pytest
import pytest_asyncio

from feedstore.config import Config
from feedstore.database import open_repository

import sample_feeds


@pytest.fixture
def test_config():
    """Configuration pointing at a throwaway database."""
    config = Config.from_env()
    config.mongodb_database = os.getenv("MONGODB_TEST_DATABASE", "rss_reader_test")
    return config


@pytest_asyncio.fixture
async def feed_repository(test_config):
    """Connect, wipe the feeds collection, run the test, then disconnect."""
    async with open_repository(test_config) as repository:
        await repository.drop()
        yield repository
        await repository.drop()


@pytest.fixture
def example_feed():
    return sample_feeds.example_feed()


@pytest.fixture
def minimal_feed():
    return sample_feeds.minimal_feed()


@pytest.fixture
def multiple_item_feed():
    return sample_feeds.multiple_item_feed()


@pytest.fixture
def ten_item_feed():
    return sample_feeds.ten_item_feed()
