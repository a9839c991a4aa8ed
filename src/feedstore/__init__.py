"""
MongoDB persistence for RSS feeds and their items.
"""

from feedstore.config import Config
from feedstore.feed_repository import FeedRepository
from feedstore.models import Feed, FeedItem
from feedstore.results import WriteResult

__all__ = ["Config", "Feed", "FeedItem", "FeedRepository", "WriteResult"]
