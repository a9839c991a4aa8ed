"""
Feed repository.
Async data access for the MongoDB "feeds" collection: feed lookups by their
natural keys, whole-feed writes, and append/paginate over the embedded items.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterable, List, Optional

from opentelemetry import trace
from pymongo import UpdateOne
from pymongo.errors import PyMongoError

from feedstore.models import Feed, FeedItem
from feedstore.results import WriteResult

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

DEFAULT_COLLECTION = "feeds"

# Upper bound for an open-ended $slice window
MAX_SLICE = 2**31 - 1


class FeedRepository:
    """
    Stores feeds as documents with their items embedded.

    The repository holds no state of its own. Every method issues a single
    request to the collection; store errors are logged and re-raised.
    """

    def __init__(self, db, collection_name: str = DEFAULT_COLLECTION):
        self.db = db
        self.collection = db[collection_name]

    @contextmanager
    def _store_span(self, operation: str, **attributes):
        """Trace one store request and log any driver failure before it propagates."""
        with tracer.start_as_current_span(f"feeds.{operation}") as span:
            for key, value in attributes.items():
                span.set_attribute(key, str(value))
            try:
                yield span
            except PyMongoError as e:
                logger.error(f"Error in {operation}: {e}")
                raise

    # --- Lookups ---

    async def find_id(self, rss_url: str) -> Optional[Any]:
        """
        Resolve a feed's identifier from its RSS url without loading the document.

        Returns:
            The feed's _id, or None if no feed has that url
        """
        with self._store_span("find_id", rss_url=rss_url):
            doc = await self.collection.find_one({"rss_url": rss_url}, {"_id": 1})
        return doc["_id"] if doc else None

    async def find_by_url(self, rss_url: str) -> Optional[Feed]:
        return await self._find_one("find_by_url", {"rss_url": rss_url})

    async def find_by_title(self, title: str) -> Optional[Feed]:
        return await self._find_one("find_by_title", {"title": title})

    async def find_by_link(self, link: str) -> Optional[Feed]:
        return await self._find_one("find_by_link", {"link": link})

    async def find_by_id(self, feed_id: Any) -> Optional[Feed]:
        return await self._find_one("find_by_id", {"_id": feed_id})

    async def _find_one(self, operation: str, query: Dict[str, Any]) -> Optional[Feed]:
        """Return the first feed matching an equality query, or None."""
        with self._store_span(operation, **query) as span:
            doc = await self.collection.find_one(query)
            span.set_attribute("found", doc is not None)
        return Feed.from_dict(doc) if doc else None

    async def find_all(self) -> List[Feed]:
        """List every stored feed."""
        feeds = []
        with self._store_span("find_all") as span:
            async for doc in self.collection.find({}):
                feeds.append(Feed.from_dict(doc))
            span.set_attribute("returned_results", len(feeds))
        return feeds

    async def count(self) -> int:
        """Number of stored feeds."""
        with self._store_span("count"):
            return await self.collection.count_documents({})

    # --- Feed writes ---

    async def save(self, feed: Feed) -> WriteResult:
        """
        Insert a new feed document.

        A feed without an _id gets the one assigned by the driver. This is a
        plain insert: callers wanting insert-or-update should check find_id first.
        """
        with self._store_span("save", rss_url=feed.rss_url):
            result = await self.collection.insert_one(feed.to_dict())

        if feed._id is None:
            feed._id = result.inserted_id
        logger.debug(f"Saved feed {feed.rss_url} as {result.inserted_id}")
        return WriteResult.from_insert(result)

    async def update(self, feed: Feed) -> WriteResult:
        """
        Replace the whole stored feed matching feed._id, items included.

        Returns:
            WriteResult with n == 0 when no feed has that _id
        """
        if feed._id is None:
            logger.warning(f"Cannot update feed without an _id: {feed.rss_url}")
            return WriteResult.no_op()

        with self._store_span("update", feed_id=feed._id):
            result = await self.collection.replace_one({"_id": feed._id}, feed.to_dict())

        if result.matched_count == 0:
            logger.debug(f"No feed to update with _id {feed._id}")
        return WriteResult.from_update(result)

    async def remove_by_id(self, feed_id: Any) -> WriteResult:
        """Delete a feed. Deleting a missing feed is not an error."""
        with self._store_span("remove_by_id", feed_id=feed_id):
            result = await self.collection.delete_one({"_id": feed_id})
        return WriteResult.from_delete(result)

    async def drop(self) -> None:
        """Drop the whole collection. Meant for resets and tests."""
        with self._store_span("drop", collection=self.collection.name):
            await self.collection.drop()
        logger.info(f"Dropped collection {self.collection.name}")

    async def create_indexes(self) -> List[str]:
        """Create the lookup indexes; rss_url is unique."""
        with self._store_span("create_indexes"):
            return [
                await self.collection.create_index("rss_url", unique=True),
                await self.collection.create_index("title"),
                await self.collection.create_index("link"),
            ]

    # --- Embedded items ---

    async def insert_items(self, feed_id: Any, items: Iterable[FeedItem]) -> WriteResult:
        """
        Append items to a feed, skipping any already present.

        Each item is a separate $addToSet in one ordered bulk request, so the
        store decides presence atomically and n_modified is exactly the number
        of items appended. New items keep their input order after the existing ones.

        Args:
            feed_id: _id of the target feed
            items: Items to append

        Returns:
            WriteResult; n == 0 if the feed does not exist
        """
        requests = [
            UpdateOne({"_id": feed_id}, {"$addToSet": {"items": item.to_dict()}})
            for item in items
        ]
        if not requests:
            return WriteResult.no_op()

        with self._store_span("insert_items", feed_id=feed_id) as span:
            result = await self.collection.bulk_write(requests, ordered=True)
            span.set_attribute("items_added", result.modified_count)

        logger.debug(f"Added {result.modified_count} of {len(requests)} items to feed {feed_id}")
        return WriteResult.from_bulk(result)

    async def get_items(self, feed_id: Any, limit: Optional[int] = None, *, skip: int = 0) -> List[FeedItem]:
        """
        Read a window of a feed's items in stored order.

        Args:
            feed_id: _id of the feed
            limit: Maximum number of items; all remaining items when None
            skip: Number of leading items to pass over

        Returns:
            The items in [skip, skip + limit); empty if the feed has none or does not exist
        """
        if skip < 0:
            raise ValueError(f"skip must not be negative, got {skip}")
        if limit is not None and limit <= 0:
            raise ValueError(f"limit must be positive, got {limit}")

        if limit is None and skip == 0:
            projection = {"items": 1}
        elif skip == 0:
            projection = {"items": {"$slice": limit}}
        else:
            projection = {"items": {"$slice": [skip, limit if limit is not None else MAX_SLICE]}}

        with self._store_span("get_items", feed_id=feed_id, skip=skip, limit=limit) as span:
            doc = await self.collection.find_one({"_id": feed_id}, projection)
            items = [FeedItem.from_dict(item) for item in (doc or {}).get("items") or []]
            span.set_attribute("returned_results", len(items))
        return items
