#!/usr/bin/env python3
"""
Unit tests for the Feed and FeedItem document mapping.
"""

import unittest
from datetime import datetime, timedelta, timezone

from bson import ObjectId

from feedstore.models import Feed, FeedItem

import sample_feeds


class TestFeedItem(unittest.TestCase):
    """Test FeedItem value semantics and document mapping."""

    def setUp(self):
        """Set up test data."""
        self.item = FeedItem(
            title="Test Article",
            link="https://example.com/article",
            description="This is a test article",
            pub_date=datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc),
            author="Test Author",
            guid="article-1",
            source="Example",
        )

    def test_equality_is_by_every_field(self):
        """Items are equal only when all fields match."""
        same = FeedItem(
            title="Test Article",
            link="https://example.com/article",
            description="This is a test article",
            pub_date=datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc),
            author="Test Author",
            guid="article-1",
            source="Example",
        )
        other_author = FeedItem(
            title="Test Article",
            link="https://example.com/article",
            description="This is a test article",
            pub_date=datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc),
            author="Someone Else",
            guid="article-1",
            source="Example",
        )

        self.assertEqual(self.item, same)
        self.assertEqual(hash(self.item), hash(same))
        self.assertNotEqual(self.item, other_author)

    def test_to_dict_writes_every_key_in_fixed_order(self):
        """Absent optionals are stored as None so equal items map to identical sub-documents."""
        data = FeedItem("title", "link", "description").to_dict()

        self.assertEqual(
            list(data.keys()),
            ["title", "link", "description", "pub_date", "author", "guid", "source"],
        )
        self.assertIsNone(data["pub_date"])
        self.assertIsNone(data["source"])

    def test_to_dict_converts_datetime_to_iso(self):
        """Test that pub_date is stored as an ISO string."""
        data = self.item.to_dict()
        self.assertEqual(data["pub_date"], "2024-01-01T12:00:00+00:00")

    def test_equal_instants_in_other_timezones_store_identically(self):
        """Items equal in Python must produce the same sub-document for $addToSet."""
        shifted = FeedItem(
            title="Test Article",
            link="https://example.com/article",
            description="This is a test article",
            pub_date=datetime(2024, 1, 1, 13, 0, tzinfo=timezone(timedelta(hours=1))),
            author="Test Author",
            guid="article-1",
            source="Example",
        )

        self.assertEqual(shifted, self.item)
        self.assertEqual(shifted.to_dict(), self.item.to_dict())
        self.assertEqual(shifted.to_dict()["pub_date"], "2024-01-01T12:00:00+00:00")
        self.assertEqual(FeedItem.from_dict(shifted.to_dict()), shifted)

    def test_naive_datetime_is_stored_unchanged(self):
        item = FeedItem("title", "link", "description", pub_date=datetime(2024, 1, 1, 12, 0))

        self.assertEqual(item.to_dict()["pub_date"], "2024-01-01T12:00:00")

    def test_from_dict_restores_equal_item(self):
        """Test that a stored item reads back equal to the original."""
        self.assertEqual(FeedItem.from_dict(self.item.to_dict()), self.item)

    def test_from_dict_handles_invalid_datetime(self):
        """Test that an unreadable pub_date becomes None."""
        data = self.item.to_dict()
        data["pub_date"] = "invalid-date"

        item = FeedItem.from_dict(data)
        self.assertIsNone(item.pub_date)
        self.assertEqual(item.title, "Test Article")

    def test_items_are_immutable(self):
        with self.assertRaises(AttributeError):
            self.item.title = "Changed"


class TestFeed(unittest.TestCase):
    """Test Feed document mapping."""

    def test_to_dict_omits_missing_id(self):
        """A feed without _id leaves the key out for the driver to fill."""
        data = sample_feeds.minimal_feed().to_dict()

        self.assertNotIn("_id", data)
        self.assertEqual(data["rss_url"], "https://quiet.example.org/rss")
        self.assertEqual(data["items"], [])

    def test_to_dict_includes_existing_id(self):
        feed = sample_feeds.minimal_feed()
        feed._id = ObjectId()

        self.assertEqual(feed.to_dict()["_id"], feed._id)

    def test_to_dict_embeds_items_in_order(self):
        feed = sample_feeds.ten_item_feed()
        data = feed.to_dict()

        self.assertEqual([item["title"] for item in data["items"]], [f"Item {n}" for n in range(10)])

    def test_from_dict_round_trip(self):
        """Test that all fields, items included, survive the mapping."""
        feed = sample_feeds.example_feed()
        feed._id = ObjectId()

        self.assertEqual(Feed.from_dict(feed.to_dict()), feed)

    def test_from_dict_without_items(self):
        """Test that a document missing items reads back as an empty list."""
        feed = Feed.from_dict({
            "_id": "feed-1",
            "title": "Test Feed",
            "link": "https://example.com",
            "rss_url": "https://example.com/feed.xml",
        })

        self.assertEqual(feed.items, [])
        self.assertIsNone(feed.description)
        self.assertEqual(feed._id, "feed-1")

    def test_feeds_with_different_titles_differ(self):
        feed = sample_feeds.example_feed()
        renamed = sample_feeds.example_feed()
        renamed.title = "Title changed!"

        self.assertNotEqual(feed, renamed)


if __name__ == "__main__":
    unittest.main()
