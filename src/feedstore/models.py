"""
Feed data transfer objects.
Represents the structure of documents stored in the MongoDB "feeds" collection,
where each feed embeds the list of its items.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bson.objectid import ObjectId


def _to_iso(value: Optional[datetime]) -> Optional[str]:
    """Serialize a datetime; aware values are written in UTC so equal instants match."""
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.isoformat()


@dataclass(frozen=True)
class FeedItem:
    """A single entry of a feed. Two items are the same only if every field matches."""

    title: str
    link: str
    description: str
    pub_date: Optional[datetime] = None
    author: Optional[str] = None
    guid: Optional[str] = None
    source: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to an embedded MongoDB document.

        Every key is always written, in declaration order, so that equal items
        produce identical sub-documents and $addToSet can match them.
        """
        return {
            "title": self.title,
            "link": self.link,
            "description": self.description,
            "pub_date": _to_iso(self.pub_date),
            "author": self.author,
            "guid": self.guid,
            "source": self.source,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FeedItem":
        """Create from an embedded MongoDB document."""
        pub_date = data.get("pub_date")
        if isinstance(pub_date, str):
            try:
                pub_date = datetime.fromisoformat(pub_date)
            except ValueError:
                pub_date = None

        return cls(
            title=data["title"],
            link=data["link"],
            description=data["description"],
            pub_date=pub_date,
            author=data.get("author"),
            guid=data.get("guid"),
            source=data.get("source"),
        )


@dataclass
class Feed:
    """Represents one subscribed feed and the items known for it."""

    title: str
    link: str
    rss_url: str
    description: Optional[str] = None
    items: List[FeedItem] = field(default_factory=list)

    # MongoDB identifier, set once when the feed is first saved
    _id: Optional[ObjectId] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for MongoDB storage."""
        data = {}
        # Leave _id out until it exists so the driver assigns one
        if self._id is not None:
            data["_id"] = self._id
        data.update({
            "title": self.title,
            "link": self.link,
            "rss_url": self.rss_url,
            "description": self.description,
            "items": [item.to_dict() for item in self.items],
        })
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Feed":
        """Create from dictionary from MongoDB."""
        return cls(
            _id=data.get("_id"),
            title=data["title"],
            link=data["link"],
            rss_url=data["rss_url"],
            description=data.get("description"),
            items=[FeedItem.from_dict(item) for item in data.get("items") or []],
        )
