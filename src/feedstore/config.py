"""
Configuration management for the feed store.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
load_dotenv()


@dataclass
class Config:
    """Configuration class for feed store settings."""

    # MongoDB settings
    mongodb_connection_string: str
    mongodb_database: str
    mongodb_collection: str = "feeds"

    # Milliseconds the driver waits to find a usable server before failing
    server_selection_timeout_ms: int = 5000

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        return cls(
            mongodb_connection_string=os.getenv("MONGODB_CONNECTION_STRING", "mongodb://localhost:27017"),
            mongodb_database=os.getenv("MONGODB_DATABASE", "rss_reader"),
            mongodb_collection=os.getenv("MONGODB_COLLECTION", "feeds"),
            server_selection_timeout_ms=int(os.getenv("MONGODB_TIMEOUT_MS", "5000")),
        )

    @classmethod
    def load(cls) -> "Config":
        """Load configuration from the environment (.env values included) and validate it."""
        config = cls.from_env()
        config.validate()
        return config

    def to_dict(self) -> dict:
        """Convert configuration to dictionary."""
        return {
            "mongodb_connection_string": self.mongodb_connection_string,
            "mongodb_database": self.mongodb_database,
            "mongodb_collection": self.mongodb_collection,
            "server_selection_timeout_ms": self.server_selection_timeout_ms,
        }

    def validate(self) -> bool:
        """Validate configuration settings."""
        if not self.mongodb_connection_string:
            raise ValueError("MongoDB connection string is required. Set MONGODB_CONNECTION_STRING environment variable.")

        if not self.mongodb_database:
            raise ValueError("MongoDB database name is required. Set MONGODB_DATABASE environment variable.")

        if not self.mongodb_collection:
            raise ValueError("MongoDB collection name is required. Set MONGODB_COLLECTION environment variable.")

        if self.server_selection_timeout_ms <= 0:
            raise ValueError("MongoDB timeout must be positive. Check MONGODB_TIMEOUT_MS environment variable.")

        return True
