"""
Write acknowledgements returned by the feed repository.
"""

from dataclasses import dataclass
from typing import Any, Optional

from pymongo.results import BulkWriteResult, DeleteResult, InsertOneResult, UpdateResult


@dataclass(frozen=True)
class WriteResult:
    """
    Outcome of a write against the feeds collection.

    ok: the store acknowledged the write
    n: documents matched (update), inserted (save) or deleted (remove)
    n_modified: documents or embedded items actually changed
    """

    ok: bool
    n: int = 0
    n_modified: int = 0
    inserted_id: Optional[Any] = None

    @classmethod
    def from_insert(cls, result: InsertOneResult) -> "WriteResult":
        if not result.acknowledged:
            return cls(ok=False)
        return cls(ok=True, n=1, n_modified=1, inserted_id=result.inserted_id)

    @classmethod
    def from_update(cls, result: UpdateResult) -> "WriteResult":
        if not result.acknowledged:
            return cls(ok=False)
        return cls(ok=True, n=result.matched_count, n_modified=result.modified_count)

    @classmethod
    def from_bulk(cls, result: BulkWriteResult) -> "WriteResult":
        """
        Map a bulk of per-item updates against one document.

        matched_count counts once per operation, so it is folded back to the
        single target document.
        """
        if not result.acknowledged:
            return cls(ok=False)
        return cls(ok=True, n=1 if result.matched_count else 0, n_modified=result.modified_count)

    @classmethod
    def from_delete(cls, result: DeleteResult) -> "WriteResult":
        if not result.acknowledged:
            return cls(ok=False)
        return cls(ok=True, n=result.deleted_count, n_modified=result.deleted_count)

    @classmethod
    def no_op(cls) -> "WriteResult":
        """A successful write that never reached the store."""
        return cls(ok=True)
