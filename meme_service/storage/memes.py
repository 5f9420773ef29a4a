"""
Meme Store - the in-memory collection of meme records.

The store is the only shared mutable state in the service. Every
operation takes the same lock for exactly as long as it needs to touch
the records, and every record that leaves the store is a copy, so no
caller ever holds a reference into the backing collection.
"""

import logging
import threading
from typing import Iterable

from ..core.errors import MemeNotFoundError
from ..core.utils import get_timestamp
from ..models.schemas import MemeDraft, MemeRecord

# Configure logging
logger = logging.getLogger(__name__)


class MemeStore:
    """
    Lock-guarded collection of memes plus the next-id counter.

    A ``threading.Lock`` is used rather than an asyncio lock so the
    store is safe both from async route handlers and from code running
    in the threadpool. Critical sections never await or do I/O.
    """

    def __init__(self):
        """Create an empty, unseeded store."""
        self._lock = threading.Lock()
        # Insertion ordered; ranking relies on it as the tiebreaker
        self._memes: dict[int, MemeRecord] = {}
        self._next_id = 1
        self._seeded = False

    def seed(self, initial: Iterable[MemeRecord]) -> None:
        """
        Populate the store before the service accepts traffic.

        Sets the next id to one past the largest seeded id.

        Args:
            initial: Records with ids already assigned

        Raises:
            RuntimeError: If the store was already seeded or ids repeat
        """
        with self._lock:
            if self._seeded:
                raise RuntimeError("MemeStore.seed() may only be called once")

            for meme in initial:
                if meme.id in self._memes:
                    raise RuntimeError(f"Duplicate meme id {meme.id} in seed data")
                record = meme.model_copy(deep=True)
                if record.created_at is None:
                    record.created_at = get_timestamp()
                self._memes[record.id] = record

            self._next_id = max(self._memes, default=0) + 1
            self._seeded = True
            count = len(self._memes)

        logger.info(f"Seeded meme store with {count} memes")

    def append(self, draft: MemeDraft) -> MemeRecord:
        """
        Store a new meme with the next id and zeroed counters.

        Args:
            draft: The validated meme produced by ingestion

        Returns:
            A copy of the stored record
        """
        fields = draft.model_dump()
        with self._lock:
            meme_id = self._next_id
            self._next_id += 1
            record = MemeRecord(
                id=meme_id,
                likes=0,
                comment_count=0,
                created_at=get_timestamp(),
                **fields
            )
            self._memes[meme_id] = record
            return record.model_copy()

    def list(self) -> list[MemeRecord]:
        """Return a snapshot of every meme in insertion order."""
        with self._lock:
            return [meme.model_copy() for meme in self._memes.values()]

    def get(self, meme_id: int) -> MemeRecord:
        """
        Look up a single meme.

        Raises:
            MemeNotFoundError: If no meme has this id
        """
        with self._lock:
            meme = self._memes.get(meme_id)
            if meme is None:
                raise MemeNotFoundError(meme_id)
            return meme.model_copy()

    def increment_likes(self, meme_id: int) -> MemeRecord:
        """
        Add one like to a meme.

        Args:
            meme_id: Id of the meme to like

        Returns:
            A copy of the updated record

        Raises:
            MemeNotFoundError: If no meme has this id; the store is untouched
        """
        with self._lock:
            meme = self._memes.get(meme_id)
            if meme is None:
                raise MemeNotFoundError(meme_id)
            meme.likes += 1
            return meme.model_copy()

    def __len__(self) -> int:
        with self._lock:
            return len(self._memes)


# Global store instance for the application
meme_store = MemeStore()
