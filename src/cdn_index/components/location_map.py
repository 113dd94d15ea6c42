"""Content key to archive location map.

Built once during initialization, then frozen and read concurrently.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..core.types import ContentKey, IndexEntry

logger = logging.getLogger(__name__)


class LocationMap:
    """In-memory mapping from content key to index entry.

    Args:
        log: Logger used for diagnostics (defaults to the module logger)

    Invariants:
        - Keys compare by exact byte value
        - Inserting a key twice keeps the last entry (counted in ``duplicates``)
        - No mutation after freeze(); lookups need no locking
    """

    def __init__(self, log: logging.Logger | None = None):
        self._data: dict[ContentKey, IndexEntry] = {}
        self._log = log or logger
        self._frozen = False
        self.duplicates = 0

    def insert(self, key: ContentKey, entry: IndexEntry) -> None:
        """Add or replace the entry for key (write phase only)."""
        if self._frozen:
            raise RuntimeError("LocationMap is frozen")

        key = bytes(key)
        previous = self._data.get(key)
        if previous is not None:
            self.duplicates += 1
            self._log.debug(f"duplicate index entry for {key.hex()}: {previous} replaced by {entry}")
        self._data[key] = entry

    def insert_many(self, records: Iterable[tuple[ContentKey, IndexEntry]]) -> int:
        """Insert every record; return how many were processed."""
        count = 0
        for key, entry in records:
            self.insert(key, entry)
            count += 1
        return count

    def lookup(self, key: ContentKey) -> IndexEntry | None:
        """Return the entry for key, or None on a miss."""
        entry = self._data.get(bytes(key))
        if entry is None:
            self._log.debug(f"missing index: {bytes(key).hex()}")
        return entry

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __contains__(self, key: object) -> bool:
        return isinstance(key, (bytes, bytearray)) and bytes(key) in self._data

    def __len__(self) -> int:
        return len(self._data)
