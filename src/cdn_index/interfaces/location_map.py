"""Protocol definition for the key to location map."""

from __future__ import annotations

from typing import Protocol

from ..core.types import ContentKey, IndexEntry


class KeyLocator(Protocol):
    """Read-side view of a content key index."""

    def lookup(self, key: ContentKey) -> IndexEntry | None:
        """Return the entry for key, or None if no index lists it."""
        ...

    def __len__(self) -> int:
        ...
