"""Common type definitions for CDN index resolution.

Defines fundamental types used across all components.
"""

from __future__ import annotations

from dataclasses import dataclass

# Core primitive types
ContentKey = bytes
ArchiveId = str

KEY_SIZE = 16
ZERO_KEY: ContentKey = bytes(KEY_SIZE)


@dataclass(frozen=True)
class IndexEntry:
    """Location of one piece of content inside an archive.

    Attributes:
        archive_index: Position of the owning archive in the configured list
        size: Payload length in bytes
        offset: Byte offset of the payload within the archive
    """

    archive_index: int
    size: int
    offset: int

    @property
    def end(self) -> int:
        """Inclusive offset of the last payload byte."""
        return self.offset + self.size - 1


def key_to_hex(key: ContentKey) -> str:
    """Render a content key as lower-case hex."""
    if len(key) != KEY_SIZE:
        raise ValueError(f"Content key must be {KEY_SIZE} bytes, got {len(key)}")
    return bytes(key).hex()


def key_from_hex(text: str) -> ContentKey:
    """Parse a hex string (either case) into a content key."""
    key = bytes.fromhex(text.strip())
    if len(key) != KEY_SIZE:
        raise ValueError(f"Content key must be {KEY_SIZE} bytes, got {len(key)}")
    return key
