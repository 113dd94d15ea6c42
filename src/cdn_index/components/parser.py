"""Binary index file parser.

Decodes one archive index into (key, entry) records.
"""

from __future__ import annotations

import io
import struct
from collections.abc import Iterator
from typing import BinaryIO

from ..core.errors import FormatError
from ..core.types import KEY_SIZE, ZERO_KEY, ContentKey, IndexEntry

# Record format: [key(16B)][size(4B, BE)][offset(4B, BE)]
# Footer (last 12 bytes): [count(4B, LE)][8 bytes not consumed here]

RECORD_SIZE = KEY_SIZE + 4 + 4
FOOTER_SIZE = 12

_COUNT = struct.Struct("<I")
_SIZE_OFFSET = struct.Struct(">II")


def _as_stream(data: bytes | bytearray | memoryview | BinaryIO) -> BinaryIO:
    if isinstance(data, (bytes, bytearray, memoryview)):
        return io.BytesIO(data)
    return data


def _read_exact(stream: BinaryIO, n: int, what: str) -> bytes:
    chunk = stream.read(n)
    if len(chunk) < n:
        raise FormatError(f"Truncated index: expected {n} bytes for {what}, got {len(chunk)}")
    return chunk


def iter_index(
    data: bytes | bytearray | memoryview | BinaryIO, archive_index: int
) -> Iterator[tuple[ContentKey, IndexEntry]]:
    """Yield records from an index blob.

    The count and structural pre-check happen before the first record is
    yielded.

    Raises:
        FormatError: If the footer is missing, the count cannot fit in the
            stream, a record is truncated, or two all-zero key groups follow
            each other.
    """
    stream = _as_stream(data)

    length = stream.seek(0, io.SEEK_END)
    if length < FOOTER_SIZE:
        raise FormatError(f"Index too short for footer: {length} bytes")

    stream.seek(length - FOOTER_SIZE)
    count = _COUNT.unpack(stream.read(_COUNT.size))[0]
    if count * RECORD_SIZE > length:
        raise FormatError(f"Record count {count} exceeds index length {length}")

    stream.seek(0)
    for _ in range(count):
        key = _read_exact(stream, KEY_SIZE, "key")

        # Zeroed key groups pad the record stream; the real key follows.
        if key == ZERO_KEY:
            key = _read_exact(stream, KEY_SIZE, "key")
        if key == ZERO_KEY:
            raise FormatError("Two consecutive zeroed key groups")

        size, offset = _SIZE_OFFSET.unpack(_read_exact(stream, _SIZE_OFFSET.size, "size/offset"))
        yield key, IndexEntry(archive_index=archive_index, size=size, offset=offset)


def parse_index(
    data: bytes | bytearray | memoryview | BinaryIO, archive_index: int
) -> list[tuple[ContentKey, IndexEntry]]:
    """Parse an entire index blob; nothing is returned unless every record parsed."""
    return list(iter_index(data, archive_index))
