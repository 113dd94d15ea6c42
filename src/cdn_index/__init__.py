"""CDN Index - content key to archive location resolution and retrieval."""

from .core.cancellation import CancellationToken
from .core.config import CDNConfig, load_config
from .core.errors import (
    CDNIndexError,
    FormatError,
    NotFoundError,
    FetchError,
    CancelledError,
)
from .core.resolver import IndexResolver
from .core.types import ContentKey, IndexEntry, key_from_hex, key_to_hex
from .interfaces.progress import LoggingProgress, NullProgress, ProgressSink

__all__ = [
    "CDNConfig",
    "load_config",
    "CDNIndexError",
    "FormatError",
    "NotFoundError",
    "FetchError",
    "CancelledError",
    "CancellationToken",
    "IndexResolver",
    "ContentKey",
    "IndexEntry",
    "key_from_hex",
    "key_to_hex",
    "LoggingProgress",
    "NullProgress",
    "ProgressSink",
]
