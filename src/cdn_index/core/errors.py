"""Exception hierarchy for CDN index resolution.

Defines all custom exceptions used throughout the implementation.
"""

from __future__ import annotations


class CDNIndexError(Exception):
    """Base exception for all CDN index errors."""
    pass


class FormatError(CDNIndexError):
    """Raised when an index file is structurally invalid."""
    pass


class NotFoundError(CDNIndexError):
    """Raised when a local index file or a required index entry is absent."""
    pass


class FetchError(CDNIndexError):
    """Raised when a network, HTTP or local I/O operation fails."""
    pass


class CancelledError(CDNIndexError):
    """Raised when an operation observes a cancellation request."""
    pass
