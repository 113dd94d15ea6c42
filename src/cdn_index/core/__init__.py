"""CDN index core package."""

from .cancellation import CancellationToken
from .resolver import IndexResolver

__all__ = ["IndexResolver", "CancellationToken"]
