"""Cooperative cancellation token."""

from __future__ import annotations

import threading

from .errors import CancelledError


class CancellationToken:
    """Flag polled by long-running operations at discrete points.

    Safe to cancel from another thread. Operations already past their last
    poll point run to completion.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        """Raise CancelledError if cancellation has been requested."""
        if self._event.is_set():
            raise CancelledError("Operation cancelled")
