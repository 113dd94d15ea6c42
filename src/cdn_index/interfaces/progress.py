"""Protocol definition for progress reporting."""

from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class ProgressSink(Protocol):
    """Receives percentage-complete updates from long-running operations."""

    def report(self, percent: int, message: str | None = None) -> None:
        """Record progress in the range 0-100, with an optional status line."""
        ...


class NullProgress:
    """Progress sink that discards every update."""

    def report(self, percent: int, message: str | None = None) -> None:
        pass


class LoggingProgress:
    """Progress sink that writes updates to a logger."""

    def __init__(self, log: logging.Logger | None = None):
        self._log = log or logger

    def report(self, percent: int, message: str | None = None) -> None:
        if message:
            self._log.info(f"{percent:3d}% {message}")
        else:
            self._log.info(f"{percent:3d}%")
