"""Ranged reads against CDN archives."""

from __future__ import annotations

import io
import logging
from typing import BinaryIO

import requests

from ..core.config import CDNConfig
from ..core.errors import FetchError
from ..core.types import IndexEntry
from .paths import archive_url

logger = logging.getLogger(__name__)


class RangeFetcher:
    """Fetch one indexed payload with an HTTP byte-range request.

    Args:
        config: CDN configuration (origin, archive list, timeout)
        session: HTTP session used for requests
        log: Logger used for diagnostics (defaults to the module logger)

    Invariants:
        - The returned stream holds exactly entry.size bytes
        - The response is closed before fetch returns or raises
    """

    def __init__(
        self,
        config: CDNConfig,
        session: requests.Session,
        log: logging.Logger | None = None,
    ):
        self.config = config
        self._session = session
        self._log = log or logger

    def fetch(self, entry: IndexEntry, archive_id: str | None = None) -> BinaryIO:
        """Return a stream over exactly entry.size bytes of the archive.

        Raises:
            FetchError: On transport failure, an HTTP error status, or a
                response whose length does not match the requested range
        """
        if archive_id is None:
            try:
                archive_id = self.config.archives[entry.archive_index]
            except IndexError as e:
                raise FetchError(f"No archive configured at index {entry.archive_index}") from e

        if entry.size == 0:
            return io.BytesIO(b"")

        url = archive_url(self.config.cdn_url, archive_id)
        headers = {"Range": f"bytes={entry.offset}-{entry.end}"}
        self._log.debug(f"GET {url} {headers['Range']}")

        buffer = bytearray()
        try:
            with self._session.get(
                url, headers=headers, stream=True, timeout=self.config.timeout
            ) as response:
                response.raise_for_status()
                self._check_length_header(response, entry, archive_id)

                for chunk in response.iter_content(chunk_size=self.config.chunk_size):
                    buffer.extend(chunk)
                    # Stop early when the server ignored the range.
                    if len(buffer) > entry.size:
                        break
        except requests.RequestException as e:
            raise FetchError(f"Range fetch from archive {archive_id} failed: {e}") from e

        if len(buffer) != entry.size:
            raise FetchError(
                f"Range fetch from archive {archive_id} returned "
                f"{'more than ' if len(buffer) > entry.size else ''}{len(buffer)} bytes, "
                f"expected {entry.size}"
            )
        return io.BytesIO(bytes(buffer))

    def _check_length_header(
        self, response: requests.Response, entry: IndexEntry, archive_id: str
    ) -> None:
        length = response.headers.get("Content-Length")
        if length is None:
            return
        try:
            declared = int(length)
        except ValueError as e:
            raise FetchError(
                f"Range fetch from archive {archive_id} returned invalid Content-Length {length!r}"
            ) from e
        if declared != entry.size:
            raise FetchError(
                f"Range fetch from archive {archive_id} returned {declared} bytes, expected {entry.size}"
            )
