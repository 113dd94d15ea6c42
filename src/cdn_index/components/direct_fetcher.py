"""Direct downloads of content addressed by its own key."""

from __future__ import annotations

import logging

import requests

from ..core.cancellation import CancellationToken
from ..core.config import CDNConfig
from ..core.errors import FetchError
from ..core.types import ContentKey
from ..interfaces.progress import NullProgress, ProgressSink
from .paths import config_url, data_url

logger = logging.getLogger(__name__)


class DirectFetcher:
    """Download whole blobs from the CDN, bypassing the archive indices.

    Args:
        config: CDN configuration (origin, timeout, chunk size)
        session: HTTP session used for requests
        progress: Receives byte-level percentage updates
        token: Cancellation token polled before starting and per chunk
        log: Logger used for diagnostics (defaults to the module logger)
    """

    def __init__(
        self,
        config: CDNConfig,
        session: requests.Session,
        progress: ProgressSink | None = None,
        token: CancellationToken | None = None,
        log: logging.Logger | None = None,
    ):
        self.config = config
        self._session = session
        self._progress = progress or NullProgress()
        self._token = token or CancellationToken()
        self._log = log or logger

    def fetch_by_key(self, key: ContentKey) -> bytes:
        """Download the data blob named by key."""
        return self._download(data_url(self.config.cdn_url, key))

    def fetch_config(self, cdn_url: str, key: ContentKey | str) -> bytes:
        """Download the config blob named by key from cdn_url."""
        return self._download(config_url(cdn_url, key))

    def _download(self, url: str) -> bytes:
        """Buffer the full response body, reporting progress as bytes arrive.

        Raises:
            CancelledError: If cancellation is observed before or during the transfer
            FetchError: On transport failure or an HTTP error status
        """
        self._token.raise_if_cancelled()
        self._progress.report(0, "Downloading file...")
        self._log.debug(f"GET {url}")

        buffer = bytearray()
        try:
            with self._session.get(url, stream=True, timeout=self.config.timeout) as response:
                response.raise_for_status()
                length = response.headers.get("Content-Length") or ""
                # Unknown or invalid length disables byte-level progress.
                total = int(length) if length.isdigit() else 0
                last_percent = 0

                for chunk in response.iter_content(chunk_size=self.config.chunk_size):
                    self._token.raise_if_cancelled()
                    buffer.extend(chunk)
                    if total:
                        percent = min(100, len(buffer) * 100 // total)
                        if percent != last_percent:
                            self._progress.report(percent)
                            last_percent = percent
        except requests.RequestException as e:
            raise FetchError(f"Direct fetch of {url} failed: {e}") from e

        self._log.debug(f"Fetched {len(buffer)} bytes from {url}")
        return bytes(buffer)
