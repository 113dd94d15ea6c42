"""Index file acquisition.

Obtains the raw bytes of one archive index from the local installation
(offline), the download cache, or the CDN.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import requests

from ..core.cancellation import CancellationToken
from ..core.config import CDNConfig
from ..core.errors import FetchError, NotFoundError
from .paths import cached_index_path, index_url, offline_index_path

logger = logging.getLogger(__name__)


class ArchiveAcquirer:
    """Fetch raw index bytes for archives named in the configuration.

    Args:
        config: CDN configuration (mode, paths, origin)
        session: HTTP session used for downloads
        token: Cancellation token polled before each archive and per chunk
        log: Logger used for diagnostics (defaults to the module logger)

    Invariants:
        - A cached index file is only ever created complete (temp-then-rename)
        - Cached files are trusted without a freshness check
    """

    def __init__(
        self,
        config: CDNConfig,
        session: requests.Session,
        token: CancellationToken | None = None,
        log: logging.Logger | None = None,
    ):
        self.config = config
        self._session = session
        self._token = token or CancellationToken()
        self._log = log or logger

    def obtain(self, archive_id: str) -> bytes:
        """Return the raw index bytes for archive_id.

        Raises:
            CancelledError: If cancellation is observed before or during a download
            NotFoundError: If the index is absent from the offline installation
            FetchError: On any network or local I/O failure
        """
        self._token.raise_if_cancelled()

        if not self.config.online:
            return self._read_offline(archive_id)

        path = cached_index_path(self.config.index_cache_dir, archive_id)
        if path.exists():
            self._log.debug(f"Using cached index {path}")
        else:
            self._download(archive_id, path)
        return self._read(path, archive_id)

    def _read_offline(self, archive_id: str) -> bytes:
        if not self.config.base_path:
            raise NotFoundError("Offline mode requires base_path")

        path = offline_index_path(self.config.base_path, archive_id)
        if not path.exists():
            raise NotFoundError(f"Index file not found: {path}")
        return self._read(path, archive_id)

    def _read(self, path: Path, archive_id: str) -> bytes:
        try:
            return path.read_bytes()
        except OSError as e:
            raise FetchError(f"Failed to read index {archive_id} from {path}: {e}") from e

    def _download(self, archive_id: str, path: Path) -> None:
        """Stream the index into the cache, polling for cancellation per chunk."""
        url = index_url(self.config.cdn_url, archive_id)
        tmp_path = path.with_name(path.name + ".part")
        self._log.debug(f"Downloading index {url}")

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with self._session.get(url, stream=True, timeout=self.config.timeout) as response:
                response.raise_for_status()
                with open(tmp_path, "wb") as f:
                    for chunk in response.iter_content(chunk_size=self.config.chunk_size):
                        self._token.raise_if_cancelled()
                        f.write(chunk)
            os.replace(tmp_path, path)
        except requests.RequestException as e:
            raise FetchError(f"Failed to download index {archive_id}: {e}") from e
        except OSError as e:
            raise FetchError(f"Failed to store index {archive_id} at {path}: {e}") from e
        finally:
            tmp_path.unlink(missing_ok=True)
