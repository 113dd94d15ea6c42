"""Index resolver - main public API.

Orchestrates index acquisition, parsing, lookup and both retrieval paths.
"""

from __future__ import annotations

import io
import logging
from typing import BinaryIO

import requests

from .cancellation import CancellationToken
from .config import CDNConfig
from .errors import CancelledError, CDNIndexError, FormatError, NotFoundError
from .types import ContentKey, IndexEntry, key_to_hex
from ..components.acquirer import ArchiveAcquirer
from ..components.direct_fetcher import DirectFetcher
from ..components.location_map import LocationMap
from ..components.parser import parse_index
from ..components.range_fetcher import RangeFetcher
from ..interfaces.location_map import KeyLocator
from ..interfaces.progress import NullProgress, ProgressSink

logger = logging.getLogger(__name__)


class IndexResolver:
    """Resolve content keys to archive byte ranges and read their content.

    Args:
        config: CDN configuration
        session: HTTP session (a private one is created and owned if omitted)
        progress: Receives initialization and download progress
        token: Cancellation token shared by every operation
        log: Logger used for diagnostics (defaults to the module logger)

    Public API:
        - initialize(config, ...): Build a resolver with every index loaded
        - lookup(key): Index entry for key, or None
        - open(key): Content stream, via the index or the direct fallback
        - open_indexed(key): Ranged read; NotFoundError if key is not indexed
        - open_direct(key): Whole blob fetched by its own key
        - fetch_config(key): Config blob fetched by its own key

    Invariants:
        - Archives are loaded sequentially in configured order
        - The first failure aborts loading; no partially loaded resolver is returned
        - The location map is frozen once loading completes
    """

    def __init__(
        self,
        config: CDNConfig,
        session: requests.Session | None = None,
        progress: ProgressSink | None = None,
        token: CancellationToken | None = None,
        log: logging.Logger | None = None,
    ):
        self.config = config
        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()
        self._progress = progress or NullProgress()
        self._token = token or CancellationToken()
        self._log = log or logger

        self._map = LocationMap(log=self._log)
        self._acquirer = ArchiveAcquirer(config, self._session, self._token, log=self._log)
        self._range_fetcher = RangeFetcher(config, self._session, log=self._log)
        self._direct_fetcher = DirectFetcher(
            config, self._session, self._progress, self._token, log=self._log
        )

    @classmethod
    def initialize(
        cls,
        config: CDNConfig,
        session: requests.Session | None = None,
        progress: ProgressSink | None = None,
        token: CancellationToken | None = None,
        log: logging.Logger | None = None,
    ) -> "IndexResolver":
        """Create a resolver and load every configured archive index."""
        resolver = cls(config, session=session, progress=progress, token=token, log=log)
        try:
            resolver.load()
        except BaseException:
            resolver.close()
            raise
        return resolver

    def load(self) -> None:
        """Acquire and parse every archive index into the location map.

        Raises:
            CancelledError: If cancellation is observed
            NotFoundError: If an offline index file is missing
            FormatError: If an index is malformed
            FetchError: On any network or I/O failure
        """
        self._token.raise_if_cancelled()
        self._progress.report(0, "Loading \"CDN indexes\"...")

        archives = self.config.archives
        mode = "online" if self.config.online else "offline"
        self._log.info(f"Loading {len(archives)} archive indexes ({mode})")

        try:
            for i, archive_id in enumerate(archives):
                data = self._acquirer.obtain(archive_id)
                try:
                    records = parse_index(data, i)
                except FormatError as e:
                    raise FormatError(f"Archive {archive_id}: {e}") from e

                self._map.insert_many(records)
                self._log.debug(f"Archive {archive_id}: {len(records)} entries")

                self._token.raise_if_cancelled()
                self._progress.report(int((i + 1) / len(archives) * 100))
        except CancelledError:
            self._log.info(f"Index loading cancelled after {len(self._map)} entries")
            raise
        except CDNIndexError as e:
            self._log.error(f"Index loading aborted: {e}")
            raise

        self._map.freeze()
        if self._map.duplicates:
            self._log.info(f"{self._map.duplicates} duplicate keys replaced earlier entries")
        self._log.info(f"Loaded {len(self._map)} indexes")

    @property
    def location_map(self) -> KeyLocator:
        return self._map

    def lookup(self, key: ContentKey) -> IndexEntry | None:
        """Return the index entry for key, or None if no archive lists it."""
        return self._map.lookup(key)

    def archive_id(self, entry: IndexEntry) -> str:
        return self.config.archives[entry.archive_index]

    def open_indexed(self, key: ContentKey) -> BinaryIO:
        """Ranged read of an indexed key.

        Raises:
            NotFoundError: If no archive index lists key
            FetchError: On any network failure
        """
        entry = self._map.lookup(key)
        if entry is None:
            raise NotFoundError(f"No index entry for {key_to_hex(key)}")
        return self._range_fetcher.fetch(entry, self.archive_id(entry))

    def open_direct(self, key: ContentKey) -> bytes:
        return self._direct_fetcher.fetch_by_key(key)

    def open(self, key: ContentKey) -> BinaryIO:
        """Stream content for key, falling back to a direct fetch on an index miss."""
        entry = self._map.lookup(key)
        if entry is not None:
            return self._range_fetcher.fetch(entry, self.archive_id(entry))
        return io.BytesIO(self._direct_fetcher.fetch_by_key(key))

    def fetch_config(self, key: ContentKey | str) -> bytes:
        return self._direct_fetcher.fetch_config(self.config.cdn_url, key)

    def __len__(self) -> int:
        return len(self._map)

    def close(self) -> None:
        """Release the HTTP session if this resolver created it."""
        if self._owns_session:
            self._session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
