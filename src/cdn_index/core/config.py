"""Configuration for CDN index resolution.

Defines the archive list, CDN origin and local paths consumed by the resolver.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass
class CDNConfig:
    """Configuration parameters for index acquisition and retrieval.

    Attributes:
        archives: Ordered archive ids; position defines the archive index
        cdn_url: Base URL of the content-delivery origin
        online: Download indices from the CDN (False reads base_path only)
        base_path: Local installation root used in offline mode
        cache_dir: Directory for downloaded indices (default data/<build>/indices)
        build: Build identifier used to derive the default cache directory
        timeout: Per-request timeout in seconds
        chunk_size: Streaming chunk size for downloads
    """

    archives: list[str] = field(default_factory=list)
    cdn_url: str = ""
    online: bool = True
    base_path: str | None = None
    cache_dir: str | None = None
    build: str = "unknown"
    timeout: float = 30.0
    chunk_size: int = 64 * 1024  # 64 KB

    def __post_init__(self) -> None:
        self.cdn_url = self.cdn_url.rstrip("/")

    @property
    def index_cache_dir(self) -> Path:
        """Directory holding downloaded index files."""
        if self.cache_dir:
            return Path(self.cache_dir)
        return Path("data") / self.build / "indices"

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "CDNConfig":
        cdn_url = d.get("cdn_url")
        if not cdn_url:
            raise ValueError("Missing required field: cdn_url")

        online = bool(d.get("online", True))
        base_path = d.get("base_path")
        if not online and not base_path:
            raise ValueError("Offline mode requires base_path")

        return CDNConfig(
            archives=list(d.get("archives", []) or []),
            cdn_url=cdn_url,
            online=online,
            base_path=base_path,
            cache_dir=d.get("cache_dir"),
            build=str(d.get("build", "unknown")),
            timeout=float(d.get("timeout", 30.0)),
            chunk_size=int(d.get("chunk_size", 64 * 1024)),
        )


def load_config(path: Path) -> CDNConfig:
    """Load a CDNConfig from a TOML file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    data = tomllib.loads(path.read_text(encoding="utf-8"))
    return CDNConfig.from_dict(data)
