"""CDN URL and local path construction.

Identifiers are sharded into a two-level directory path built from their
first two pairs of hex characters: ``abcdef...`` -> ``ab/cd/abcdef...``.
"""

from __future__ import annotations

from pathlib import Path

from ..core.types import ContentKey, key_to_hex


def shard(identifier: str) -> str:
    """Return ``id[0:2]/id[2:4]/id``."""
    if len(identifier) < 4:
        raise ValueError(f"Identifier too short to shard: {identifier!r}")
    return f"{identifier[0:2]}/{identifier[2:4]}/{identifier}"


def index_url(cdn_url: str, archive_id: str) -> str:
    return f"{cdn_url.rstrip('/')}/data/{shard(archive_id)}.index"


def archive_url(cdn_url: str, archive_id: str) -> str:
    return f"{cdn_url.rstrip('/')}/data/{shard(archive_id)}"


def data_url(cdn_url: str, key: ContentKey) -> str:
    return f"{cdn_url.rstrip('/')}/data/{shard(key_to_hex(key))}"


def config_url(cdn_url: str, key: ContentKey | str) -> str:
    """URL of a config blob; key may be raw bytes or hex text."""
    key_hex = key_to_hex(key) if isinstance(key, (bytes, bytearray)) else key.lower()
    return f"{cdn_url.rstrip('/')}/config/{shard(key_hex)}"


def offline_index_path(base_path: str | Path, archive_id: str) -> Path:
    return Path(base_path) / "Data" / "indices" / f"{archive_id}.index"


def cached_index_path(cache_dir: str | Path, archive_id: str) -> Path:
    return Path(cache_dir) / f"{archive_id}.index"
