"""Unit tests for CDN URL and path construction."""

from pathlib import Path

import pytest

from cdn_index.components.paths import (
    archive_url,
    cached_index_path,
    config_url,
    data_url,
    index_url,
    offline_index_path,
    shard,
)
from cdn_index.core.types import key_from_hex, key_to_hex

ARCHIVE = "abcdef0123456789abcdef0123456789"
CDN = "http://cdn.test/tpr/game"


def test_index_url_is_sharded():
    assert index_url(CDN, ARCHIVE) == f"{CDN}/data/ab/cd/{ARCHIVE}.index"


def test_archive_url():
    assert archive_url(CDN, ARCHIVE) == f"{CDN}/data/ab/cd/{ARCHIVE}"


def test_trailing_slash_is_ignored():
    assert index_url(CDN + "/", ARCHIVE) == f"{CDN}/data/ab/cd/{ARCHIVE}.index"


def test_data_url_uses_lower_case_hex():
    key = bytes.fromhex("ABCDEF00112233445566778899AABBCC")

    assert data_url(CDN, key) == f"{CDN}/data/ab/cd/abcdef00112233445566778899aabbcc"


def test_config_url_accepts_bytes_or_text():
    key_hex = "0f1e2d3c4b5a69788796a5b4c3d2e1f0"
    expected = f"{CDN}/config/0f/1e/{key_hex}"

    assert config_url(CDN, bytes.fromhex(key_hex)) == expected
    assert config_url(CDN, key_hex.upper()) == expected


def test_short_identifier_rejected():
    with pytest.raises(ValueError):
        shard("abc")


def test_local_paths():
    assert offline_index_path("/games/wow", ARCHIVE) == Path(
        "/games/wow/Data/indices", f"{ARCHIVE}.index"
    )
    assert cached_index_path("cache", ARCHIVE) == Path("cache", f"{ARCHIVE}.index")


def test_key_hex_round_trip_and_validation():
    key = bytes(range(16))

    assert key_to_hex(key) == "000102030405060708090a0b0c0d0e0f"
    assert key_from_hex("000102030405060708090A0B0C0D0E0F") == key
    with pytest.raises(ValueError):
        key_to_hex(b"\x00" * 15)
    with pytest.raises(ValueError):
        key_from_hex("00ff")
