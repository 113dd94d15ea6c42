"""Integration tests for the cdn-index command line."""

from pathlib import Path

import pytest

from cdn_index.cli.main import main

ARCHIVE = "abcdef0123456789abcdef0123456789"
KEY_A = bytes(range(16))
KEY_B = bytes(range(16, 32))


@pytest.fixture
def offline_install(temp_dir, make_index):
    """Offline installation with one archive index and a matching config file."""
    indices = Path(temp_dir) / "Data" / "indices"
    indices.mkdir(parents=True)
    (indices / f"{ARCHIVE}.index").write_bytes(make_index([(KEY_A, 10, 100)]))

    config_path = Path(temp_dir) / "cdn.toml"
    config_path.write_text(
        'cdn_url = "http://cdn.test/tpr/game"\n'
        f'archives = ["{ARCHIVE}"]\n'
        "online = false\n"
        f'base_path = "{Path(temp_dir).as_posix()}"\n',
        encoding="utf-8",
    )
    return config_path


def test_lookup_hit(offline_install, capsys):
    assert main([str(offline_install), "lookup", KEY_A.hex()]) == 0

    out = capsys.readouterr().out
    assert f"archive={ARCHIVE} index=0 offset=100 size=10" in out


def test_lookup_miss(offline_install, capsys):
    assert main([str(offline_install), "lookup", KEY_B.hex()]) == 1
    assert "missing" in capsys.readouterr().out


def test_stats(offline_install, capsys):
    assert main([str(offline_install), "stats"]) == 0
    assert "archives=1 entries=1" in capsys.readouterr().out


def test_bad_key(offline_install, capsys):
    assert main([str(offline_install), "lookup", "xyz"]) == 2

    out = capsys.readouterr().out
    assert "Invalid key 'xyz'" in out
    assert "Error loading config" not in out


def test_missing_config(temp_dir, capsys):
    assert main([str(Path(temp_dir) / "absent.toml"), "stats"]) == 2
    assert "Error loading config" in capsys.readouterr().out


def test_missing_index_file(offline_install, capsys):
    (offline_install.parent / "Data" / "indices" / f"{ARCHIVE}.index").unlink()

    assert main([str(offline_install), "stats"]) == 3
    assert "Index file not found" in capsys.readouterr().out
