"""Shared fixtures: index file builder and fake HTTP session."""

import io
import shutil
import struct
import tempfile

import pytest
import requests
from requests.structures import CaseInsensitiveDict


def build_index(records, pad_before=()):
    """Serialize (key, size, offset) records into the index file format.

    Records whose position is in pad_before are preceded by a zeroed key group.
    """
    body = bytearray()
    for i, (key, size, offset) in enumerate(records):
        if i in pad_before:
            body += bytes(16)
        body += key + struct.pack(">II", size, offset)
    footer = struct.pack("<I", len(records)) + bytes(8)
    return bytes(body + footer)


class FakeResponse:
    """Stand-in for requests.Response with a fixed body."""

    def __init__(self, body=b"", status_code=200, headers=None, content_length=True):
        self.body = body
        self.status_code = status_code
        self.headers = CaseInsensitiveDict(headers or {})
        if content_length and "Content-Length" not in self.headers:
            self.headers["Content-Length"] = str(len(body))
        self.raw = io.BytesIO(body)
        self.closed = False

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def iter_content(self, chunk_size=1):
        for i in range(0, len(self.body), chunk_size):
            yield self.body[i:i + chunk_size]

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class FakeSession:
    """Stand-in for requests.Session that serves canned responses by URL.

    Unknown URLs answer 404. A route may also be an exception instance, which
    is raised from get().
    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []
        self.closed = False

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        route = self.routes.get(url)
        if route is None:
            return FakeResponse(status_code=404)
        if isinstance(route, Exception):
            raise route
        if callable(route):
            return route(url, **kwargs)
        return route

    def close(self):
        self.closed = True


@pytest.fixture
def temp_dir():
    """Create temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield tmpdir
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def make_index():
    return build_index


@pytest.fixture
def make_response():
    return FakeResponse


@pytest.fixture
def make_session():
    return FakeSession
