"""Pytest configuration and shared fixtures.

This module registers custom markers for CI job separation and provides
shared fixtures for the test suite.
"""

from __future__ import annotations

import threading
from datetime import date
from pathlib import Path

import pytest

from dailymirror.config import MirrorSettings
from dailymirror.core.exceptions import RemoteTransportError


TODAY = date(2024, 1, 4)
LISTING_URL = "https://listing.test/api/orderRecord"
LISTING_PREFIX = "cdn/records"
DOWNLOAD_BASE = "https://files.test/cdn/records"


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "core: Core models, ports, and services")
    config.addinivalue_line("markers", "remote: Remote HTTP adapter")
    config.addinivalue_line("markers", "state: Sync state persistence")
    config.addinivalue_line("markers", "progress: Rich progress integration")
    config.addinivalue_line("markers", "cli: CLI tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests")
    config.addinivalue_line(
        "markers", "tra: Test Responsibility Anchor (TRA) - namespace.Anchor format"
    )
    config.addinivalue_line(
        "markers",
        "tier: Test tier for CI job separation (0=instant, 1=fast, 2=standard, 3=slow, 4=manual)",
    )


class FakeRemote:
    """In-memory RemotePort serving paginated listings and file bodies.

    listings maps a listing path to its pages (lists of entry names); the
    cursor handed out for page N+1 is simply "N+1". Files absent from
    ``files`` are served with generated content; URLs in ``failures`` raise
    RemoteTransportError.
    """

    def __init__(self) -> None:
        self.listings: dict[str, list[list[str]]] = {}
        self.files: dict[str, bytes] = {}
        self.failures: set[str] = set()
        self.listing_failures: set[str] = set()
        self.json_calls: list[dict[str, str]] = []
        self.downloads: list[str] = []
        self._lock = threading.Lock()

    def set_partitions(self, dataset: str, *pages: list[str]) -> None:
        self.listings[f"{LISTING_PREFIX}/{dataset}/daily"] = list(pages)

    def set_files(self, dataset: str, partition: str, *pages: list[str]) -> None:
        self.listings[f"{LISTING_PREFIX}/{dataset}/daily/{partition}"] = list(pages)

    def listed_paths(self) -> list[str]:
        return [call["path"] for call in self.json_calls]

    def get_json(self, url: str, params: dict[str, str]) -> dict:
        path = params["path"]
        with self._lock:
            self.json_calls.append(dict(params))
        if path in self.listing_failures:
            raise RemoteTransportError(f"{url} returned HTTP 503", url=url)

        pages = self.listings.get(path) or [[]]
        index = int(params.get("nextMarker", "0"))
        more = index + 1 < len(pages)
        return {
            "code": "0",
            "data": {
                "recordFileList": [{"fileName": name} for name in pages[index]],
                "isTruncate": more,
                "nextMarker": str(index + 1) if more else "",
            },
        }

    def download(self, url: str, dest: Path) -> int:
        with self._lock:
            self.downloads.append(url)
        if url in self.failures:
            raise RemoteTransportError(f"{url} returned HTTP 500", url=url)
        body = self.files.get(url, f"content of {url}".encode())
        dest.write_bytes(body)
        return len(body)


@pytest.fixture
def fake_remote() -> FakeRemote:
    """Reusable in-memory remote for tests that must not touch the network."""
    return FakeRemote()


@pytest.fixture
def remote_factory() -> type[FakeRemote]:
    """The FakeRemote class, for tests that need several fresh remotes."""
    return FakeRemote


@pytest.fixture
def settings(tmp_path: Path) -> MirrorSettings:
    """Settings pointing at fake endpoints and a temporary mirror."""
    return MirrorSettings(
        listing_url=LISTING_URL,
        listing_prefix=LISTING_PREFIX,
        download_base_url=DOWNLOAD_BASE,
        page_size=2,
        concurrency=4,
        data_dir=tmp_path / "data",
        state_dir=tmp_path / "state",
    )


@pytest.fixture
def today() -> date:
    """Fixed 'today' for deterministic discovery."""
    return TODAY
