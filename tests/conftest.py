"""
Pytest configuration and shared fixtures for storeupdate tests.

This module provides reusable fixtures and test utilities used across
the test suite.
"""

from __future__ import annotations

from pathlib import Path
import threading
from typing import Any

import pytest
import yaml

from storeupdate.core import set_default_checker
from storeupdate.logging import SilentLogger, set_global_logger
from storeupdate.lookup import FetchOutcome

APP_ID = "com.example.app"
LOOKUP_URL = f"https://itunes.apple.com/lookup?bundleId={APP_ID}"


class StubFetcher:
    """Fetcher double that returns a fixed outcome and records calls."""

    def __init__(self, outcome: FetchOutcome) -> None:
        self.outcome = outcome
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def fetch(self, lookup_url: str) -> FetchOutcome:
        with self._lock:
            self.calls.append(lookup_url)
        return self.outcome


class RecordingLogger:
    """Logger that keeps (level, prefix, message) tuples."""

    def __init__(self) -> None:
        self.records: list[tuple[str, str, str]] = []

    def warning(self, prefix: str, message: str) -> None:
        self.records.append(("warning", prefix, message))

    def verbose(self, prefix: str, message: str) -> None:
        self.records.append(("verbose", prefix, message))

    def debug(self, prefix: str, message: str) -> None:
        self.records.append(("debug", prefix, message))

    def messages(self, level: str) -> list[str]:
        return [m for lvl, _, m in self.records if lvl == level]


@pytest.fixture(autouse=True)
def _reset_globals():
    """Keep the global logger and default checker from leaking between tests."""
    yield
    set_global_logger(SilentLogger())
    set_default_checker(None)


@pytest.fixture
def tmp_test_dir(tmp_path: Path) -> Path:
    """
    Provide a temporary directory for test artifacts.

    Automatically cleaned up after test completion.
    """
    return tmp_path


@pytest.fixture
def lookup_url() -> str:
    """Lookup URL for the sample identifier with the default endpoint."""
    return LOOKUP_URL


@pytest.fixture
def catalog_payload():
    """
    Factory fixture for catalog lookup payloads.

    Usage:
        payload = catalog_payload("2.0.0")
        empty = catalog_payload()
    """

    def _payload(*versions: str) -> dict[str, Any]:
        return {
            "resultCount": len(versions),
            "results": [
                {
                    "bundleId": APP_ID,
                    "version": v,
                    "trackViewUrl": "https://apps.apple.com/app/id000000",
                }
                for v in versions
            ],
        }

    return _payload


@pytest.fixture
def stub_fetcher():
    """Factory fixture building a StubFetcher for a version and/or error."""

    def _make(version: str | None = None, error: Exception | None = None):
        return StubFetcher(FetchOutcome(version=version, error=error))

    return _make


@pytest.fixture
def recording_logger() -> RecordingLogger:
    """Provide a logger that records every message."""
    return RecordingLogger()


@pytest.fixture
def create_yaml_file(tmp_test_dir: Path):
    """
    Factory fixture for creating temporary YAML files.

    Usage:
        yaml_path = create_yaml_file("settings.yaml", {"key": "value"})
    """

    def _create(filename: str, data: Any) -> Path:
        path = tmp_test_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.dump(data, f)
        return path

    return _create
