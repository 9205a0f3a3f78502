"""Shared pytest fixtures for the museum tracker test suite."""

from pathlib import Path

import pytest

from museum_tracker import config
from museum_tracker.cache import CacheClient


@pytest.fixture(autouse=True)
def _reset_settings():
    yield
    config._settings = None


@pytest.fixture
def cache_client(tmp_path: Path) -> CacheClient:
    return CacheClient(tmp_path / "test_cache")
