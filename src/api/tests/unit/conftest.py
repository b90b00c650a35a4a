"""Unit test fixtures with mocked dependencies."""

import pytest

from infrastructure.settings import get_database_settings, get_settings


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per process; tests that patch env vars need fresh ones."""
    get_settings.cache_clear()
    get_database_settings.cache_clear()
    yield
    get_settings.cache_clear()
    get_database_settings.cache_clear()
