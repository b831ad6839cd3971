"""Pytest configuration for all tests."""

import pytest

from content_providers.config import reset_config_cache

_CONFIG_ENV = (
    "CONTENT_PROVIDERS_CONFIG_FILE",
    "CONTENT_PROVIDERS_ALLOW_LOSSY",
    "LESSONSCHURCH_API_BASE",
    "LESSONSCHURCH_TIMEOUT",
    "LESSONSCHURCH_EMBED_BASE",
    "CATALOG_CATALOG_FILE",
)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep every test independent of the developer's environment and .env file."""
    for name in _CONFIG_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "missing.env"))
    reset_config_cache()
    yield
    reset_config_cache()
