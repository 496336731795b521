from __future__ import annotations

import pytest

from opcstore.common.config import get_settings

SETTINGS_ENV = (
    "STORAGE_ENDPOINT",
    "STORAGE_ACCOUNT",
    "IDENTITY_DOMAIN",
    "AUTH_TOKEN",
    "MAX_RETRIES",
    "TIMEOUT_SECONDS",
    "USER_AGENT",
    "ENABLE_METRICS",
    "TRACE_HTTP",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Run every test without ambient settings or a local .env file."""
    for key in SETTINGS_ENV:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()  # type: ignore[attr-defined]
    yield
    get_settings.cache_clear()  # type: ignore[attr-defined]
