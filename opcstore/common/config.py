from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

ENV_FILE = Path(".env")

DEFAULT_USER_AGENT = "opcstore/0.1.0"


def _load_env_file() -> None:
    if not ENV_FILE.exists():
        return
    for raw_line in ENV_FILE.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key and key not in os.environ:
            os.environ[key] = value


def _as_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.lower() in {"1", "true", "t", "yes", "y", "on"}


def _as_optional(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass
class Settings:
    STORAGE_ENDPOINT: str = "http://localhost:8080/v1"
    STORAGE_ACCOUNT: str | None = None
    IDENTITY_DOMAIN: str | None = None
    AUTH_TOKEN: str | None = None
    MAX_RETRIES: int = 1
    TIMEOUT_SECONDS: float = 30.0
    USER_AGENT: str = DEFAULT_USER_AGENT
    ENABLE_METRICS: bool = True
    TRACE_HTTP: bool = False
    LOG_LEVEL: str = "INFO"

    def __post_init__(self) -> None:
        scheme = self.STORAGE_ENDPOINT.split(":", 1)[0].lower()
        if scheme not in {"http", "https"}:
            raise ValueError(
                "STORAGE_ENDPOINT must be an http(s) URL (https://host/v1)."
            )
        if self.MAX_RETRIES < 0:
            raise ValueError("MAX_RETRIES must not be negative.")

    @property
    def account(self) -> str | None:
        """Account path segment that prefixes every object path."""
        if self.STORAGE_ACCOUNT:
            return self.STORAGE_ACCOUNT
        if self.IDENTITY_DOMAIN:
            return f"Storage-{self.IDENTITY_DOMAIN}"
        return None

    @classmethod
    def from_environment(cls) -> "Settings":
        _load_env_file()
        return cls(
            STORAGE_ENDPOINT=os.environ.get("STORAGE_ENDPOINT", cls.STORAGE_ENDPOINT),
            STORAGE_ACCOUNT=_as_optional(os.environ.get("STORAGE_ACCOUNT")),
            IDENTITY_DOMAIN=_as_optional(os.environ.get("IDENTITY_DOMAIN")),
            AUTH_TOKEN=_as_optional(os.environ.get("AUTH_TOKEN")),
            MAX_RETRIES=int(os.environ.get("MAX_RETRIES", cls.MAX_RETRIES)),
            TIMEOUT_SECONDS=float(
                os.environ.get("TIMEOUT_SECONDS", cls.TIMEOUT_SECONDS)
            ),
            USER_AGENT=os.environ.get("USER_AGENT", cls.USER_AGENT),
            ENABLE_METRICS=_as_bool(
                os.environ.get("ENABLE_METRICS"), cls.ENABLE_METRICS
            ),
            TRACE_HTTP=_as_bool(os.environ.get("TRACE_HTTP"), cls.TRACE_HTTP),
            LOG_LEVEL=os.environ.get("LOG_LEVEL", cls.LOG_LEVEL).upper(),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_environment()
