"""HTTP transport implementation.

This module provides the ``requests``-based transport used by the object
service against Swift-style object storage endpoints.

Dependencies:
    - requests
    - prometheus_client
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any, Mapping
from urllib.parse import quote

import requests
from requests.adapters import HTTPAdapter
from requests.structures import CaseInsensitiveDict

from opcstore.common.errors import TransportError
from opcstore.domain.models import ObjectBody
from opcstore.infra.observability.metrics import LATENCY, REQUESTS
from opcstore.infra.storage.client import TransportResponse

if TYPE_CHECKING:
    from opcstore.common.config import Settings

logger = logging.getLogger("storage")

AUTH_TOKEN_HEADER = "X-Auth-Token"

SENSITIVE_HEADERS = {
    "x-auth-token",
    "x-storage-token",
    "x-storage-pass",
    "authorization",
    "proxy-authorization",
    "cookie",
    "set-cookie",
}

MAX_LOGGED_BODY = 2048


def mask_headers(headers: Mapping[str, Any]) -> dict[str, Any]:
    """Replace sensitive header values with ``***``."""
    return {
        name: "***" if name.lower() in SENSITIVE_HEADERS else value
        for name, value in headers.items()
    }


def _header_lists(response: requests.Response) -> CaseInsensitiveDict:
    raw_headers = getattr(response.raw, "headers", None)
    if raw_headers is not None and hasattr(raw_headers, "getlist"):
        return CaseInsensitiveDict(
            {name: list(raw_headers.getlist(name)) for name in raw_headers.keys()}
        )
    return CaseInsensitiveDict(
        {name: [value] for name, value in response.headers.items()}
    )


def _response_text(response: requests.Response) -> str:
    try:
        text = response.text
    except (requests.RequestException, RuntimeError):
        # Body stream broke or was already consumed.
        return ""
    if len(text) > MAX_LOGGED_BODY:
        return text[:MAX_LOGGED_BODY] + "...<truncated>"
    return text


class HttpTransport:
    """Object storage transport over a ``requests.Session``.

    Resolves object paths against the configured endpoint and account,
    attaches the static auth token and maps failures to ``TransportError``.
    """

    def __init__(
        self,
        *,
        settings: "Settings",
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the transport from settings.

        Args:
            settings: Settings with the endpoint, account and retry configuration.
            session: Optional pre-built session; it is not closed by ``close()``.
        """
        self._settings = settings
        self._owns_session = session is None
        self._session = session or self._build_session(settings)

    @staticmethod
    def _build_session(settings: "Settings") -> requests.Session:
        """Create a session with retrying adapters and default headers."""
        session = requests.Session()
        adapter = HTTPAdapter(max_retries=settings.MAX_RETRIES)
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        session.headers["User-Agent"] = settings.USER_AGENT
        if settings.AUTH_TOKEN:
            session.headers[AUTH_TOKEN_HEADER] = settings.AUTH_TOKEN
        return session

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> HttpTransport:
        return self

    def __exit__(self, *_: object) -> None:
        self.close()

    def qualified_name(self, path: str) -> str:
        """Prefix ``path`` with the account segment unless already present."""
        account = self._settings.account
        path = path.lstrip("/")
        if not account or path == account or path.startswith(f"{account}/"):
            return path
        return f"{account}/{path}"

    def url_for(self, path: str) -> str:
        endpoint = self._settings.STORAGE_ENDPOINT.rstrip("/")
        return f"{endpoint}/{quote(self.qualified_name(path), safe='/')}"

    def issue_request(
        self,
        method: str,
        path: str,
        *,
        headers: Mapping[str, str],
        body: ObjectBody | None = None,
    ) -> TransportResponse:
        """Issue one request and map connection/status failures to TransportError."""
        method = method.upper()
        url = self.url_for(path)
        start = time.perf_counter()
        try:
            response = self._session.request(
                method,
                url,
                headers=dict(headers),
                data=body,
                timeout=self._settings.TIMEOUT_SECONDS,
            )
        except (requests.RequestException, UnicodeEncodeError) as exc:
            # Header values that http.client cannot encode as latin-1 fail here too.
            elapsed = time.perf_counter() - start
            self._record(method, "error", elapsed)
            logger.exception(
                "storage_request_error method=%s path=%s duration_ms=%.3f",
                method,
                path,
                round(elapsed * 1000, 3),
                extra={
                    "extra": {
                        "method": method,
                        "path": path,
                        "duration_ms": round(elapsed * 1000, 3),
                        "exception": repr(exc),
                    }
                },
            )
            raise TransportError(
                f"Request failed for {method} {path}: {exc}",
                method=method,
                path=path,
            ) from exc

        elapsed = time.perf_counter() - start
        status_code = response.status_code
        self._record(method, str(status_code), elapsed)
        response_headers = _header_lists(response)
        self._log(method, path, status_code, elapsed, headers, response_headers)

        if not 200 <= status_code < 300:
            raise TransportError(
                f"HTTP {status_code} for {method} {path}",
                method=method,
                path=path,
                status_code=status_code,
                response_body=_response_text(response),
            )
        return TransportResponse(status_code=status_code, headers=response_headers)

    def _record(self, method: str, status: str, elapsed: float) -> None:
        if not self._settings.ENABLE_METRICS:
            return
        REQUESTS.labels(method, status).inc()
        LATENCY.labels(method).observe(elapsed)

    def _log(
        self,
        method: str,
        path: str,
        status_code: int,
        elapsed: float,
        request_headers: Mapping[str, str],
        response_headers: Mapping[str, list[str]],
    ) -> None:
        level = logging.INFO
        if status_code >= 500:
            level = logging.ERROR
        elif status_code >= 400:
            level = logging.WARNING

        duration_ms = round(elapsed * 1000, 3)
        transaction_id = response_headers.get("X-Trans-Id") or ["-"]
        extra_payload: dict[str, Any] = {
            "method": method,
            "path": path,
            "status": status_code,
            "duration_ms": duration_ms,
            "transaction_id": transaction_id[0],
        }
        if self._settings.TRACE_HTTP:
            extra_payload["request_headers"] = mask_headers(request_headers)
            extra_payload["response_headers"] = mask_headers(response_headers)

        logger.log(
            level,
            "storage_request method=%s path=%s status=%s duration_ms=%.3f trans_id=%s",
            method,
            path,
            status_code,
            duration_ms,
            transaction_id[0],
            extra={"extra": extra_payload},
        )
