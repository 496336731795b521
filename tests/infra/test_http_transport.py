"""Tests for the requests-based HTTP transport."""

from unittest.mock import MagicMock, PropertyMock

import pytest
import requests
from prometheus_client import REGISTRY
from urllib3._collections import HTTPHeaderDict

from opcstore.common.config import Settings
from opcstore.common.errors import TransportError
from opcstore.infra.storage.http_transport import HttpTransport, mask_headers


def _response(status_code=200, headers=(), text=""):
    response = MagicMock()
    response.status_code = status_code
    raw_headers = HTTPHeaderDict()
    for name, value in headers:
        raw_headers.add(name, value)
    response.raw.headers = raw_headers
    response.text = text
    return response


class TestHttpTransport:
    """Test HttpTransport implementation."""

    @pytest.fixture
    def settings(self):
        return Settings(
            STORAGE_ENDPOINT="https://storage.example.com/v1/",
            IDENTITY_DOMAIN="acme",
            AUTH_TOKEN="secret-token",
            TIMEOUT_SECONDS=5.0,
        )

    @pytest.fixture
    def session(self):
        return MagicMock(spec=requests.Session)

    @pytest.fixture
    def transport(self, settings, session):
        return HttpTransport(settings=settings, session=session)

    def test_qualifies_paths_with_account(self, transport):
        assert transport.qualified_name("c1/f.txt") == "Storage-acme/c1/f.txt"
        assert transport.qualified_name("/c1/f.txt") == "Storage-acme/c1/f.txt"
        assert (
            transport.qualified_name("Storage-acme/c1/f.txt") == "Storage-acme/c1/f.txt"
        )

    def test_explicit_account_overrides_identity_domain(self, session):
        transport = HttpTransport(
            settings=Settings(STORAGE_ACCOUNT="AUTH_abc", IDENTITY_DOMAIN="acme"),
            session=session,
        )

        assert transport.qualified_name("c1/f.txt") == "AUTH_abc/c1/f.txt"

    def test_without_account_path_is_unchanged(self, session):
        transport = HttpTransport(settings=Settings(), session=session)

        assert transport.qualified_name("c1/f.txt") == "c1/f.txt"

    def test_url_quotes_path(self, transport):
        assert (
            transport.url_for("c1/my file.txt")
            == "https://storage.example.com/v1/Storage-acme/c1/my%20file.txt"
        )

    def test_put_sends_headers_and_body(self, transport, session):
        session.request.return_value = _response(201)

        result = transport.issue_request(
            "put", "c1/f.txt", headers={"Content-Type": "text/plain"}, body=b"data"
        )

        assert result.status_code == 201
        session.request.assert_called_once_with(
            "PUT",
            "https://storage.example.com/v1/Storage-acme/c1/f.txt",
            headers={"Content-Type": "text/plain"},
            data=b"data",
            timeout=5.0,
        )

    def test_head_returns_header_lists(self, transport, session):
        session.request.return_value = _response(
            200,
            headers=[
                ("Content-Length", "42"),
                ("X-Object-Meta-Tag", "a"),
                ("X-Object-Meta-Tag", "b"),
            ],
        )

        result = transport.issue_request("HEAD", "c1/f.txt", headers={})

        assert result.headers["Content-Length"] == ["42"]
        assert result.headers["content-length"] == ["42"]
        assert result.headers["X-Object-Meta-Tag"] == ["a", "b"]

    def test_falls_back_to_merged_headers(self, transport, session):
        response = MagicMock()
        response.status_code = 200
        response.raw = None
        response.headers = {"ETag": "abc"}
        session.request.return_value = response

        result = transport.issue_request("HEAD", "c1/f.txt", headers={})

        assert result.headers["etag"] == ["abc"]

    def test_non_2xx_raises_transport_error(self, transport, session):
        session.request.return_value = _response(404, text="Not Found")

        with pytest.raises(TransportError, match="HTTP 404 for DELETE c1/f.txt") as excinfo:
            transport.issue_request("DELETE", "c1/f.txt", headers={})

        assert excinfo.value.status_code == 404
        assert excinfo.value.method == "DELETE"
        assert excinfo.value.path == "c1/f.txt"
        assert excinfo.value.response_body == "Not Found"

    def test_connection_error_raises_transport_error(self, transport, session):
        session.request.side_effect = requests.ConnectionError("refused")

        with pytest.raises(TransportError, match="Request failed for HEAD") as excinfo:
            transport.issue_request("HEAD", "c1/f.txt", headers={})

        assert excinfo.value.status_code is None
        assert isinstance(excinfo.value.__cause__, requests.ConnectionError)

    def test_unencodable_header_raises_transport_error(self, transport, session):
        session.request.side_effect = UnicodeEncodeError(
            "latin-1", "\u65e5\u672c", 0, 2, "ordinal not in range(256)"
        )

        with pytest.raises(TransportError, match="Request failed for HEAD") as excinfo:
            transport.issue_request("HEAD", "c1/f.txt", headers={"Range": "\u65e5\u672c"})

        assert excinfo.value.status_code is None
        assert isinstance(excinfo.value.__cause__, UnicodeEncodeError)

    def test_unreadable_error_body_is_reported_empty(self, transport, session):
        response = _response(500)
        type(response).text = PropertyMock(
            side_effect=requests.exceptions.ChunkedEncodingError("broken")
        )
        session.request.return_value = response

        with pytest.raises(TransportError) as excinfo:
            transport.issue_request("DELETE", "c1/f.txt", headers={})

        assert excinfo.value.status_code == 500
        assert excinfo.value.response_body == ""

    def test_unexpected_body_errors_propagate(self, transport, session):
        response = _response(500)
        type(response).text = PropertyMock(side_effect=KeyError("boom"))
        session.request.return_value = response

        with pytest.raises(KeyError):
            transport.issue_request("DELETE", "c1/f.txt", headers={})

    def test_records_metrics(self, transport, session):
        session.request.return_value = _response(204)
        labels = {"method": "DELETE", "status": "204"}
        before = REGISTRY.get_sample_value("storage_requests_total", labels) or 0.0

        transport.issue_request("DELETE", "c1/f.txt", headers={})

        after = REGISTRY.get_sample_value("storage_requests_total", labels)
        assert after == before + 1
        assert (
            REGISTRY.get_sample_value(
                "storage_request_duration_seconds_count", {"method": "DELETE"}
            )
            >= 1
        )

    def test_metrics_can_be_disabled(self, session):
        transport = HttpTransport(
            settings=Settings(ENABLE_METRICS=False), session=session
        )
        session.request.return_value = _response(200)
        labels = {"method": "OPTIONS", "status": "200"}
        before = REGISTRY.get_sample_value("storage_requests_total", labels)

        transport.issue_request("OPTIONS", "c1/f.txt", headers={})

        assert REGISTRY.get_sample_value("storage_requests_total", labels) == before

    def test_trace_logging_masks_sensitive_headers(self, session, caplog):
        transport = HttpTransport(
            settings=Settings(TRACE_HTTP=True), session=session
        )
        session.request.return_value = _response(
            200, headers=[("X-Trans-Id", "tx1"), ("Set-Cookie", "sid=1")]
        )

        with caplog.at_level("INFO", logger="storage"):
            transport.issue_request(
                "HEAD", "c1/f.txt", headers={"X-Auth-Token": "abc", "Range": ""}
            )

        records = [rec for rec in caplog.records if rec.name == "storage"]
        assert records
        rec = records[-1]
        assert rec.extra["transaction_id"] == "tx1"
        assert rec.extra["request_headers"] == {"X-Auth-Token": "***", "Range": ""}
        assert rec.extra["response_headers"]["Set-Cookie"] == "***"

    def test_error_status_logged_as_warning(self, transport, session, caplog):
        session.request.return_value = _response(403)

        with caplog.at_level("INFO", logger="storage"):
            with pytest.raises(TransportError):
                transport.issue_request("HEAD", "c1/f.txt", headers={})

        assert caplog.records[-1].levelname == "WARNING"


class TestSessionLifecycle:
    def test_builds_session_with_auth_and_user_agent(self):
        transport = HttpTransport(
            settings=Settings(AUTH_TOKEN="tok", USER_AGENT="tests/1.0", MAX_RETRIES=3)
        )
        session = transport._session

        assert session.headers["X-Auth-Token"] == "tok"
        assert session.headers["User-Agent"] == "tests/1.0"
        assert session.get_adapter("https://x").max_retries.total == 3
        transport.close()

    def test_does_not_close_injected_session(self):
        session = MagicMock(spec=requests.Session)

        with HttpTransport(settings=Settings(), session=session):
            pass

        session.close.assert_not_called()


def test_mask_headers_is_case_insensitive():
    assert mask_headers({"authorization": "Bearer x", "ETag": "e"}) == {
        "authorization": "***",
        "ETag": "e",
    }
