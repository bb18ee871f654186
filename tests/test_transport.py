"""
Tests for the httpx-backed transport.

Uses respx for mocking HTTP requests.
"""

from urllib.parse import parse_qs

import httpx
import pytest
import respx
from httpx import Response

from wordy_client.errors import TransportFailure
from wordy_client.transport import HttpTransport

URL = "http://wordy.test/api/version/2/account/info/api_key/k/signature/s/"


@pytest.fixture
def transport():
    transport = HttpTransport(timeout=5.0)
    yield transport
    transport.close()


@pytest.mark.unit
class TestHttpTransport:
    """Tests for HttpTransport.execute()."""

    @respx.mock
    def test_posts_form_encoded_body(self, transport: HttpTransport):
        route = respx.post(URL).mock(return_value=Response(200, content=b'{"success": true}'))

        body = transport.execute(URL, {"customer_id": 1, "brief": "Fix it", "flag": True})

        assert body == b'{"success": true}'
        request = route.calls.last.request
        assert request.method == "POST"
        assert request.headers["content-type"] == "application/x-www-form-urlencoded"
        assert parse_qs(request.content.decode()) == {
            "customer_id": ["1"],
            "brief": ["Fix it"],
            "flag": ["1"],
        }

    @respx.mock
    def test_returns_body_for_error_status(self, transport: HttpTransport):
        """Error statuses still return the body; the envelope reports failure."""
        respx.post(URL).mock(return_value=Response(500, content=b'{"success": false}'))

        assert transport.execute(URL, {"customer_id": 1}) == b'{"success": false}'

    @respx.mock
    def test_returns_raw_bytes(self, transport: HttpTransport):
        respx.post(URL).mock(return_value=Response(200, content=b"%PDF-1.4\x00\xff"))

        assert transport.execute(URL, {"id": 1}) == b"%PDF-1.4\x00\xff"

    @respx.mock
    def test_connect_error_raises_transport_failure(self, transport: HttpTransport):
        respx.post(URL).mock(side_effect=httpx.ConnectError("connection refused"))

        with pytest.raises(TransportFailure) as exc_info:
            transport.execute(URL, {"customer_id": 1})

        assert exc_info.value.message == "Request failed"
        assert "ConnectError" in exc_info.value.detail
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @respx.mock
    def test_timeout_raises_transport_failure(self, transport: HttpTransport):
        respx.post(URL).mock(side_effect=httpx.ReadTimeout("timed out"))

        with pytest.raises(TransportFailure, match="ReadTimeout"):
            transport.execute(URL, {"customer_id": 1})

    @respx.mock
    def test_connection_pool_reused(self, transport: HttpTransport):
        respx.post(URL).mock(return_value=Response(200, json={}))
        pool = transport.http_client

        transport.execute(URL, {"a": 1})
        transport.execute(URL, {"a": 2})

        assert transport.http_client is pool


@pytest.mark.unit
class TestHttpTransportLifecycle:
    """Tests for close()."""

    def test_closed_transport_refuses_requests(self):
        transport = HttpTransport()
        transport.close()

        with pytest.raises(RuntimeError, match="closed"):
            transport.execute(URL, {"customer_id": 1})

    def test_close_twice_is_safe(self):
        transport = HttpTransport()

        transport.close()
        transport.close()

    def test_uses_supplied_client(self):
        http_client = httpx.Client()
        transport = HttpTransport(client=http_client)

        assert transport.http_client is http_client
        transport.close()
        assert http_client.is_closed
