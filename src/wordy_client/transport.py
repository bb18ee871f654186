"""
HTTP transport for the Wordy client.

The transport does one thing: POST a form-encoded body to a URL and hand back
the raw response body. It knows nothing about signatures or JSON.

A single ``httpx.Client`` is created with the transport and reused for every
request until :meth:`HttpTransport.close` is called, so one client instance
holds one connection pool for its whole life:

    transport = HttpTransport(timeout=30.0)
    try:
        body = transport.execute(url, {"customer_id": 1})
    finally:
        transport.close()

Transports are not safe to share between threads issuing concurrent calls.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Protocol

import httpx

from wordy_client.errors import TransportFailure
from wordy_client.signing import Scalar, format_value

logger = logging.getLogger(__name__)

# Default HTTP request timeout in seconds.
DEFAULT_TIMEOUT = 30.0


class Transport(Protocol):
    """What the client needs from an HTTP layer."""

    def execute(self, url: str, body: Mapping[str, Scalar]) -> bytes:
        """POST ``body`` to ``url`` and return the raw response body."""
        ...

    def close(self) -> None:
        """Release any held connections."""
        ...


class HttpTransport:
    """
    httpx-backed transport.

    Attributes:
        timeout: Request timeout in seconds, applied to every call.
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, client: httpx.Client | None = None) -> None:
        self.timeout = timeout
        self._http_client: httpx.Client | None = client or httpx.Client(timeout=timeout)

    @property
    def http_client(self) -> httpx.Client:
        """
        Get the HTTP client, ensuring it has not been closed.

        Raises:
            RuntimeError: If the transport was already closed.
        """
        if self._http_client is None:
            raise RuntimeError("HttpTransport is closed; create a new client to send requests")
        return self._http_client

    def execute(self, url: str, body: Mapping[str, Scalar]) -> bytes:
        """
        POST a form-encoded body and return the response body.

        The body is returned whatever the HTTP status: the Wordy API reports
        failures inside its JSON envelope.

        Raises:
            TransportFailure: If the request could not be completed.
        """
        data = {key: format_value(value) for key, value in body.items()}
        try:
            response = self.http_client.post(url, data=data)
        except httpx.HTTPError as e:
            raise TransportFailure(
                message="Request failed",
                detail=f"{type(e).__name__}: {e}",
            ) from e

        if response.is_error:
            logger.warning("Wordy API answered with HTTP %d", response.status_code)
        return response.content

    def close(self) -> None:
        """Close the underlying connection pool. Safe to call twice."""
        if self._http_client is not None:
            self._http_client.close()
            self._http_client = None
