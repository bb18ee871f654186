"""
Shared pytest fixtures for the Wordy client test suite.

Fixtures:
- ``client``: a WordyClient on the real httpx transport, for use with respx
- ``transport`` / ``recorded_client``: a client on an in-memory transport
  that records every call and replays queued bodies
"""

import json
from collections.abc import Generator, Mapping
from typing import Any

import pytest

from tests.constants import (
    TEST_API_KEY,
    TEST_API_SECRET,
    TEST_CUSTOMER_ID,
    TEST_ENDPOINT,
    TEST_PAYMENT_ENDPOINT,
)
from wordy_client.client import WordyClient


class RecordingTransport:
    """
    In-memory transport that records calls and replays queued bodies.

    Attributes:
        calls: (url, body) pairs in the order they were executed.
        responses: Bodies returned by the next calls, first in first out.
        closed: Whether close() was called.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.responses: list[bytes] = []
        self.closed = False

    def queue(self, payload: Any) -> None:
        """Queue a body; dicts and lists are JSON-encoded, bytes kept as-is."""
        if isinstance(payload, bytes):
            self.responses.append(payload)
        else:
            self.responses.append(json.dumps(payload).encode())

    def execute(self, url: str, body: Mapping[str, Any]) -> bytes:
        self.calls.append((url, dict(body)))
        if not self.responses:
            raise AssertionError(f"Unexpected request to {url}")
        return self.responses.pop(0)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def client() -> Generator[WordyClient, None, None]:
    """Create a client on the default httpx transport."""
    with WordyClient(
        TEST_API_KEY,
        TEST_API_SECRET,
        TEST_CUSTOMER_ID,
        endpoint=TEST_ENDPOINT,
        payment_endpoint=TEST_PAYMENT_ENDPOINT,
        timeout=5.0,
    ) as client:
        yield client


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def recorded_client(transport: RecordingTransport) -> WordyClient:
    """Create a client whose requests go to the recording transport."""
    return WordyClient(
        TEST_API_KEY,
        TEST_API_SECRET,
        TEST_CUSTOMER_ID,
        endpoint=TEST_ENDPOINT,
        payment_endpoint=TEST_PAYMENT_ENDPOINT,
        transport=transport,
    )
