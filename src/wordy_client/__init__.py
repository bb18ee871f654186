"""Wordy API client.

A synchronous Python client for version 2 of the Wordy proofreading API.
Requests are signed with the account's API key and secret (or, once an
application session is started, with the server-issued session token), and
every remote operation is exposed as one method on :class:`WordyClient`.

    from wordy_client import FieldType, WordyClient

    with WordyClient(api_key, api_secret, customer_id) as client:
        session = client.application_startsession()
        if session.success:
            order = client.order_create(
                "Please proofread my post", "GB",
                [{"title": "post_title", "type": FieldType.SHORTTEXT, "value": "Hello"}],
            )
            client.application_expiresession()

Remote failures come back as results with ``success`` set to ``False``.
Only transport and parse failures raise (see :mod:`wordy_client.errors`).
No request is ever retried: a caller that retries after a
``TransportFailure`` may create the same order twice.

Version Management
------------------
``__version__`` is read from the installed package metadata at import time.
The single source of truth is the ``version`` field in ``pyproject.toml``.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from wordy_client.client import WordyClient
from wordy_client.constants import (
    API_ENDPOINT,
    PAYMENT_ENDPOINT,
    DocumentStatus,
    DocumentType,
    FieldType,
    PaymentStatus,
)
from wordy_client.errors import MalformedResponse, TransportFailure, WordyError
from wordy_client.models import Credentials, Field

# ---------------------------------------------------------------------------
# Package version, read from pyproject.toml via importlib.metadata.
#
# The fallback only applies when the package is imported without being
# installed (for example straight from a source checkout).
# ---------------------------------------------------------------------------
try:
    __version__: str = version("wordy-client")
except PackageNotFoundError:
    __version__ = "0.1.0"

__all__ = [
    "API_ENDPOINT",
    "PAYMENT_ENDPOINT",
    "Credentials",
    "DocumentStatus",
    "DocumentType",
    "Field",
    "FieldType",
    "MalformedResponse",
    "PaymentStatus",
    "TransportFailure",
    "WordyClient",
    "WordyError",
    "__version__",
]
