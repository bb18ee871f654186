"""
Turns an endpoint path and its parameters into a request ready to send.

Signed requests carry their credentials in the URL path, never in the body:

    <endpoint>/order/create/api_key/<key>/signature/<sig>/
    <endpoint>/order/create/api_key/<key>/signature/<sig>/token/<token>/

The ``token`` segment appears only while a session is active and always comes
after the ``api_key`` and ``signature`` segments. Requests without parameters,
or built with ``sign=False`` (customer creation), go out unsigned.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from wordy_client.session import SessionState
from wordy_client.signing import Scalar, sign

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuiltRequest:
    """
    A request ready for the transport.

    Attributes:
        url: Absolute URL including any signature segments.
        body: The caller's parameters, unmodified, to be form-encoded.
        signed: Whether signature segments were appended.
    """

    url: str
    body: dict[str, Scalar]
    signed: bool


class RequestBuilder:
    """
    Builds signed or unsigned requests for one client instance.

    Args:
        endpoint: Base URL of the API (e.g. ``http://www.wordy.com/api/version/2/``).
        api_key: Public API key placed in signed URLs.
        session: Session state supplying the signing token.
    """

    def __init__(self, endpoint: str, api_key: str, session: SessionState) -> None:
        self.endpoint = endpoint
        self.api_key = api_key
        self.session = session

    def signature_suffix(self, params: Mapping[str, Scalar]) -> str:
        """Return the ``/api_key/.../signature/.../[token/.../]`` path suffix."""
        signature = sign(params, self.session.signing_token())
        suffix = f"/api_key/{self.api_key}/signature/{signature}/"
        if self.session.is_active:
            suffix += f"token/{self.session.token}/"
        return suffix

    def build(
        self,
        path: str,
        params: Mapping[str, Scalar] | None = None,
        sign: bool = True,
    ) -> BuiltRequest:
        """
        Build the URL and body for one API call.

        Args:
            path: Endpoint path such as ``/document/info/``.
            params: Request parameters; also the POST body.
            sign: Set to False for calls made without any credentials.

        Returns:
            BuiltRequest: The final URL and body.
        """
        body = dict(params or {})
        signed = sign and bool(body)

        if signed:
            # Trim the path first so the suffix keeps its own slashes.
            path = path.rstrip("/") + self.signature_suffix(body)

        url = f"{self.endpoint.rstrip('/')}/{path.lstrip('/')}"
        logger.debug("Built %s request for %s", "signed" if signed else "unsigned", path_only(path))
        return BuiltRequest(url=url, body=body, signed=signed)


def path_only(path: str) -> str:
    """Strip signature and token segments from a path for logging."""
    head, _, _ = path.partition("/api_key/")
    return head or path
