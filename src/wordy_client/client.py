"""
HTTP API client for the Wordy proofreading service.

This module provides :class:`WordyClient`, a synchronous facade with one
method per remote operation of Wordy API v.2. It signs requests, tracks the
application session and decodes responses.

The client owns an HTTP connection pool from construction until it is closed,
so use it as a context manager (or call :meth:`WordyClient.close`):

    with WordyClient(api_key, api_secret, customer_id) as client:
        session = client.application_startsession()
        info = client.account_info()
        client.application_expiresession()

Key Features:
    - MD5 request signatures built from the API secret or session token
    - Application session management
    - Typed result objects carrying the server's ``success`` flag
    - Exceptions only for transport and decoding failures

A client instance runs one request at a time. Threads that need to call the
API concurrently should each use their own client.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, TypeVar

from wordy_client.constants import API_ENDPOINT, PAYMENT_ENDPOINT, DocumentType
from wordy_client.errors import MalformedResponse
from wordy_client.models import (
    AccountResult,
    APIResult,
    BaseInfoResult,
    Credentials,
    CustomerResult,
    DocumentResult,
    DownloadResult,
    EstimateResult,
    Field,
    OrderResult,
    SessionResult,
    StatisticsResult,
    TestimonialResult,
    UserResult,
    UsersResult,
)
from wordy_client.request_builder import RequestBuilder
from wordy_client.session import SessionState
from wordy_client.signing import Scalar
from wordy_client.transport import DEFAULT_TIMEOUT, HttpTransport, Transport

if TYPE_CHECKING:
    from wordy_client.config import Config

logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT", bound=APIResult)

# Format the API expects for session expiry timestamps.
EXPIRES_AT_FORMAT = "%Y-%m-%d %H:%M:%S"

# How much of an undecodable body to keep in MalformedResponse.detail.
_BODY_PREVIEW = 200


class WordyClient:
    """
    Synchronous client for Wordy API v.2.

    Args:
        api_key: Public API key.
        api_secret: Shared API secret.
        customer_id: Customer the requests act for.
        endpoint: Base URL of the API.
        payment_endpoint: Base URL of the order payment page.
        timeout: HTTP timeout in seconds for the default transport.
        transport: Alternative transport; the default is an httpx-backed
                   :class:`HttpTransport` created here.

    Attributes:
        credentials: The immutable key/secret/customer triple.
        session: Session token state. Starts with no session.
    """

    def __init__(
        self,
        api_key: str,
        api_secret: str,
        customer_id: int,
        *,
        endpoint: str = API_ENDPOINT,
        payment_endpoint: str = PAYMENT_ENDPOINT,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Transport | None = None,
    ) -> None:
        self.credentials = Credentials(
            api_key=api_key,
            api_secret=api_secret,
            customer_id=customer_id,
        )
        self.endpoint = endpoint
        self.payment_endpoint = payment_endpoint
        self.session = SessionState(api_secret=api_secret)
        self.builder = RequestBuilder(endpoint, api_key, self.session)
        self.transport: Transport = transport or HttpTransport(timeout=timeout)

    @classmethod
    def from_config(cls, config: Config, transport: Transport | None = None) -> WordyClient:
        """Create a client from a :class:`wordy_client.config.Config`."""
        return cls(
            config.api_key,
            config.api_secret,
            config.customer_id,
            endpoint=config.endpoint,
            payment_endpoint=config.payment_endpoint,
            timeout=config.timeout,
            transport=transport,
        )

    # -------------------------------------------------------------------------
    # Context Manager Protocol
    # -------------------------------------------------------------------------

    def __enter__(self) -> WordyClient:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        """Release the transport's connections. The session token is dropped too."""
        self.session.clear()
        self.transport.close()

    # -------------------------------------------------------------------------
    # Request Dispatch
    # -------------------------------------------------------------------------

    @property
    def customer_id(self) -> int:
        return self.credentials.customer_id

    def request(
        self,
        path: str,
        params: Mapping[str, Scalar] | None = None,
        sign: bool = True,
    ) -> bytes:
        """
        Send one request and return the raw response body.

        Args:
            path: Endpoint path, e.g. ``/account/info/``.
            params: Parameters to post (and sign).
            sign: Whether to sign the request.

        Raises:
            TransportFailure: If the HTTP call could not complete.
        """
        built = self.builder.build(path, params, sign=sign)
        logger.debug("POST %s (%d params)", path, len(built.body))
        return self.transport.execute(built.url, built.body)

    def _decode(self, body: bytes, path: str) -> dict[str, Any]:
        """
        Parse a response body as a JSON object.

        Raises:
            MalformedResponse: If the body is not JSON or not an object.
        """
        try:
            data = json.loads(body)
        except ValueError as e:
            raise MalformedResponse(
                message=f"Invalid JSON from {path}",
                detail=body[:_BODY_PREVIEW].decode("utf-8", errors="replace"),
            ) from e

        if not isinstance(data, dict):
            raise MalformedResponse(
                message=f"Unexpected response from {path}",
                detail=f"expected a JSON object, got {type(data).__name__}",
            )
        return data

    def _call(
        self,
        result_type: type[ResultT],
        path: str,
        params: Mapping[str, Scalar] | None = None,
        sign: bool = True,
    ) -> ResultT:
        body = self.request(path, params, sign=sign)
        result = result_type.from_payload(self._decode(body, path))
        if not result.success:
            logger.debug("%s reported failure: %s", path, result.error)
        return result  # type: ignore[return-value]

    def _customer_params(self, **extra: Scalar) -> dict[str, Scalar]:
        params: dict[str, Scalar] = {"customer_id": self.customer_id}
        params.update(extra)
        return params

    # -------------------------------------------------------------------------
    # Public Information (unsigned)
    # -------------------------------------------------------------------------

    def base_info(self) -> BaseInfoResult:
        """
        Get public information about the service.

        Returns:
            BaseInfoResult: Includes the ``customers`` and ``editors`` figures.
        """
        return self._call(BaseInfoResult, "/base/info/")

    def base_estimate(self, word_count: int) -> EstimateResult:
        """
        Estimate price and delivery for a text of ``word_count`` words.

        The word count is part of the path, so the request carries no
        parameters and goes out unsigned.
        """
        return self._call(EstimateResult, f"/base/estimate/word_count/{int(word_count)}")

    def base_statistics(self) -> StatisticsResult:
        """Get public service statistics."""
        return self._call(StatisticsResult, "/base/statistics/")

    def base_testimonial(self) -> TestimonialResult:
        """Get a random customer testimonial."""
        return self._call(TestimonialResult, "/base/testimonial/")

    # -------------------------------------------------------------------------
    # Application Session
    # -------------------------------------------------------------------------

    def application_startsession(self, expires_at: datetime | str | None = None) -> SessionResult:
        """
        Start an application session.

        On success the returned token becomes the signing token for every
        following request, replacing the API secret. On failure the client
        keeps signing with the secret.

        Args:
            expires_at: Optional requested expiry, as a datetime or a
                        ``YYYY-MM-DD HH:MM:SS`` string.

        Returns:
            SessionResult: Contains ``session.token`` and ``session.expires_at``.

        Example:
            session = client.application_startsession()
            if session.success:
                print(f"Session valid until {session.expires_at}")
        """
        params = self._customer_params()
        if expires_at is not None:
            if isinstance(expires_at, datetime):
                expires_at = expires_at.strftime(EXPIRES_AT_FORMAT)
            params["expires_at"] = expires_at

        result = self._call(SessionResult, "/application/startsession/", params)
        if result.success:
            self.session.set_token(result.token)
            logger.info("Application session started for customer %s", self.customer_id)
        else:
            logger.warning("Could not start application session: %s", result.error)
        return result

    def application_expiresession(self) -> APIResult:
        """
        End the application session.

        The local token is always cleared, even when the server reports a
        failure or the request raises, so later calls sign with the secret.
        """
        try:
            return self._call(
                APIResult,
                "/application/expiresession/",
                self._customer_params(),
            )
        finally:
            self.session.clear()
            logger.info("Application session ended for customer %s", self.customer_id)

    # -------------------------------------------------------------------------
    # Account
    # -------------------------------------------------------------------------

    def account_info(self) -> AccountResult:
        """Get information about the account of the configured customer."""
        return self._call(AccountResult, "/account/info/", self._customer_params())

    def account_adduser(self, user_id: int) -> UserResult:
        """Add an existing customer as a user of this account."""
        return self._call(
            UserResult,
            "/account/adduser/",
            self._customer_params(user_id=user_id),
        )

    def account_removeuser(self, user_id: int) -> UserResult:
        """Remove a user from this account."""
        return self._call(
            UserResult,
            "/account/removeuser/",
            self._customer_params(user_id=user_id),
        )

    def account_users(self) -> UsersResult:
        """List the users of this account."""
        return self._call(UsersResult, "/account/users/", self._customer_params())

    # -------------------------------------------------------------------------
    # Orders
    # -------------------------------------------------------------------------

    def order_create(
        self,
        brief: str,
        language_code: str,
        fields: Iterable[Field | Mapping[str, Any]],
        metadata: Mapping[str, Any] | None = None,
    ) -> OrderResult | None:
        """
        Create an order of one document holding the given fields.

        Fields with an unknown type, an empty title or an empty value are
        dropped without error. The remaining fields are numbered from 1 with
        no gaps.

        Args:
            brief: Instructions for the editor.
            language_code: Language of the text, e.g. "GB", "US", "DE".
            fields: :class:`Field` objects or mappings with title/type/value.
            metadata: Extra key/value data stored with the order.

        Returns:
            OrderResult: The created order, including its document ids.
            None: If ``fields`` is empty; no request is sent.

        Example:
            order = client.order_create("Fix typos", "GB", [
                Field("post_title", FieldType.SHORTTEXT, "Hello wrold"),
            ])
            if order is not None and order.success:
                print(client.payment_url(order.order["id"]))
        """
        fields = list(fields)
        if not fields:
            return None

        params = self._customer_params(brief=brief, language_code=language_code)
        params.update(encode_fields(fields))
        if metadata:
            params.update(encode_metadata(metadata))

        return self._call(OrderResult, "/order/create/", params)

    def payment_url(self, order_id: int | str) -> str:
        """Return the page where the customer pays for ``order_id``."""
        return f"{self.payment_endpoint}{order_id}/"

    # -------------------------------------------------------------------------
    # Documents
    # -------------------------------------------------------------------------

    def document_info(self, document_id: int) -> DocumentResult:
        """Get a document's status, type and other details."""
        return self._call(
            DocumentResult,
            "/document/info/",
            self._customer_params(id=document_id),
        )

    def document_download(self, document_id: int) -> bytes | DocumentResult:
        """
        Download the edited content of a document.

        The shape of the download depends on the document's type, so the
        document type is looked up with ``document/info`` first.

        Returns:
            bytes: The raw body, for documents of type ``file``.
            DownloadResult: The decoded body, for documents of type ``text``;
                its ``fields`` hold the edited content.
            DocumentResult: The ``document/info`` result, if that lookup fails
                or reports an unknown type. No download is attempted then.
        """
        info = self.document_info(document_id)
        if not info.success:
            return info

        document_type = info.document_type
        if document_type is None:
            logger.warning(
                "Document %s has unknown type %r; not downloading",
                document_id,
                info.document.get("type"),
            )
            return info

        path = "/document/download/"
        body = self.request(path, self._customer_params(id=document_id))
        if document_type is DocumentType.FILE:
            return body
        return DownloadResult.from_payload(self._decode(body, path))  # type: ignore[return-value]

    def document_cancel(self, document_id: int) -> DocumentResult:
        """Cancel a document that no editor has accepted yet."""
        return self._call(
            DocumentResult,
            "/document/cancel/",
            self._customer_params(id=document_id),
        )

    def document_reedit(self, document_id: int, message: str) -> DocumentResult:
        """Send a completed document back to its editor with a message."""
        return self._call(
            DocumentResult,
            "/document/reedit/",
            self._customer_params(id=document_id, message=message),
        )

    # -------------------------------------------------------------------------
    # Customers
    # -------------------------------------------------------------------------

    def customer_create(
        self,
        email: str,
        password: str,
        confirm: str,
        first_name: str,
        last_name: str,
        country_code: str,
        company_name: str = "",
    ) -> CustomerResult:
        """
        Register a new customer.

        This call is sent unsigned and without ``customer_id``: the new
        customer has no credentials yet.
        """
        params: dict[str, Scalar] = {
            "email": email,
            "password": password,
            "confirm": confirm,
            "first_name": first_name,
            "last_name": last_name,
            "country_code": country_code,
            "company_name": company_name,
        }
        return self._call(CustomerResult, "/customer/create/", params, sign=False)

    def customer_info(self) -> CustomerResult:
        """Get the configured customer's profile."""
        return self._call(CustomerResult, "/customer/info/", self._customer_params())


# =============================================================================
# PARAMETER ENCODING
# =============================================================================


# Metadata values sent as JSON in the unnumbered ``metavalue`` slot.
STRUCTURED_TYPES = (Mapping, list, tuple, set, frozenset)


def _json_default(obj: Any) -> Any:
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, Mapping):
        return dict(obj)
    if isinstance(obj, (set, frozenset)):
        return sorted(obj, key=str)
    return str(obj)


def encode_fields(fields: Iterable[Field | Mapping[str, Any]]) -> dict[str, Scalar]:
    """
    Flatten order fields into ``title<n>``/``type<n>``/``value<n>`` parameters.

    Invalid fields are skipped and numbering continues without gaps.
    """
    params: dict[str, Scalar] = {}
    index = 0
    for item in fields:
        field = Field.coerce(item)
        if not field.is_valid:
            logger.warning("Dropping invalid order field %r", field.title)
            continue
        index += 1
        params[f"title{index}"] = field.title
        params[f"type{index}"] = field.type
        params[f"value{index}"] = field.value
    return params


def encode_metadata(metadata: Mapping[str, Any]) -> dict[str, Scalar]:
    """
    Flatten order metadata into ``metaname<n>``/``metavalue<n>`` parameters.

    Entries with an empty key or value are skipped. A structured value (any
    mapping, list, tuple or set) is JSON-encoded into the single, unnumbered
    ``metavalue`` parameter, which is what the API accepts; a second
    structured value overwrites the first. Inside structured values, enums
    are written as their value and other non-JSON objects such as datetimes
    as their ``str()``.
    """
    params: dict[str, Scalar] = {}
    index = 1
    for key, value in metadata.items():
        if not key or not value:
            continue
        params[f"metaname{index}"] = key
        if isinstance(value, STRUCTURED_TYPES):
            if "metavalue" in params:
                logger.warning(
                    "Metadata %r overwrites an earlier structured value in 'metavalue'", key
                )
            params["metavalue"] = json.dumps(value, separators=(",", ":"), default=_json_default)
        else:
            params[f"metavalue{index}"] = value
        index += 1
    return params
