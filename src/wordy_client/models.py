"""
Data types passed into and returned from the Wordy client.

Inputs:
    Credentials: API key, secret and customer id of one client instance.
    Field: One titled piece of content submitted with an order.

Results:
    Every endpoint answers with a JSON envelope ``{"success": bool, ...}``.
    The decoded envelope becomes an :class:`APIResult` subclass that keeps the
    full payload and adds accessors for the key that endpoint returns. The
    client does not interpret the payload beyond that; remote objects such as
    orders and documents stay plain dicts.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from wordy_client.constants import DocumentType, FieldType

# =============================================================================
# INPUTS
# =============================================================================


@dataclass(frozen=True)
class Credentials:
    """
    Immutable account credentials for one client instance.

    Attributes:
        api_key: Public API key, sent in the URL of signed requests.
        api_secret: Shared secret. Used to sign requests, never sent.
        customer_id: Id of the customer the requests act for.
    """

    api_key: str
    api_secret: str = field(repr=False)
    customer_id: int


@dataclass(frozen=True)
class Field:
    """
    A single field of an order.

    Attributes:
        title: Field name as the editor sees it (e.g. "post_title").
        type: One of the :class:`FieldType` values.
        value: The content to proofread.
    """

    title: str
    type: FieldType | str
    value: str

    @property
    def is_valid(self) -> bool:
        """True if the type is known and both title and value are non-empty."""
        try:
            FieldType(self.type)
        except ValueError:
            return False
        return bool(self.title) and bool(self.value)

    @classmethod
    def coerce(cls, item: Field | Mapping[str, Any]) -> Field:
        """Build a Field from a Field or a mapping with title/type/value keys."""
        if isinstance(item, Field):
            return item
        return cls(
            title=item.get("title") or "",
            type=item.get("type") or "",
            value=item.get("value") or "",
        )


# =============================================================================
# RESULTS
# =============================================================================


def _as_dict(value: Any) -> dict[str, Any]:
    return dict(value) if isinstance(value, Mapping) else {}


def _as_list(value: Any) -> list[Any]:
    return list(value) if isinstance(value, list) else []


@dataclass
class APIResult:
    """
    Decoded response envelope shared by every endpoint.

    Attributes:
        success: The envelope's ``success`` flag. False means the remote
                 service rejected the request; inspect ``error``/``payload``.
        payload: The whole decoded JSON object, ``success`` included.

    Example:
        result = client.account_info()
        if not result.success:
            print(result.error)
    """

    success: bool
    payload: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> APIResult:
        """Wrap a decoded JSON object."""
        return cls(success=payload.get("success") is True, payload=payload)

    @property
    def error(self) -> Any:
        """Error description from the server, if it sent one."""
        return self.payload.get("error", self.payload.get("message"))

    def get(self, key: str, default: Any = None) -> Any:
        """Read a payload key."""
        return self.payload.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.payload[key]

    def __contains__(self, key: object) -> bool:
        return key in self.payload


class SessionResult(APIResult):
    """Response of ``application/startsession``."""

    @property
    def session(self) -> dict[str, Any]:
        return _as_dict(self.payload.get("session"))

    @property
    def token(self) -> str | None:
        """The issued session token, or None."""
        return self.session.get("token")

    @property
    def expires_at(self) -> str | None:
        """Server-reported expiry. The client never checks it locally."""
        return self.session.get("expires_at")


class OrderResult(APIResult):
    """Response of ``order/create``."""

    @property
    def order(self) -> dict[str, Any]:
        return _as_dict(self.payload.get("order"))

    @property
    def documents(self) -> list[dict[str, Any]]:
        return _as_list(self.order.get("documents"))


class DocumentResult(APIResult):
    """Response of the ``document/*`` endpoints."""

    @property
    def document(self) -> dict[str, Any]:
        return _as_dict(self.payload.get("document"))

    @property
    def document_type(self) -> DocumentType | None:
        """The document's storage type, or None if missing or unknown."""
        try:
            return DocumentType(self.document.get("type"))
        except ValueError:
            return None


class DownloadResult(DocumentResult):
    """
    Decoded ``document/download`` response for a document of type ``text``.

    The edited content arrives as a list of fields, each with the title and
    type it was submitted with and its edited value.
    """

    @property
    def fields(self) -> list[dict[str, Any]]:
        return _as_list(self.payload.get("fields"))


class AccountResult(APIResult):
    """Response of ``account/info``."""

    @property
    def account(self) -> dict[str, Any]:
        return _as_dict(self.payload.get("account"))


class UserResult(APIResult):
    """Response of ``account/adduser`` and ``account/removeuser``."""

    @property
    def user(self) -> dict[str, Any]:
        return _as_dict(self.payload.get("user"))


class UsersResult(APIResult):
    """Response of ``account/users``."""

    @property
    def users(self) -> list[dict[str, Any]]:
        return _as_list(self.payload.get("users", self.payload.get("customers")))


class CustomerResult(APIResult):
    """Response of ``customer/create`` and ``customer/info``."""

    @property
    def customer(self) -> dict[str, Any]:
        return _as_dict(self.payload.get("customer"))


class BaseInfoResult(APIResult):
    """Response of ``base/info``: public figures about the service."""

    @property
    def customers(self) -> Any:
        return self.payload.get("customers")

    @property
    def editors(self) -> Any:
        return self.payload.get("editors")


class EstimateResult(APIResult):
    """Response of ``base/estimate``."""

    @property
    def estimate(self) -> dict[str, Any]:
        return _as_dict(self.payload.get("estimate"))


class StatisticsResult(APIResult):
    """Response of ``base/statistics``."""

    @property
    def statistics(self) -> dict[str, Any]:
        return _as_dict(self.payload.get("statistics"))


class TestimonialResult(APIResult):
    """Response of ``base/testimonial``."""

    __test__ = False  # keep pytest from collecting this class

    @property
    def testimonial(self) -> dict[str, Any]:
        return _as_dict(self.payload.get("testimonial"))
