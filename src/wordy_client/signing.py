"""
Request signatures for the Wordy API.

Every signed request carries an MD5 digest of its parameters in the URL. The
digest is computed over the parameters sorted by key, written as
``key=value`` pairs with no separators, followed by the signing token (the
account secret, or the session token once a session is active):

    >>> sign({"b": "2", "a": "1"}, "secret") == md5(b"a=1b=2secret").hexdigest()
    True

MD5 is dictated by the remote service and cannot be swapped for a stronger
digest without breaking compatibility.
"""

from __future__ import annotations

import hashlib
from collections.abc import Mapping
from enum import Enum

Scalar = str | int | float | bool | Enum | None


def format_value(value: Scalar) -> str:
    """
    Render a parameter value the way it goes over the wire.

    Used both for the signed string and for the form-encoded body, so the two
    never disagree about how a value is spelled.

    Args:
        value: A scalar parameter value.

    Returns:
        str: ``"1"``/``""`` for booleans, ``""`` for None, the member value
        for enums (``PaymentStatus.NEW`` -> ``"payment_new"``), ``str()``
        otherwise.
    """
    if value is None:
        return ""
    if isinstance(value, Enum):
        return format_value(value.value)
    if isinstance(value, bool):
        return "1" if value else ""
    return str(value)


def signature_base(params: Mapping[str, Scalar], token: str) -> str:
    """Return the string that gets hashed: sorted ``key=value`` pairs plus token."""
    pairs = "".join(f"{key}={format_value(params[key])}" for key in sorted(params))
    return pairs + token


def sign(params: Mapping[str, Scalar], token: str) -> str:
    """
    Compute the signature for a set of request parameters.

    Args:
        params: Request parameters. Insertion order does not matter.
        token: The current signing token.

    Returns:
        str: Lowercase hex MD5 digest.
    """
    data = signature_base(params, token).encode("utf-8")
    return hashlib.md5(data).hexdigest()  # nosec B324 - fixed by the remote protocol
