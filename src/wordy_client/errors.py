"""
Exceptions raised by the Wordy client.

Only infrastructure failures raise. A request the remote service rejects
(``"success": false`` in the response envelope) is returned as a normal
result so callers can branch on ``result.success`` and read the server's
error payload.

    try:
        result = client.account_info()
    except TransportFailure as e:
        ...  # network trouble, nothing was decoded
    except MalformedResponse as e:
        ...  # the server answered with something that is not JSON
    else:
        if not result.success:
            ...  # business-level failure

Calls are at-most-once. No idempotency key is sent, so retrying after a
``TransportFailure`` (a timeout in particular) may repeat a remote side
effect such as creating an order.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class WordyError(Exception):
    """
    Base exception for all client failures.

    Attributes:
        message: Human-readable error message.
        detail: Additional context, if available.
    """

    message: str
    detail: str = ""

    def __str__(self) -> str:
        """Return a formatted error message."""
        if self.detail:
            return f"{self.message}: {self.detail}"
        return self.message


class TransportFailure(WordyError):
    """
    The HTTP request could not be completed.

    Covers connection errors, DNS failures and timeouts. Raised immediately;
    the client never retries.
    """


class MalformedResponse(WordyError):
    """The response body could not be decoded as a JSON object."""
