"""
Session token state for a client instance.

Before a session exists the account secret doubles as the signing token.
After ``application/startsession`` succeeds the server-issued token replaces
it, so the secret stops being used for every request.

States:
    NoSession            -> signing_token() returns the API secret
    ActiveSession(token) -> signing_token() returns the token

The token lives in memory only and is never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class SessionState:
    """
    Tracks the session token and decides which secret signs requests.

    Attributes:
        api_secret: The account's shared secret, used while no session exists.
        token: The active session token, or None.

    Example:
        state = SessionState(api_secret="s3cret")
        state.signing_token()  # "s3cret"

        state.set_token("abc123")
        state.signing_token()  # "abc123"

        state.clear()
        state.signing_token()  # "s3cret"
    """

    api_secret: str = field(repr=False)
    token: str | None = None

    @property
    def is_active(self) -> bool:
        """Check if a session token is currently set."""
        return bool(self.token)

    def signing_token(self) -> str:
        """Return the session token if active, otherwise the API secret."""
        if self.is_active:
            return str(self.token)
        return self.api_secret

    def set_token(self, token: str | None) -> None:
        """Replace the session token. An empty token or None ends the session."""
        self.token = str(token) if token else None

    def clear(self) -> None:
        """Drop the session token (NoSession)."""
        self.token = None
