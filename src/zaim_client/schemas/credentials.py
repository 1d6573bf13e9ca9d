"""
Credential value types.

ClientCredentials identify the consumer application and never change after
construction. TokenPair holds whichever (token, secret) pair is currently in
use: the temporary request token during the handshake, the access token
afterwards.
"""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class ClientCredentials:
    """Consumer identity registered with Zaim."""

    consumer_key: str
    consumer_secret: str
    callback_url: str | None = None

    def __repr__(self) -> str:
        return (
            f"ClientCredentials(consumer_key={self.consumer_key!r}, "
            f"consumer_secret='***', callback_url={self.callback_url!r})"
        )


@dataclass
class TokenPair:
    """OAuth token and secret used to sign requests.

    Mutable: the handshake and the explicit setters overwrite the fields in
    place. No expiry is tracked, only Zaim can tell whether a pair is valid.
    """

    token: str | None = None
    secret: str | None = None

    @property
    def is_complete(self) -> bool:
        """Both token and secret are present and non-empty."""
        return bool(self.token) and bool(self.secret)

    def __repr__(self) -> str:
        secret = "***" if self.secret else None
        return f"TokenPair(token={self.token!r}, secret={secret!r})"


class HandshakeState(str, Enum):
    """Progress of the three-legged OAuth 1.0a handshake."""

    UNAUTHENTICATED = "unauthenticated"
    REQUEST_TOKEN_OBTAINED = "request_token_obtained"
    AUTHORIZED_URL_ISSUED = "authorized_url_issued"
    ACCESS_TOKEN_OBTAINED = "access_token_obtained"
