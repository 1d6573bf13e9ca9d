"""
Client session: consumer identity, current token pair, transport handle.

One session exists per client instance. It is mutated synchronously by the
setters and the handshake, and read synchronously when a call is made. There
is no locking; a session must be used from one thread at a time.
"""

import logging

from ..errors import AuthenticationError, ConfigurationError
from ..schemas.credentials import ClientCredentials, HandshakeState, TokenPair
from ..transport import OAuthTransport, Transport

logger = logging.getLogger(__name__)


class ClientSession:
    """Holds and guards the credentials used to talk to Zaim."""

    def __init__(
        self,
        consumer_key: str | None,
        consumer_secret: str | None,
        access_token: str | None = None,
        access_token_secret: str | None = None,
        callback: str | None = None,
        transport: Transport | None = None,
        timeout: int = OAuthTransport.DEFAULT_TIMEOUT,
    ):
        """
        Validate and store the consumer identity.

        Args:
            consumer_key: Application consumer key (required)
            consumer_secret: Application consumer secret (required)
            access_token: Pre-provisioned access token
            access_token_secret: Pre-provisioned access token secret
            callback: OAuth callback URL, required unless both access values are given
            transport: Transport to use instead of an OAuthTransport
            timeout: Request timeout for the default transport

        Raises:
            ConfigurationError: On missing or incompatible parameters
        """
        if not consumer_key or not consumer_secret:
            raise ConfigurationError("ConsumerKey and secret must be configured.")

        if bool(access_token) != bool(access_token_secret):
            raise ConfigurationError(
                "accessToken and accessTokenSecret must be supplied together."
            )

        pre_authorized = bool(access_token) and bool(access_token_secret)
        if not pre_authorized and not callback:
            raise ConfigurationError("Callback url must be configured.")

        self.credentials = ClientCredentials(
            consumer_key=consumer_key,
            consumer_secret=consumer_secret,
            callback_url=callback,
        )
        self.token_pair = TokenPair(token=access_token, secret=access_token_secret)
        self.state = (
            HandshakeState.ACCESS_TOKEN_OBTAINED
            if pre_authorized
            else HandshakeState.UNAUTHENTICATED
        )
        self.transport: Transport = transport or OAuthTransport(self.credentials, timeout=timeout)

        logger.debug(f"Client session created (pre_authorized={pre_authorized})")

    def set_access_token(self, token: str) -> None:
        self.token_pair.token = token
        self._mark_committed()

    def set_access_token_secret(self, secret: str) -> None:
        self.token_pair.secret = secret
        self._mark_committed()

    def _mark_committed(self) -> None:
        if self.token_pair.is_complete:
            self.state = HandshakeState.ACCESS_TOKEN_OBTAINED

    def store_request_token(self, pair: TokenPair) -> None:
        """Replace the current pair with a fresh request token (handshake step 1)."""
        self.token_pair.token = pair.token
        self.token_pair.secret = pair.secret
        self.state = HandshakeState.REQUEST_TOKEN_OBTAINED

    def require_consumer(self) -> None:
        """Raise ConfigurationError unless the consumer identity is usable."""
        if not self.credentials.consumer_key or not self.credentials.consumer_secret:
            raise ConfigurationError("ConsumerKey and secret must be configured.")

    def require_callback(self) -> None:
        """Raise ConfigurationError unless a handshake can be started."""
        self.require_consumer()
        if not self.credentials.callback_url:
            raise ConfigurationError("Callback url must be configured.")

    def require_token_pair(self) -> TokenPair:
        """Return a snapshot of the complete token pair.

        Raises:
            AuthenticationError: If token or secret is missing
        """
        if not self.token_pair.is_complete:
            raise AuthenticationError("accessToken and tokenSecret must be configured.")
        return TokenPair(token=self.token_pair.token, secret=self.token_pair.secret)
