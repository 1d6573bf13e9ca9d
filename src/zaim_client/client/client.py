"""
Zaim API client implementation.

Every public operation takes an optional trailing ``callback``:

- With a callback, the request runs in the calling thread, the callback is
  invoked exactly once with the parsed result, and transport errors are
  raised out of the call (they are never passed to the callback).
- Without a callback, an awaitable is returned. It resolves with the parsed
  result or raises the transport error when awaited.

Configuration, authentication and validation errors are raised immediately
in both conventions, before any network activity.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, TypeVar

from ..schemas.credentials import HandshakeState, TokenPair
from ..schemas.request import (
    HttpMethod,
    ItemType,
    RequestDescriptor,
    build_query_url,
    normalize_params,
    parse_body,
    parse_item_type,
    require_fields,
)
from ..transport import OAuthTransport, Transport
from .session import ClientSession

if TYPE_CHECKING:
    from ..config import ZaimConfig

logger = logging.getLogger(__name__)

API_BASE_URL = "https://api.zaim.net/v2"
AUTHORIZE_URL = "https://auth.zaim.net/users/auth"

T = TypeVar("T")
ResultCallback = Callable[[Any], None]


class ZaimClient:
    """
    Client for the Zaim personal-finance API.

    Features:
    - OAuth 1.0a handshake (authorization URL, access token exchange)
    - Money entries: create, update, delete, list
    - Categories, genres, accounts, currencies
    - Callback or awaitable calling convention for every operation

    In callback mode the HTTP exchange blocks the calling thread and the
    callback has run by the time the call returns. Use the awaitable form to
    keep an event loop free; it runs the exchange in a worker thread.

    A client instance is not thread-safe: changing the token pair while a
    call is in flight is unsupported.
    """

    def __init__(
        self,
        consumer_key: str | None = None,
        consumer_secret: str | None = None,
        access_token: str | None = None,
        access_token_secret: str | None = None,
        callback: str | None = None,
        transport: Transport | None = None,
        timeout: int = OAuthTransport.DEFAULT_TIMEOUT,
    ):
        """
        Initialize Zaim client.

        Args:
            consumer_key: Application consumer key
            consumer_secret: Application consumer secret
            access_token: Existing access token (skips the handshake)
            access_token_secret: Existing access token secret
            callback: OAuth callback URL, required without an access-token pair
            transport: Custom transport (defaults to OAuthTransport)
            timeout: Request timeout in seconds for the default transport

        Raises:
            ConfigurationError: On missing or incompatible parameters
        """
        self.session = ClientSession(
            consumer_key=consumer_key,
            consumer_secret=consumer_secret,
            access_token=access_token,
            access_token_secret=access_token_secret,
            callback=callback,
            transport=transport,
            timeout=timeout,
        )

    @classmethod
    def from_config(
        cls, config: "ZaimConfig", transport: Transport | None = None
    ) -> "ZaimClient":
        """Build a client from a loaded ZaimConfig."""
        return cls(
            consumer_key=config.consumer_key,
            consumer_secret=config.consumer_secret,
            access_token=config.access_token,
            access_token_secret=config.access_token_secret,
            callback=config.callback_url,
            transport=transport,
            timeout=config.timeout,
        )

    @property
    def token(self) -> str | None:
        return self.session.token_pair.token

    @property
    def secret(self) -> str | None:
        return self.session.token_pair.secret

    @property
    def state(self) -> HandshakeState:
        return self.session.state

    def set_access_token(self, token: str) -> None:
        """Set the access token. No validation is performed."""
        self.session.set_access_token(token)

    def set_access_token_secret(self, secret: str) -> None:
        """Set the access token secret. No validation is performed."""
        self.session.set_access_token_secret(secret)

    # === Calling convention ===

    def _complete(
        self, work: Callable[[], T], callback: Callable[[T], None] | None
    ) -> Awaitable[T] | None:
        """Run ``work`` under the convention selected by ``callback``."""
        if callback is not None:
            callback(work())
            return None
        return self._run_async(work)

    async def _run_async(self, work: Callable[[], T]) -> T:
        return await asyncio.to_thread(work)

    # === Authorization handshake ===

    def get_authorization_url(
        self, callback: Callable[[str], None] | None = None
    ) -> Awaitable[str] | None:
        """
        Start the handshake and produce the user-facing authorization URL.

        A fresh request token replaces the current token pair. Calling this
        again before the handshake completes restarts it with a new token.

        Raises:
            ConfigurationError: If no callback URL is configured
        """
        self.session.require_callback()
        return self._complete(self._issue_authorization_url, callback)

    def _issue_authorization_url(self) -> str:
        pair = self.session.transport.obtain_request_token()
        self.session.store_request_token(pair)

        url = f"{AUTHORIZE_URL}?oauth_token={pair.token}"
        self.session.state = HandshakeState.AUTHORIZED_URL_ISSUED
        logger.info("Obtained request token, authorization URL issued")
        return url

    def get_oauth_access_token(
        self, pin: str, callback: Callable[[TokenPair], None] | None = None
    ) -> Awaitable[TokenPair] | None:
        """
        Exchange the stored request token and the user's verifier for an access token.

        The returned pair is not stored; commit it with set_access_token and
        set_access_token_secret.
        """
        self.session.require_consumer()
        request_pair = TokenPair(
            token=self.session.token_pair.token,
            secret=self.session.token_pair.secret,
        )

        def exchange() -> TokenPair:
            pair = self.session.transport.obtain_access_token(
                request_pair.token, request_pair.secret, pin
            )
            logger.info("Obtained access token")
            return pair

        return self._complete(exchange, callback)

    # === HTTP verbs ===

    def request(
        self,
        method: HttpMethod | str,
        url: str,
        params: dict[str, Any] | None = None,
        callback: ResultCallback | None = None,
    ) -> Awaitable[Any] | None:
        """
        Sign and send one request with the current access-token pair.

        GET parameters are appended to the URL; POST/PUT parameters are sent
        as the form body; DELETE sends none.

        Raises:
            AuthenticationError: If the token pair is incomplete
        """
        verb = HttpMethod(method)
        params = dict(params or {})
        if verb is HttpMethod.GET:
            url = build_query_url(url, params)
        elif verb is HttpMethod.DELETE:
            params = {}

        return self._dispatch(RequestDescriptor(method=verb, url=url, params=params), callback)

    def http_get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        callback: ResultCallback | None = None,
    ) -> Awaitable[Any] | None:
        return self.request(HttpMethod.GET, url, params, callback)

    def http_post(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        callback: ResultCallback | None = None,
    ) -> Awaitable[Any] | None:
        return self.request(HttpMethod.POST, url, params, callback)

    def http_put(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        callback: ResultCallback | None = None,
    ) -> Awaitable[Any] | None:
        return self.request(HttpMethod.PUT, url, params, callback)

    def http_delete(
        self, url: str, callback: ResultCallback | None = None
    ) -> Awaitable[Any] | None:
        return self.request(HttpMethod.DELETE, url, None, callback)

    def _dispatch(
        self, descriptor: RequestDescriptor, callback: ResultCallback | None
    ) -> Awaitable[Any] | None:
        pair = self.session.require_token_pair()
        return self._complete(lambda: self._send(descriptor, pair), callback)

    def _send(self, descriptor: RequestDescriptor, pair: TokenPair) -> Any:
        body = self.session.transport.signed_request(
            descriptor.method,
            descriptor.url,
            pair.token,
            pair.secret,
            descriptor.params,
        )
        return parse_body(body)

    # === Resources ===

    def verify(self, callback: ResultCallback | None = None) -> Awaitable[Any] | None:
        """Get the authenticated user's credentials."""
        return self.http_get(f"{API_BASE_URL}/home/user/verify", {}, callback)

    def create_pay(
        self, params: dict[str, Any], callback: ResultCallback | None = None
    ) -> Awaitable[Any] | None:
        """
        Create a payment.

        Required: category_id, genre_id, amount. Optional: date (defaults to
        today), from_account_id, comment, name, place.
        """
        params = normalize_params(params, default_date=True)
        require_fields("create_pay", params)
        return self.http_post(f"{API_BASE_URL}/home/money/payment", params, callback)

    def create_income(
        self, params: dict[str, Any], callback: ResultCallback | None = None
    ) -> Awaitable[Any] | None:
        """
        Create an income.

        Required: category_id, amount. Optional: date (defaults to today),
        to_account_id, place, comment.
        """
        params = normalize_params(params, default_date=True)
        require_fields("create_income", params)
        return self.http_post(f"{API_BASE_URL}/home/money/income", params, callback)

    def create_transfer(
        self, params: dict[str, Any], callback: ResultCallback | None = None
    ) -> Awaitable[Any] | None:
        """
        Create a transfer between two accounts.

        Required: from_account_id, to_account_id, amount. Optional: date
        (defaults to today), comment.
        """
        params = normalize_params(params, default_date=True)
        require_fields("create_transfer", params)
        return self.http_post(f"{API_BASE_URL}/home/money/transfer", params, callback)

    def update_money(
        self,
        item_type: ItemType | str,
        item_id: int | str,
        params: dict[str, Any],
        callback: ResultCallback | None = None,
    ) -> Awaitable[Any] | None:
        """
        Update a money entry.

        Args:
            item_type: "payment", "income" or "transfer"
            item_id: Money entry ID
            params: New values; amount is required, date defaults to today
            callback: Optional result callback
        """
        kind = parse_item_type(item_type)
        params = normalize_params(params, default_date=True)
        require_fields("update_money", params)
        return self.http_put(
            f"{API_BASE_URL}/home/money/{kind.value}/{item_id}", params, callback
        )

    def delete_money(
        self,
        item_type: ItemType | str,
        item_id: int | str,
        callback: ResultCallback | None = None,
    ) -> Awaitable[Any] | None:
        """Delete a money entry."""
        kind = parse_item_type(item_type)
        return self.http_delete(f"{API_BASE_URL}/home/money/{kind.value}/{item_id}", callback)

    def get_money(
        self,
        params: dict[str, Any] | None = None,
        callback: ResultCallback | None = None,
    ) -> Awaitable[Any] | None:
        """
        List money entries.

        Optional filters: category_id, genre_id, mode, order, start_date,
        end_date, page, limit, group_by.
        """
        params = normalize_params(params)
        return self.http_get(f"{API_BASE_URL}/home/money", params, callback)

    def get_categories(self, callback: ResultCallback | None = None) -> Awaitable[Any] | None:
        return self.http_get(f"{API_BASE_URL}/home/category", normalize_params(None), callback)

    def get_genre(self, callback: ResultCallback | None = None) -> Awaitable[Any] | None:
        return self.http_get(f"{API_BASE_URL}/home/genre", normalize_params(None), callback)

    def get_accounts(self, callback: ResultCallback | None = None) -> Awaitable[Any] | None:
        return self.http_get(f"{API_BASE_URL}/home/account", normalize_params(None), callback)

    def get_currencies(self, callback: ResultCallback | None = None) -> Awaitable[Any] | None:
        """List currencies supported by Zaim."""
        return self.http_get(f"{API_BASE_URL}/currency", {}, callback)
