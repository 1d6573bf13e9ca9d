"""
OAuth 1.0a transport implementation.

Signing is done by requests-oauthlib; this module binds it to the Zaim
handshake endpoints and the consumer identity, and turns requests failures
into TransportError subclasses.
"""

import logging
from typing import Any, Protocol

import requests
from requests_oauthlib import OAuth1, OAuth1Session
from requests_oauthlib.oauth1_session import TokenMissing, TokenRequestDenied

from ..errors import TransportError, ZaimAPIError, ZaimConnectionError
from ..schemas.credentials import ClientCredentials, TokenPair
from ..schemas.request import HttpMethod

logger = logging.getLogger(__name__)

REQUEST_TOKEN_URL = "https://api.zaim.net/v2/auth/request"
ACCESS_TOKEN_URL = "https://api.zaim.net/v2/auth/access"

# Verbs whose params travel in a form-encoded body
_BODY_METHODS = (HttpMethod.POST, HttpMethod.PUT)


class Transport(Protocol):
    """Capability the client needs from the OAuth/HTTP layer."""

    def obtain_request_token(self) -> TokenPair: ...

    def obtain_access_token(self, token: str, secret: str, verifier: str) -> TokenPair: ...

    def signed_request(
        self,
        method: HttpMethod | str,
        url: str,
        token: str,
        secret: str,
        params: dict[str, Any] | None = None,
    ) -> str: ...


class OAuthTransport:
    """
    Signed HTTP transport for Zaim.

    Features:
    - Request token / access token exchange (HMAC-SHA1)
    - Signed GET/POST/PUT/DELETE returning the raw response body
    - No retries: every call is exactly one HTTP exchange
    """

    DEFAULT_TIMEOUT = 30

    def __init__(
        self,
        credentials: ClientCredentials,
        timeout: int = DEFAULT_TIMEOUT,
        request_token_url: str = REQUEST_TOKEN_URL,
        access_token_url: str = ACCESS_TOKEN_URL,
    ):
        """
        Initialize the transport.

        Args:
            credentials: Consumer key/secret and optional callback URL
            timeout: Request timeout in seconds
            request_token_url: Handshake step 1 endpoint
            access_token_url: Handshake step 3 endpoint
        """
        self.credentials = credentials
        self.timeout = timeout
        self.request_token_url = request_token_url
        self.access_token_url = access_token_url

        self.session = requests.Session()
        self.session.headers.update({"Accept": "application/json"})

    def obtain_request_token(self) -> TokenPair:
        """Fetch a temporary request-token pair."""
        with OAuth1Session(
            self.credentials.consumer_key,
            client_secret=self.credentials.consumer_secret,
            callback_uri=self.credentials.callback_url,
        ) as oauth:
            return self._fetch_token(oauth.fetch_request_token, self.request_token_url)

    def obtain_access_token(self, token: str, secret: str, verifier: str) -> TokenPair:
        """Exchange a request-token pair and the user's verifier for an access-token pair."""
        with OAuth1Session(
            self.credentials.consumer_key,
            client_secret=self.credentials.consumer_secret,
            resource_owner_key=token,
            resource_owner_secret=secret,
        ) as oauth:
            return self._fetch_token(
                oauth.fetch_access_token, self.access_token_url, verifier=verifier
            )

    def _fetch_token(self, fetch, url: str, **kwargs: Any) -> TokenPair:
        """Run one handshake step and wrap its failures."""
        logger.debug(f"OAuth handshake: POST {url}")

        try:
            data = fetch(url, timeout=self.timeout, **kwargs)
        except TokenRequestDenied as e:
            logger.error(f"Token request denied by {url}: {e}")
            raise ZaimAPIError(
                status_code=e.status_code,
                message=str(e),
                response_body=e.response.text,
            ) from e
        except TokenMissing as e:
            logger.error(f"Token missing in response from {url}: {e}")
            raise TransportError(f"Zaim returned no token: {e}") from e
        except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
            logger.error(f"Connection error to {url}: {e}")
            raise ZaimConnectionError(f"Failed to connect to Zaim at {url}: {e}") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Request error for {url}: {e}")
            raise TransportError(f"Request failed: {e}") from e
        except ValueError as e:
            logger.error(f"Undecodable token response from {url}: {e}")
            raise TransportError(f"Zaim returned an undecodable token response: {e}") from e

        return TokenPair(token=data.get("oauth_token"), secret=data.get("oauth_token_secret"))

    def signed_request(
        self,
        method: HttpMethod | str,
        url: str,
        token: str,
        secret: str,
        params: dict[str, Any] | None = None,
    ) -> str:
        """
        Sign and send a resource request.

        Args:
            method: HTTP verb
            url: Full URL (GET query strings are already appended)
            token: Access token
            secret: Access token secret
            params: Form body for POST/PUT; ignored for GET/DELETE

        Returns:
            Raw response body

        Raises:
            ZaimConnectionError: On connection failure or timeout
            ZaimAPIError: If Zaim answers with a non-2xx status
        """
        verb = HttpMethod(method)
        auth = OAuth1(
            self.credentials.consumer_key,
            client_secret=self.credentials.consumer_secret,
            resource_owner_key=token,
            resource_owner_secret=secret,
        )
        data = params if verb in _BODY_METHODS and params else None

        logger.debug(f"API Request: {verb.value} {url}")

        try:
            response = self.session.request(
                method=verb.value,
                url=url,
                data=data,
                auth=auth,
                timeout=self.timeout,
            )
        except requests.exceptions.ConnectionError as e:
            logger.error(f"Connection error to {url}: {e}")
            raise ZaimConnectionError(f"Failed to connect to Zaim: {e}") from e
        except requests.exceptions.Timeout as e:
            logger.error(f"Timeout for {url}: {e}")
            raise ZaimConnectionError(f"Request to Zaim timed out: {e}") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Request error for {url}: {e}")
            raise TransportError(f"Request failed: {e}") from e

        logger.debug(f"Response status: {response.status_code}")

        if not response.ok:
            try:
                body = response.json()
                message = (
                    body.get("message", response.reason)
                    if isinstance(body, dict)
                    else response.reason
                )
            except ValueError:
                message = response.reason

            logger.error(f"API Error {response.status_code}: {message}")
            logger.debug(f"Full response body: {response.text}")

            raise ZaimAPIError(
                status_code=response.status_code,
                message=message,
                response_body=response.text,
            )

        return response.text
