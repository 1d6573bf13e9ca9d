"""
Shared test data and a recording transport stub.
"""

import json
from typing import Any

from zaim_client.schemas import TokenPair

CONSUMER_KEY = "consumerKey"
CONSUMER_SECRET = "consumerSecret"
CALLBACK_URL = "http://zaim.net"

SAMPLE_VERIFY_RESPONSE = {
    "me": {
        "id": 1234567,
        "login": "zaim_user",
        "name": "Zaim User",
        "input_count": 42,
        "day_count": 7,
        "repeat_count": 3,
        "day": 9,
        "week": 1,
        "month": 4,
        "currency_code": "JPY",
        "profile_image_url": "https://example.test/profile.png",
        "cover_image_url": "https://example.test/cover.png",
        "profile_modified": "2013-04-09 10:00:00",
    },
    "requested": 1365500000,
}


class RecordingTransport:
    """Transport stub that records every invocation."""

    def __init__(
        self,
        body: Any = None,
        request_tokens: list[TokenPair] | None = None,
        access_token: TokenPair | None = None,
        error: Exception | None = None,
    ):
        self.body = json.dumps(SAMPLE_VERIFY_RESPONSE) if body is None else body
        self._request_tokens = iter(
            request_tokens or [TokenPair(token="request-token", secret="request-secret")]
        )
        self.access_token = access_token or TokenPair(token="access-token", secret="access-secret")
        self.error = error
        self.calls: list[dict[str, Any]] = []

    def obtain_request_token(self) -> TokenPair:
        self.calls.append({"op": "request_token"})
        if self.error:
            raise self.error
        return next(self._request_tokens)

    def obtain_access_token(self, token: str, secret: str, verifier: str) -> TokenPair:
        self.calls.append(
            {"op": "access_token", "token": token, "secret": secret, "verifier": verifier}
        )
        if self.error:
            raise self.error
        return self.access_token

    def signed_request(self, method, url, token, secret, params=None):
        self.calls.append(
            {
                "op": "signed_request",
                "method": method,
                "url": url,
                "token": token,
                "secret": secret,
                "params": params,
            }
        )
        if self.error:
            raise self.error
        return self.body
