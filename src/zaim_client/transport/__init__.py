"""
Zaim OAuth 1.0a transport.

Provides:
- Request token and access token exchange
- Signed GET/POST/PUT/DELETE returning the raw body

Failures surface as TransportError subclasses and are never retried.
"""

from .oauth import ACCESS_TOKEN_URL, REQUEST_TOKEN_URL, OAuthTransport, Transport

__all__ = [
    "OAuthTransport",
    "Transport",
    "REQUEST_TOKEN_URL",
    "ACCESS_TOKEN_URL",
]
