"""
Zaim API client.

Provides:
- OAuth 1.0a handshake (authorization URL, access token exchange)
- Create/update/delete/list money entries
- Categories, genres, accounts, currencies
- Callback or awaitable calling convention for every operation
"""

from .client import API_BASE_URL, AUTHORIZE_URL, ZaimClient
from .session import ClientSession

__all__ = [
    "ZaimClient",
    "ClientSession",
    "API_BASE_URL",
    "AUTHORIZE_URL",
]
