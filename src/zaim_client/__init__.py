"""
Zaim API client.

OAuth 1.0a authorization and signed access to Zaim household-account
resources: money entries, categories, genres, accounts and currencies.
"""

from .client import ZaimClient
from .errors import (
    AuthenticationError,
    ConfigurationError,
    TransportError,
    ValidationError,
    ZaimAPIError,
    ZaimConnectionError,
    ZaimError,
)
from .schemas import ItemType, TokenPair

__version__ = "0.1.0"

__all__ = [
    "ZaimClient",
    "ZaimError",
    "ConfigurationError",
    "AuthenticationError",
    "ValidationError",
    "TransportError",
    "ZaimAPIError",
    "ZaimConnectionError",
    "ItemType",
    "TokenPair",
]
