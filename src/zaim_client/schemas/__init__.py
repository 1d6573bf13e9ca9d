"""
Value types shared by the transport and the client.
"""

from .credentials import ClientCredentials, HandshakeState, TokenPair
from .request import (
    DEFAULT_MAPPING,
    REQUIRED_FIELDS,
    HttpMethod,
    ItemType,
    RequestDescriptor,
    build_query_url,
    current_date,
    format_date,
    normalize_params,
    parse_body,
    parse_item_type,
    require_fields,
)

__all__ = [
    "ClientCredentials",
    "TokenPair",
    "HandshakeState",
    "HttpMethod",
    "ItemType",
    "RequestDescriptor",
    "DEFAULT_MAPPING",
    "REQUIRED_FIELDS",
    "build_query_url",
    "current_date",
    "format_date",
    "normalize_params",
    "parse_body",
    "parse_item_type",
    "require_fields",
]
