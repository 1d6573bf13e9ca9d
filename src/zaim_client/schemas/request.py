"""
Request descriptors and parameter normalization.

Every resource call is reduced to a RequestDescriptor (method, url, params)
before anything touches the network. The helpers here apply the Zaim
defaults (``date`` and ``mapping``), check required fields, and serialize
GET parameters into the query string.
"""

import json
import re
from dataclasses import dataclass, field
from datetime import date as Date
from enum import Enum
from typing import Any
from urllib.parse import quote

from ..errors import ValidationError

# Response representation selector required by the Zaim API
DEFAULT_MAPPING = 1

# Keys carrying calendar dates
DATE_KEYS = ("date", "start_date", "end_date")

_DATE_PATTERN = re.compile(r"^\d{4}-\d{1,2}-\d{1,2}$")


class HttpMethod(str, Enum):
    """HTTP verbs understood by the transport."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class ItemType(str, Enum):
    """Kinds of money entries."""

    PAYMENT = "payment"
    INCOME = "income"
    TRANSFER = "transfer"


# Required fields per write operation (falsy values count as missing)
REQUIRED_FIELDS: dict[str, tuple[str, ...]] = {
    "create_pay": ("category_id", "genre_id", "amount"),
    "create_income": ("category_id", "amount"),
    "create_transfer": ("from_account_id", "to_account_id", "amount"),
    "update_money": ("amount",),
}


@dataclass(frozen=True)
class RequestDescriptor:
    """A single resource call, ready to be signed and sent."""

    method: HttpMethod
    url: str
    params: dict[str, Any] = field(default_factory=dict)


def format_date(value: Any) -> str:
    """Format a date for the Zaim API.

    ``datetime.date`` and ``datetime.datetime`` values become ``YYYY-M-D``
    (no zero padding). Strings are accepted as-is when they look like
    ``YYYY-MM-DD`` (padded or not).

    Raises:
        ValidationError: If the value is neither a date nor a well-formed string.
    """
    if isinstance(value, Date):
        return f"{value.year}-{value.month}-{value.day}"
    if isinstance(value, str) and _DATE_PATTERN.match(value):
        return value
    raise ValidationError(
        "Wrong date format. Correct format is `YYYY-mm-dd`. "
        "Consider passing a `datetime.date`, which is formatted automatically."
    )


def current_date() -> str:
    """Today's local date as ``YYYY-M-D``, e.g. ``2013-4-9``."""
    return format_date(Date.today())


def normalize_params(
    params: dict[str, Any] | None,
    *,
    default_date: bool = False,
    default_mapping: bool = True,
) -> dict[str, Any]:
    """Copy ``params`` and apply the Zaim defaults.

    Key order is preserved; defaulted keys that were absent are appended
    (``date`` first, then ``mapping``). The caller's mapping is not modified.
    """
    normalized = dict(params or {})

    if default_date and not normalized.get("date"):
        normalized["date"] = current_date()

    for key in DATE_KEYS:
        if normalized.get(key):
            normalized[key] = format_date(normalized[key])

    if default_mapping and not normalized.get("mapping"):
        normalized["mapping"] = DEFAULT_MAPPING

    return normalized


def _join_fields(fields: tuple[str, ...]) -> str:
    if len(fields) == 1:
        return fields[0]
    return ", ".join(fields[:-1]) + " and " + fields[-1]


def require_fields(operation: str, params: dict[str, Any]) -> None:
    """Raise ValidationError unless every required field of ``operation`` is set."""
    required = REQUIRED_FIELDS[operation]
    missing = [name for name in required if not params.get(name)]
    if missing:
        verb = "is" if len(required) == 1 else "are"
        raise ValidationError(
            f"Invalid parameters. {_join_fields(required)} {verb} necessary.",
            missing=missing,
        )


def parse_item_type(item_type: Any) -> ItemType:
    """Coerce ``item_type`` to an ItemType or raise ValidationError."""
    try:
        return ItemType(item_type)
    except ValueError:
        raise ValidationError(f"Invalid itemType: {item_type}") from None


def build_query_url(url: str, params: dict[str, Any]) -> str:
    """Append ``params`` to ``url`` as ``key=value&`` pairs in insertion order.

    The trailing separator is kept. Keys and values are percent-encoded.
    """
    query = "".join(
        f"{quote(str(key), safe='')}={quote(str(value), safe='')}&"
        for key, value in params.items()
    )
    return f"{url}?{query}"


def parse_body(data: Any) -> Any:
    """Decode a textual JSON body; pass structured values through."""
    if isinstance(data, bytes):
        data = data.decode("utf-8")
    if isinstance(data, str):
        if not data.strip():
            return None
        return json.loads(data)
    return data
