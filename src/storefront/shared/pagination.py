"""Opaque page cursors shared by product and order listings."""

import base64
import binascii
from dataclasses import dataclass, field
from typing import Any

from storefront.errors import BadRequest

_PREFIX = "offset:"


@dataclass
class Page:
    """One page of results plus the cursor for the next page, if any."""

    items: list[Any] = field(default_factory=list)
    next_cursor: str | None = None


def encode_cursor(offset: int) -> str:
    return base64.urlsafe_b64encode(f"{_PREFIX}{offset}".encode()).decode().rstrip("=")


def decode_cursor(cursor: str | None) -> int:
    """Return the offset a cursor points at. ``None`` means the first page."""
    if not cursor:
        return 0

    padded = cursor + "=" * (-len(cursor) % 4)
    try:
        raw = base64.urlsafe_b64decode(padded.encode()).decode()
    except (binascii.Error, UnicodeDecodeError, ValueError):
        raise BadRequest("Invalid cursor") from None

    if not raw.startswith(_PREFIX) or not raw[len(_PREFIX) :].isdigit():
        raise BadRequest("Invalid cursor")

    return int(raw[len(_PREFIX) :])


def validate_limit(limit: int, maximum: int, minimum: int = 1) -> int:
    if isinstance(limit, bool) or not isinstance(limit, int) or not minimum <= limit <= maximum:
        raise BadRequest(f"limit must be an integer between {minimum} and {maximum}")
    return limit


def paginate(results: list, offset: int, limit: int) -> Page:
    """Build a page from a result list fetched with ``limit + 1`` rows."""
    has_more = len(results) > limit
    items = results[:limit]
    return Page(items=items, next_cursor=encode_cursor(offset + limit) if has_more else None)
