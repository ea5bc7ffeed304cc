"""Response error extraction for load test observability.

Parses Storefront API error responses into human-readable messages.
Every error the API returns has the shape::

    {"errorKind": "BadRequest", "message": "Insufficient inventory for ..."}
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response


def extract_error_detail(response: Response) -> str:
    """Extract a human-readable error message from an API error response.

    Returns a compact string suitable for Locust failure messages and log lines.
    Gracefully handles unparseable bodies and missing fields.
    """
    try:
        body = response.json()
    except ValueError:
        # Not JSON, return raw text truncated
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if isinstance(body, dict) and "errorKind" in body:
        return f"{body['errorKind']}: {body.get('message', '')}"

    # Unknown shape, stringify and truncate
    return str(body)[:300]


def is_stock_rejection(response: Response) -> bool:
    """True for the expected 400s when shoppers race for the same stock."""
    if response.status_code != 400:
        return False
    message = extract_error_detail(response)
    return "Insufficient inventory" in message or "changed during checkout" in message
