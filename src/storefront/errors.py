"""Typed errors surfaced by storefront operations.

Every failure that reaches a caller is one of four kinds. The API renders
them as ``{"errorKind": ..., "message": ...}`` with the matching HTTP status.
"""


class StorefrontError(Exception):
    """Base class for errors that carry a caller-facing message."""

    kind = "Internal"
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"errorKind": self.kind, "message": self.message}


class Unauthorized(StorefrontError):
    kind = "Unauthorized"
    status_code = 401


class BadRequest(StorefrontError):
    kind = "BadRequest"
    status_code = 400


class NotFound(StorefrontError):
    kind = "NotFound"
    status_code = 404


class InternalError(StorefrontError):
    kind = "Internal"
    status_code = 500


class InventoryConflict(Exception):
    """A conditional inventory write matched no row.

    Raised inside the checkout transaction when another checkout changed the
    product's stock after it was read. Never shown to callers directly.
    """

    def __init__(self, product_id: str, product_name: str) -> None:
        super().__init__(f"Inventory for product {product_id} changed concurrently")
        self.product_id = product_id
        self.product_name = product_name


def first_message(messages) -> str:
    """Flatten a Protean ``ValidationError.messages`` payload into one line."""
    if isinstance(messages, dict):
        for value in messages.values():
            if isinstance(value, list | tuple) and value:
                return str(value[0])
            if value:
                return str(value)
        return "Invalid request"
    return str(messages)
