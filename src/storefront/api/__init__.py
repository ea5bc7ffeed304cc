"""HTTP plumbing shared by every storefront router."""

from storefront.api.errors import register_error_handlers

__all__ = ["register_error_handlers"]
