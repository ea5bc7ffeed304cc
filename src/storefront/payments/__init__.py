"""Payment authorizer factory.

Provides get_authorizer() / set_authorizer() to swap implementations.
Defaults to FakeAuthorizer, which approves every checkout.
"""

from storefront.payments.fake_adapter import FakeAuthorizer
from storefront.payments.port import PaymentAuthorizer

_current_authorizer: PaymentAuthorizer | None = None


def get_authorizer() -> PaymentAuthorizer:
    """Return the current payment authorizer. Defaults to FakeAuthorizer."""
    global _current_authorizer
    if _current_authorizer is None:
        _current_authorizer = FakeAuthorizer()
    return _current_authorizer


def set_authorizer(authorizer: PaymentAuthorizer) -> None:
    """Override the active payment authorizer (useful for tests)."""
    global _current_authorizer
    _current_authorizer = authorizer


def reset_authorizer() -> None:
    """Reset to default authorizer."""
    global _current_authorizer
    _current_authorizer = None
