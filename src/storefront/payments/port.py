"""Payment authorizer port (abstract interface).

Checkout asks the authorizer to approve the order total before any inventory
is written. Swapping in a real gateway adapter does not change the shape of
the checkout transaction.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class AuthorizationResult:
    """Outcome of an authorization request."""

    approved: bool
    authorization_id: str | None = None
    decline_reason: str | None = None


class PaymentAuthorizer(ABC):
    """Abstract payment authorizer interface."""

    @abstractmethod
    def authorize(self, amount: Decimal, currency: str, reference: str) -> AuthorizationResult:
        """Approve or decline charging `amount` for the checkout identified by `reference`."""
        ...
