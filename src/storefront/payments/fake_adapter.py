"""Configurable fake payment authorizer.

Approves every request unless told otherwise, which is how the store runs
today: there is no payment gateway and every checkout counts as paid.
Tests flip it to decline to exercise the rollback path.
"""

from collections import deque
from decimal import Decimal
from uuid import uuid4

from storefront.payments.port import AuthorizationResult, PaymentAuthorizer


MAX_RECORDED_CALLS = 100


class FakeAuthorizer(PaymentAuthorizer):
    """Always-approve authorizer with a test switch."""

    def __init__(self) -> None:
        self.should_approve: bool = True
        self.decline_reason: str = "Card declined"
        # Most recent requests only; this is also the production default
        self.calls: deque[dict] = deque(maxlen=MAX_RECORDED_CALLS)

    def configure(self, should_approve: bool, decline_reason: str = "Card declined") -> None:
        """Configure authorizer behavior at runtime."""
        self.should_approve = should_approve
        self.decline_reason = decline_reason

    def authorize(self, amount: Decimal, currency: str, reference: str) -> AuthorizationResult:
        self.calls.append({"amount": amount, "currency": currency, "reference": reference})

        if self.should_approve:
            return AuthorizationResult(approved=True, authorization_id=f"fake_auth_{uuid4().hex[:12]}")
        return AuthorizationResult(approved=False, decline_reason=self.decline_reason)
