"""Tests for the fake payment authorizer and the authorizer registry."""

from decimal import Decimal

from storefront.payments import get_authorizer, reset_authorizer, set_authorizer
from storefront.payments.fake_adapter import MAX_RECORDED_CALLS, FakeAuthorizer
from storefront.payments.port import AuthorizationResult, PaymentAuthorizer


class TestFakeAuthorizer:
    def test_approves_by_default(self):
        result = FakeAuthorizer().authorize(Decimal("12.50"), "USD", "chk_1")
        assert result.approved is True
        assert result.authorization_id.startswith("fake_auth_")
        assert result.decline_reason is None

    def test_can_be_told_to_decline(self):
        authorizer = FakeAuthorizer()
        authorizer.configure(should_approve=False, decline_reason="Insufficient funds")

        result = authorizer.authorize(Decimal("12.50"), "USD", "chk_1")

        assert result.approved is False
        assert result.authorization_id is None
        assert result.decline_reason == "Insufficient funds"

    def test_records_calls(self):
        authorizer = FakeAuthorizer()
        authorizer.authorize(Decimal("3.00"), "USD", "chk_2")
        assert list(authorizer.calls) == [{"amount": Decimal("3.00"), "currency": "USD", "reference": "chk_2"}]


class TestAuthorizerRegistry:
    def test_defaults_to_fake(self):
        assert isinstance(get_authorizer(), FakeAuthorizer)

    def test_same_instance_until_reset(self):
        first = get_authorizer()
        assert get_authorizer() is first
        reset_authorizer()
        assert get_authorizer() is not first

    def test_can_be_replaced(self):
        class Stub(PaymentAuthorizer):
            def authorize(self, amount, currency, reference):
                return AuthorizationResult(approved=True, authorization_id="stub")

        stub = Stub()
        set_authorizer(stub)
        assert get_authorizer() is stub


def test_call_log_is_bounded():
    authorizer = FakeAuthorizer()
    for n in range(MAX_RECORDED_CALLS + 50):
        authorizer.authorize(Decimal("1.00"), "USD", f"chk_{n}")

    assert len(authorizer.calls) == MAX_RECORDED_CALLS
    assert authorizer.calls[-1]["reference"] == f"chk_{MAX_RECORDED_CALLS + 49}"
