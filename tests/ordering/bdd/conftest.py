"""Shared BDD fixtures and step definitions for checkout."""

import pytest
from protean.utils.globals import current_domain
from pytest_bdd import given, parsers
from storefront.catalogue.product import Product
from storefront.payments import get_authorizer
from storefront.shared.money import to_cents


# ---------------------------------------------------------------------------
# Scalar fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def catalogue():
    """Products created by Given steps, keyed by name."""
    return {}


@pytest.fixture()
def shopper():
    return {"user_id": None}


@pytest.fixture()
def outcome():
    return {"receipt": None, "error": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('the catalogue has "{name}" priced {price} with {inventory:d} in stock'))
def _(catalogue, name, price, inventory):
    product = Product.create(name=name, price_cents=to_cents(price), inventory=inventory)
    current_domain.repository_for(Product).add(product)
    catalogue[name] = product


@given(parsers.cfparse('a signed-in shopper "{user_id}"'))
def _(shopper, user_id):
    shopper["user_id"] = user_id


@given("an anonymous shopper")
def _(shopper):
    shopper["user_id"] = None


@given("the card will be declined")
def _():
    get_authorizer().configure(should_approve=False)
