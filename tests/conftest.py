import os
from pathlib import Path

import pytest
from protean.integrations.pytest import DomainFixture


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Select the config overlay before the domain is imported."""
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront
    from storefront.utils.db import drop_db, setup_db

    bed = DomainFixture(storefront)
    bed.setup()
    setup_db(storefront)
    yield bed
    drop_db(storefront)
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield


@pytest.fixture(autouse=True)
def run_around_tests(_ctx):
    """Fixture to automatically cleanup infrastructure after every test"""
    yield

    from protean import current_domain
    from storefront.identity import reset_session_verifier
    from storefront.payments import reset_authorizer

    # Clear all databases
    for _, provider in current_domain.providers.items():
        provider._data_reset()

    # Drain event stores
    current_domain.event_store.store._data_reset()

    reset_authorizer()
    reset_session_verifier()


# ---------------------------------------------------------------------------
# Shared factories
# ---------------------------------------------------------------------------
@pytest.fixture()
def make_product():
    """Persist a product and return it."""
    from protean import current_domain
    from storefront.catalogue.product import Product

    def _make(name="Walnut Desk Organizer", price_cents=4900, inventory=10, **kwargs):
        product = Product.create(name=name, price_cents=price_cents, inventory=inventory, **kwargs)
        current_domain.repository_for(Product).add(product)
        return product

    return _make


@pytest.fixture()
def auth_headers():
    """Build an Authorization header carrying a signed session for `user_id`."""
    from storefront.identity import get_session_verifier

    def _headers(user_id="user-001"):
        return {"Authorization": f"Bearer {get_session_verifier().issue(user_id)}"}

    return _headers
