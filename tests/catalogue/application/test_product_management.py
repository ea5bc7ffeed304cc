"""Application tests for the store-owner product commands."""

import pytest
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain
from storefront.catalogue.management import CreateProduct, DeleteProduct, UpdateProduct
from storefront.catalogue.product import Product
from storefront.errors import NotFound


def _create_product(**overrides):
    defaults = {
        "name": "Stoneware Mug",
        "description": "Speckled glaze, 350 ml",
        "sku": "MUG-SPK-01",
        "price_cents": 1800,
        "inventory": 12,
    }
    defaults.update(overrides)
    return current_domain.process(CreateProduct(**defaults), asynchronous=False)


class TestCreateProductHandler:
    def test_create_returns_id_and_persists(self):
        product_id = _create_product()
        product = current_domain.repository_for(Product).get(product_id)
        assert product.name == "Stoneware Mug"
        assert product.price_cents == 1800
        assert product.is_active is True

    def test_create_with_zero_inventory_is_inactive(self):
        product_id = _create_product(inventory=0)
        product = current_domain.repository_for(Product).get(product_id)
        assert product.is_active is False

    def test_create_requires_name(self):
        with pytest.raises(ValidationError):
            CreateProduct(price_cents=100, inventory=1)


class TestUpdateProductHandler:
    def test_update_replaces_details(self):
        product_id = _create_product()
        current_domain.process(
            UpdateProduct(product_id=product_id, name="Large Mug", price_cents=2200, inventory=4),
            asynchronous=False,
        )
        product = current_domain.repository_for(Product).get(product_id)
        assert product.name == "Large Mug"
        assert product.price_cents == 2200
        assert product.inventory == 4

    def test_update_to_zero_inventory_deactivates(self):
        product_id = _create_product()
        current_domain.process(
            UpdateProduct(product_id=product_id, name="Stoneware Mug", price_cents=1800, inventory=0),
            asynchronous=False,
        )
        assert current_domain.repository_for(Product).get(product_id).is_active is False

    def test_update_unknown_product(self):
        with pytest.raises(NotFound):
            current_domain.process(
                UpdateProduct(product_id="missing", name="Ghost", price_cents=100, inventory=1),
                asynchronous=False,
            )


class TestDeleteProductHandler:
    def test_delete_removes_product(self):
        product_id = _create_product()
        current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)

        products = current_domain.repository_for(Product).find_by_ids([product_id])
        assert products == {}

    def test_delete_unknown_product(self):
        with pytest.raises(NotFound):
            current_domain.process(DeleteProduct(product_id="missing"), asynchronous=False)
