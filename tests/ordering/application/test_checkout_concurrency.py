"""A checkout that loses the race for stock must fail cleanly.

The rival checkout is run from inside the losing checkout, after its
pre-check has passed, so the interleaving is the same on every run.
"""

import pytest
from protean.utils.globals import current_domain
from storefront.catalogue.product import Product
from storefront.catalogue.repository import ProductRepository
from storefront.errors import BadRequest, InventoryConflict
from storefront.ordering import checkout as checkout_module
from storefront.ordering.checkout import checkout
from storefront.ordering.order import Order


def _stock(product):
    return current_domain.repository_for(Product).get(product.id)


def _orders_for(user_id):
    return current_domain.repository_for(Order)._dao.query.filter(user_id=user_id).all().items


@pytest.fixture()
def rival_wins(monkeypatch):
    """Let `rival` check out `quantity` units first, then lose our own write."""
    original = checkout_module._place_order

    def arrange(product, quantity, rival="user-rival"):
        def interleaved(command):
            monkeypatch.setattr(checkout_module, "_place_order", original)
            checkout(rival, [{"product_id": str(product.id), "quantity": quantity}])
            raise InventoryConflict(str(product.id), product.name)

        monkeypatch.setattr(checkout_module, "_place_order", interleaved)

    return arrange


class TestLostInventoryRace:
    def test_last_unit_goes_to_one_buyer(self, make_product, rival_wins):
        lamp = make_product(name="Brass Lamp", inventory=1)
        rival_wins(lamp, 1)

        with pytest.raises(BadRequest) as exc:
            checkout("user-late", [{"product_id": str(lamp.id), "quantity": 1}])

        assert exc.value.message == "Insufficient inventory for Brass Lamp: requested 1, available 0"
        stored = _stock(lamp)
        assert stored.inventory == 0
        assert stored.is_active is False
        assert len(_orders_for("user-rival")) == 1
        assert _orders_for("user-late") == []

    def test_loser_is_asked_to_retry_when_stock_remains(self, make_product, rival_wins):
        lamp = make_product(name="Brass Lamp", inventory=5)
        rival_wins(lamp, 2)

        with pytest.raises(BadRequest) as exc:
            checkout("user-late", [{"product_id": str(lamp.id), "quantity": 1}])

        assert exc.value.message == "Inventory for Brass Lamp changed during checkout, please try again"
        assert _stock(lamp).inventory == 3
        assert _orders_for("user-late") == []

    def test_conflict_is_not_retried(self, make_product, monkeypatch):
        lamp = make_product(name="Brass Lamp", inventory=5)
        attempts = []

        def always_conflicts(command):
            attempts.append(command)
            raise InventoryConflict(str(lamp.id), lamp.name)

        monkeypatch.setattr(checkout_module, "_place_order", always_conflicts)

        with pytest.raises(BadRequest):
            checkout("user-late", [{"product_id": str(lamp.id), "quantity": 1}])

        assert len(attempts) == 1

    def test_product_deleted_mid_checkout(self, make_product, monkeypatch):
        lamp = make_product(name="Brass Lamp", inventory=5)

        def vanished(command):
            current_domain.repository_for(Product).remove(_stock(lamp))
            raise InventoryConflict(str(lamp.id), lamp.name)

        monkeypatch.setattr(checkout_module, "_place_order", vanished)

        with pytest.raises(BadRequest) as exc:
            checkout("user-late", [{"product_id": str(lamp.id), "quantity": 1}])

        assert exc.value.message == f"Product not found: {lamp.id}"


class TestStaleReadInsideTransaction:
    """The handler's own conditional write refuses a stale read and undoes earlier lines."""

    @pytest.fixture()
    def stale_second_line(self, monkeypatch):
        def arrange(product):
            original = ProductRepository.find_by_ids
            calls = []

            def find_by_ids(self, product_ids):
                products = original(self, product_ids)
                calls.append(1)
                # Second read is the one inside the unit of work
                if len(calls) == 2 and str(product.id) in products:
                    products[str(product.id)].inventory += 1
                return products

            monkeypatch.setattr(ProductRepository, "find_by_ids", find_by_ids)

        return arrange

    def test_conflict_on_later_line_rolls_back_earlier_lines(self, make_product, stale_second_line):
        mug = make_product(name="Stoneware Mug", inventory=10)
        lamp = make_product(name="Brass Lamp", inventory=5)
        stale_second_line(lamp)

        with pytest.raises(BadRequest) as exc:
            checkout(
                "user-late",
                [
                    {"product_id": str(mug.id), "quantity": 2},
                    {"product_id": str(lamp.id), "quantity": 1},
                ],
            )

        assert exc.value.message == "Inventory for Brass Lamp changed during checkout, please try again"
        assert _stock(mug).inventory == 10
        assert _stock(lamp).inventory == 5
        assert _orders_for("user-late") == []
