"""Repository for the Product aggregate.

Doubles as the catalogue reader used by checkout: one read for a set of
product ids, and a conditional write for inventory changes.
"""

from collections.abc import Iterable

from protean.utils.query import Q

from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.errors import InventoryConflict


@storefront.repository(part_of=Product)
class ProductRepository:
    def find_by_ids(self, product_ids: Iterable[str]) -> dict[str, Product]:
        """Load every product whose id is in `product_ids`, keyed by id.

        Missing ids are simply absent from the result; callers compare sizes.
        """
        ids = list(dict.fromkeys(str(pid) for pid in product_ids))
        if not ids:
            return {}

        results = self._dao.query.filter(id__in=ids).limit(len(ids)).all().items
        return {str(product.id): product for product in results}

    def record_sale(self, product: Product, observed_inventory: int) -> None:
        """Persist a sale made with `Product.sell`.

        The update only matches the row if its inventory still equals the
        value read earlier in this transaction.
        """
        updated = self._dao._update_all(
            Q(id=str(product.id), inventory=observed_inventory),
            inventory=product.inventory,
            is_active=product.is_active,
            updated_at=product.updated_at,
        )
        if not updated:
            raise InventoryConflict(str(product.id), product.name)

    def remove(self, product: Product) -> None:
        self._dao.delete(product)
