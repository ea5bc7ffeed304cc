"""Product aggregate root.

Prices are held in cents. Inventory is the only field contended by
concurrent shoppers; checkout changes it through `ProductRepository.record_sale`
rather than a plain save so the write is conditioned on the value it read.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Integer, String, Text

from storefront.domain import storefront


@storefront.aggregate
class Product:
    """A purchasable item in the catalogue."""

    name = String(required=True, max_length=255)
    description = Text(default="")
    sku = String(max_length=50, default="")
    price_cents = Integer(required=True, min_value=0)
    inventory = Integer(required=True, min_value=0)
    is_active = Boolean(default=True)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, name, price_cents, inventory, description=None, sku=None, is_active=True):
        from storefront.catalogue.events import ProductCreated

        now = datetime.now(UTC)
        product = cls(
            name=name,
            description=description or "",
            sku=sku or "",
            price_cents=price_cents,
            inventory=inventory,
            # Zero-stock products are hidden from the catalogue
            is_active=bool(is_active) and inventory > 0,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=product.id,
                name=product.name,
                sku=product.sku,
                price_cents=product.price_cents,
                inventory=product.inventory,
                is_active=product.is_active,
                created_at=now,
            )
        )
        return product

    def update_details(self, name, price_cents, inventory, description=None, sku=None, is_active=True):
        from storefront.catalogue.events import ProductUpdated

        self.name = name
        self.description = description or ""
        self.sku = sku or ""
        self.price_cents = price_cents
        self.inventory = inventory
        self.is_active = bool(is_active) and inventory > 0
        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductUpdated(
                product_id=self.id,
                name=self.name,
                sku=self.sku,
                price_cents=self.price_cents,
                inventory=self.inventory,
                is_active=self.is_active,
                updated_at=self.updated_at,
            )
        )

    @property
    def has_valid_price(self) -> bool:
        return isinstance(self.price_cents, int) and self.price_cents > 0

    def can_supply(self, quantity: int) -> bool:
        return self.inventory >= quantity

    def sell(self, quantity: int) -> None:
        """Take `quantity` units out of stock, deactivating the product at zero."""
        if quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be positive"]})

        if not self.can_supply(quantity):
            raise ValidationError(
                {
                    "inventory": [
                        f"Insufficient inventory for {self.name}: requested {quantity}, available {self.inventory}"
                    ]
                }
            )

        self.inventory -= quantity
        if self.inventory == 0:
            self.is_active = False
        self.updated_at = datetime.now(UTC)
