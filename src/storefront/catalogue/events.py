"""Domain events for the Product aggregate."""

from protean.fields import Boolean, DateTime, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductCreated:
    """A store owner added a product to the catalogue."""

    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True)
    sku = String()
    price_cents = Integer(required=True)
    inventory = Integer(required=True)
    is_active = Boolean()
    created_at = DateTime(required=True)


@storefront.event(part_of="Product")
class ProductUpdated:
    """A store owner edited a product's details, price or stock."""

    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True)
    sku = String()
    price_cents = Integer(required=True)
    inventory = Integer(required=True)
    is_active = Boolean()
    updated_at = DateTime(required=True)
