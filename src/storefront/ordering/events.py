"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Identifier, Integer

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """Checkout succeeded: stock was taken and the order recorded as paid."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    total_cents = Integer(required=True)
    item_count = Integer(required=True)
    placed_at = DateTime(required=True)
