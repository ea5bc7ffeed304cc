"""Order aggregate with its OrderItem line entities.

Orders are written once, by checkout, and never change afterwards within this
service. Each line copies the product's name and price at the moment of
purchase so the order stays accurate if the product is later repriced,
renamed or deleted.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.shared.money import line_total


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "PENDING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class PaymentStatus(Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderItem:
    """A purchased line: product reference plus name and price snapshots."""

    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    price_cents = Integer(required=True, min_value=0)
    quantity = Integer(required=True, min_value=1)

    @property
    def line_total_cents(self) -> int:
        return line_total(self.price_cents, self.quantity)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    user_id = Identifier(required=True)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    total_cents = Integer(required=True, min_value=0)
    shipping_address = Text()
    authorization_id = String(max_length=255)
    items = HasMany(OrderItem)
    created_at = DateTime()

    @classmethod
    def place(cls, user_id, lines, shipping_address=None, authorization_id=None):
        """Create a paid, pending order from priced lines.

        `lines` is an iterable of ``(product_id, name, price_cents, quantity)``.
        """
        from storefront.ordering.events import OrderPlaced

        items = [
            OrderItem(product_id=product_id, name=name, price_cents=price_cents, quantity=quantity)
            for product_id, name, price_cents, quantity in lines
        ]
        if not items:
            raise ValidationError({"items": ["An order must contain at least one item"]})

        now = datetime.now(UTC)
        order = cls(
            user_id=user_id,
            status=OrderStatus.PENDING.value,
            payment_status=PaymentStatus.PAID.value,
            total_cents=sum(item.line_total_cents for item in items),
            shipping_address=shipping_address,
            authorization_id=authorization_id,
            items=items,
            created_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=order.id,
                user_id=str(user_id),
                total_cents=order.total_cents,
                item_count=len(items),
                placed_at=now,
            )
        )
        return order
