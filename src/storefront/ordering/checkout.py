"""Checkout — turn a cart into a paid order in a single unit of work.

Flow:
    1. Refuse anonymous callers before touching the store.
    2. Normalise the cart (merge duplicate products, reject bad quantities).
    3. Pre-check the cart against the catalogue so doomed checkouts fail fast.
    4. Process `PlaceOrder`. Its handler runs inside a unit of work and
       re-reads every product, re-validates, authorizes payment, writes each
       inventory change conditioned on the value it read, and records the
       order. Any exception rolls the whole unit back.

Prices and inventory always come from the stored Product rows; whatever the
client showed the shopper is never used for money.
"""

import json
from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass
from decimal import Decimal
from uuid import uuid4

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import logger, storefront
from storefront.errors import (
    BadRequest,
    InternalError,
    InventoryConflict,
    StorefrontError,
    Unauthorized,
    first_message,
)
from storefront.ordering.order import Order
from storefront.payments import get_authorizer
from storefront.shared.money import from_cents, line_total

CURRENCY = "USD"


@dataclass(frozen=True)
class CartLine:
    product_id: str
    quantity: int


@dataclass(frozen=True)
class CheckoutReceipt:
    order_id: str
    total: Decimal


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------
def normalize_lines(items: Iterable[Mapping] | None) -> list[CartLine]:
    """Validate raw cart items and merge repeated products into one line."""
    if not items:
        raise BadRequest("Your cart is empty")

    quantities: dict[str, int] = {}
    for item in items:
        if not isinstance(item, Mapping):
            raise BadRequest("Malformed cart item")

        product_id = item.get("product_id")
        quantity = item.get("quantity")

        if not isinstance(product_id, str) or not product_id.strip():
            raise BadRequest("Every cart item needs a product id")
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise BadRequest(f"Quantity for product {product_id} must be a positive integer")

        quantities[product_id] = quantities.get(product_id, 0) + quantity

    return [CartLine(product_id=pid, quantity=qty) for pid, qty in quantities.items()]


def validate_against_catalogue(lines: list[CartLine], products: Mapping[str, Product]) -> None:
    """Raise BadRequest for the first problem found.

    Stock is checked on every line before any price is.
    """
    missing = [line.product_id for line in lines if line.product_id not in products]
    if missing:
        raise BadRequest(f"Product not found: {', '.join(missing)}")

    for line in lines:
        product = products[line.product_id]
        if not product.can_supply(line.quantity):
            raise BadRequest(
                f"Insufficient inventory for {product.name}: "
                f"requested {line.quantity}, available {product.inventory}"
            )

    for line in lines:
        product = products[line.product_id]
        if not product.has_valid_price:
            raise BadRequest(f"Invalid price for {product.name}")


# ---------------------------------------------------------------------------
# Command and handler
# ---------------------------------------------------------------------------
@storefront.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {"product_id", "quantity"}
    shipping_address = Text()
    reference = String(max_length=64)


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        lines = [CartLine(**line) for line in json.loads(command.items)]
        product_repo = current_domain.repository_for(Product)

        # Fresh read inside the unit of work; the pre-check may be stale by now
        products = product_repo.find_by_ids(line.product_id for line in lines)
        validate_against_catalogue(lines, products)

        total_cents = sum(line_total(products[line.product_id].price_cents, line.quantity) for line in lines)
        authorization = get_authorizer().authorize(from_cents(total_cents), CURRENCY, command.reference)
        if not authorization.approved:
            raise BadRequest(f"Payment declined: {authorization.decline_reason}")

        purchased = []
        for line in lines:
            product = products[line.product_id]
            observed_inventory = product.inventory
            product.sell(line.quantity)
            product_repo.record_sale(product, observed_inventory)
            purchased.append((str(product.id), product.name, product.price_cents, line.quantity))

        order = Order.place(
            user_id=command.user_id,
            lines=purchased,
            shipping_address=command.shipping_address,
            authorization_id=authorization.authorization_id,
        )
        current_domain.repository_for(Order).add(order)

        return CheckoutReceipt(order_id=str(order.id), total=from_cents(order.total_cents))


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------
def _place_order(command: PlaceOrder) -> CheckoutReceipt:
    return current_domain.process(command, asynchronous=False)


def _explain_conflict(conflict: InventoryConflict, lines: list[CartLine]) -> BadRequest:
    """Describe a lost inventory race using the product's current stock."""
    wanted = next(line.quantity for line in lines if line.product_id == conflict.product_id)
    product = current_domain.repository_for(Product).find_by_ids([conflict.product_id]).get(conflict.product_id)

    if product is None:
        return BadRequest(f"Product not found: {conflict.product_id}")
    if not product.can_supply(wanted):
        return BadRequest(
            f"Insufficient inventory for {product.name}: requested {wanted}, available {product.inventory}"
        )
    return BadRequest(f"Inventory for {product.name} changed during checkout, please try again")


def ensure_signed_in(user_id: str | None) -> str:
    if not user_id:
        raise Unauthorized("You need to sign in to complete your purchase")
    return user_id


def checkout(
    user_id: str | None,
    items: Iterable[Mapping] | None,
    shipping_address: str | None = None,
) -> CheckoutReceipt:
    """Place an order for `user_id`, or raise a StorefrontError with no side effects.

    Never retried automatically: once a real payment step exists a retry
    could charge twice.
    """
    ensure_signed_in(user_id)

    reference = f"chk_{uuid4().hex[:16]}"
    log = logger.bind(user_id=str(user_id), reference=reference)

    try:
        lines = normalize_lines(items)
        log.info("checkout_started", line_count=len(lines))

        products = current_domain.repository_for(Product).find_by_ids(line.product_id for line in lines)
        validate_against_catalogue(lines, products)

        receipt = _place_order(
            PlaceOrder(
                user_id=str(user_id),
                items=json.dumps([asdict(line) for line in lines]),
                shipping_address=shipping_address,
                reference=reference,
            )
        )
    except StorefrontError as exc:
        log.info("checkout_rejected", error_kind=exc.kind, message=exc.message)
        raise
    except InventoryConflict as exc:
        log.warning("inventory_conflict", product_id=exc.product_id)
        error = _explain_conflict(exc, lines)
        log.info("checkout_rejected", error_kind=error.kind, message=error.message)
        raise error from None
    except ValidationError as exc:
        error = BadRequest(first_message(exc.messages))
        log.info("checkout_rejected", error_kind=error.kind, message=error.message)
        raise error from exc
    except Exception as exc:
        log.exception("checkout_failed")
        raise InternalError("Checkout failed") from exc

    log.info("checkout_completed", order_id=receipt.order_id, total=str(receipt.total), line_count=len(lines))
    return receipt
