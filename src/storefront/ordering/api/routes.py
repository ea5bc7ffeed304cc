"""FastAPI routes for checkout and order history."""

from fastapi import APIRouter, Depends

from storefront.identity.dependencies import current_user_id
from storefront.ordering.api.schemas import (
    CheckoutRequest,
    CheckoutResponse,
    OrderItemResponse,
    OrderPageResponse,
    OrderResponse,
)
from storefront.ordering.checkout import checkout, ensure_signed_in
from storefront.ordering.history import DEFAULT_LIMIT, get_my_orders, get_order
from storefront.ordering.order import Order
from storefront.shared.money import from_cents

order_router = APIRouter(prefix="/orders", tags=["orders"])


def _order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        id=str(order.id),
        user_id=str(order.user_id),
        status=order.status,
        payment_status=order.payment_status,
        total=from_cents(order.total_cents),
        shipping_address=order.shipping_address,
        created_at=order.created_at,
        items=[
            OrderItemResponse(
                product_id=str(item.product_id),
                name=item.name,
                price=from_cents(item.price_cents),
                quantity=item.quantity,
            )
            for item in order.items
        ],
    )


def shopper_id(user_id: str | None = Depends(current_user_id)) -> str:
    """Refuse anonymous shoppers before the request body is validated."""
    return ensure_signed_in(user_id)


@order_router.post("/checkout", status_code=201, response_model=CheckoutResponse)
async def place_order(body: CheckoutRequest, user_id: str = Depends(shopper_id)) -> CheckoutResponse:
    # Unparseable JSON is rejected before dependencies run, so it stays a 400
    receipt = checkout(
        user_id,
        [item.model_dump() for item in body.items],
        shipping_address=body.shipping_address,
    )
    return CheckoutResponse(order_id=receipt.order_id, total=receipt.total)


@order_router.get("", response_model=OrderPageResponse)
async def my_orders(
    limit: int = DEFAULT_LIMIT,
    cursor: str | None = None,
    status: str | None = None,
    user_id: str | None = Depends(current_user_id),
) -> OrderPageResponse:
    page = get_my_orders(user_id, limit=limit, cursor=cursor, status=status)
    return OrderPageResponse(
        items=[_order_response(order) for order in page.items],
        next_cursor=page.next_cursor,
    )


@order_router.get("/{order_id}", response_model=OrderResponse)
async def order_detail(order_id: str, user_id: str | None = Depends(current_user_id)) -> OrderResponse:
    return _order_response(get_order(user_id, order_id))
