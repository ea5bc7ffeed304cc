"""Pydantic request/response schemas for the Ordering API."""

from datetime import datetime
from decimal import Decimal

from storefront.shared.schemas import ApiModel


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class CheckoutItemInput(ApiModel):
    product_id: str
    quantity: int


class CheckoutRequest(ApiModel):
    items: list[CheckoutItemInput]
    shipping_address: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "items": [{"productId": "6f1c...", "quantity": 2}],
                    "shippingAddress": "12 Harbour Road, Portsmouth",
                }
            ]
        }
    }


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class CheckoutResponse(ApiModel):
    order_id: str
    total: Decimal


class OrderItemResponse(ApiModel):
    product_id: str
    name: str
    price: Decimal
    quantity: int


class OrderResponse(ApiModel):
    id: str
    user_id: str
    status: str
    payment_status: str
    total: Decimal
    shipping_address: str | None = None
    created_at: datetime | None = None
    items: list[OrderItemResponse]


class OrderPageResponse(ApiModel):
    items: list[OrderResponse]
    next_cursor: str | None = None
