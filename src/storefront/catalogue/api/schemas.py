"""Pydantic request/response schemas for the Catalogue API.

These are external contracts (anti-corruption layer) — separate from
internal Protean commands. Prices travel as decimals and are converted to
cents before they reach a command.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import Field

from storefront.shared.schemas import ApiModel


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class ProductInput(ApiModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    price: Decimal = Field(ge=0, max_digits=12, decimal_places=2)
    sku: str | None = Field(default=None, max_length=50)
    inventory: int = Field(ge=0)
    is_active: bool = True

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Walnut Desk Organizer",
                    "description": "Hand-finished walnut tray with three compartments",
                    "price": "49.00",
                    "sku": "DESK-ORG-001",
                    "inventory": 25,
                    "isActive": True,
                }
            ]
        }
    }


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class ProductResponse(ApiModel):
    id: str
    name: str
    description: str | None = None
    sku: str | None = None
    price: Decimal
    inventory: int
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProductPageResponse(ApiModel):
    items: list[ProductResponse]
    next_cursor: str | None = None


class ProductIdResponse(ApiModel):
    product_id: str


class StatusResponse(ApiModel):
    status: str = "ok"
