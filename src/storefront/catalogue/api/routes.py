"""FastAPI routes for the Catalogue — store-front browsing and owner CRUD."""

from decimal import Decimal

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from storefront.catalogue.api.schemas import (
    ProductIdResponse,
    ProductInput,
    ProductPageResponse,
    ProductResponse,
    StatusResponse,
)
from storefront.catalogue.browsing import featured_products, get_product, list_products, search_products
from storefront.catalogue.management import CreateProduct, DeleteProduct, UpdateProduct
from storefront.catalogue.product import Product
from storefront.identity.dependencies import require_user_id
from storefront.shared.money import from_cents, to_cents

product_router = APIRouter(prefix="/products", tags=["products"])


def _product_response(product: Product) -> ProductResponse:
    return ProductResponse(
        id=str(product.id),
        name=product.name,
        description=product.description,
        sku=product.sku,
        price=from_cents(product.price_cents),
        inventory=product.inventory,
        is_active=product.is_active,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


# --- Store front ---


@product_router.get("", response_model=ProductPageResponse)
async def browse_products(
    limit: int = 10,
    cursor: str | None = None,
    search: str | None = None,
    min_price: Decimal | None = Query(default=None, alias="minPrice"),
    max_price: Decimal | None = Query(default=None, alias="maxPrice"),
    sort_by: str = Query(default="createdAt", alias="sortBy"),
    sort_order: str = Query(default="desc", alias="sortOrder"),
    only_active: bool = Query(default=True, alias="onlyActive"),
) -> ProductPageResponse:
    page = list_products(
        limit=limit,
        cursor=cursor,
        search=search,
        min_price_cents=to_cents(min_price) if min_price is not None else None,
        max_price_cents=to_cents(max_price) if max_price is not None else None,
        sort_by=sort_by,
        sort_order=sort_order,
        only_active=only_active,
    )
    return ProductPageResponse(
        items=[_product_response(product) for product in page.items],
        next_cursor=page.next_cursor,
    )


@product_router.get("/featured", response_model=list[ProductResponse])
async def featured(limit: int = 5) -> list[ProductResponse]:
    return [_product_response(product) for product in featured_products(limit=limit)]


@product_router.get("/search", response_model=list[ProductResponse])
async def search(q: str = "", limit: int = 5) -> list[ProductResponse]:
    return [_product_response(product) for product in search_products(q, limit=limit)]


@product_router.get("/{product_id}", response_model=ProductResponse)
async def product_detail(product_id: str) -> ProductResponse:
    return _product_response(get_product(product_id))


# --- Store owner ---


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def create_product(body: ProductInput, user_id: str = Depends(require_user_id)) -> ProductIdResponse:
    command = CreateProduct(
        name=body.name,
        description=body.description,
        sku=body.sku,
        price_cents=to_cents(body.price),
        inventory=body.inventory,
        is_active=body.is_active,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.put("/{product_id}", response_model=ProductIdResponse)
async def update_product(
    product_id: str, body: ProductInput, user_id: str = Depends(require_user_id)
) -> ProductIdResponse:
    command = UpdateProduct(
        product_id=product_id,
        name=body.name,
        description=body.description,
        sku=body.sku,
        price_cents=to_cents(body.price),
        inventory=body.inventory,
        is_active=body.is_active,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.delete("/{product_id}", response_model=StatusResponse)
async def delete_product(product_id: str, user_id: str = Depends(require_user_id)) -> StatusResponse:
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return StatusResponse()
