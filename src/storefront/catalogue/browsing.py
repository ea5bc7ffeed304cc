"""Read-side catalogue queries for the store front."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.query import Q

from storefront.catalogue.product import Product
from storefront.errors import BadRequest, NotFound
from storefront.shared.pagination import Page, decode_cursor, paginate, validate_limit

SORT_FIELDS = {
    "price": "price_cents",
    "name": "name",
    "createdAt": "created_at",
}
SORT_ORDERS = ("asc", "desc")


def _matching(query, search: str):
    return query.filter(Q(name__icontains=search) | Q(description__icontains=search) | Q(sku__icontains=search))


def list_products(
    limit: int = 10,
    cursor: str | None = None,
    search: str | None = None,
    min_price_cents: int | None = None,
    max_price_cents: int | None = None,
    sort_by: str = "createdAt",
    sort_order: str = "desc",
    only_active: bool = True,
) -> Page:
    validate_limit(limit, maximum=100)
    if sort_by not in SORT_FIELDS:
        raise BadRequest(f"sortBy must be one of {', '.join(SORT_FIELDS)}")
    if sort_order not in SORT_ORDERS:
        raise BadRequest("sortOrder must be 'asc' or 'desc'")
    offset = decode_cursor(cursor)

    query = current_domain.repository_for(Product)._dao.query
    if only_active:
        query = query.filter(is_active=True)
    if search:
        query = _matching(query, search)
    if min_price_cents is not None:
        query = query.filter(price_cents__gte=min_price_cents)
    if max_price_cents is not None:
        query = query.filter(price_cents__lte=max_price_cents)

    field = SORT_FIELDS[sort_by]
    ordering = field if sort_order == "asc" else f"-{field}"
    results = query.order_by(ordering).offset(offset).limit(limit + 1).all().items

    return paginate(results, offset, limit)


def get_product(product_id: str) -> Product:
    try:
        return current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        raise NotFound("Product not found") from None


def featured_products(limit: int = 5) -> list[Product]:
    """Active products, most expensive first."""
    validate_limit(limit, maximum=10)
    query = current_domain.repository_for(Product)._dao.query
    return query.filter(is_active=True).order_by("-price_cents").limit(limit).all().items


def search_products(text: str, limit: int = 5) -> list[Product]:
    if not text or not text.strip():
        raise BadRequest("Search query must not be empty")
    validate_limit(limit, maximum=20)

    query = current_domain.repository_for(Product)._dao.query.filter(is_active=True)
    return _matching(query, text.strip()).limit(limit).all().items
