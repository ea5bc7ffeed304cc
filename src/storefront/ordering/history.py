"""Order history — the read side of the order store."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.errors import BadRequest, NotFound, Unauthorized
from storefront.ordering.order import Order, OrderStatus
from storefront.shared.pagination import Page, decode_cursor, paginate, validate_limit

DEFAULT_LIMIT = 10
MAX_LIMIT = 100


def get_my_orders(
    user_id: str | None,
    limit: int = DEFAULT_LIMIT,
    cursor: str | None = None,
    status: str | None = None,
) -> Page:
    """List the caller's orders, newest first.

    Anonymous callers get an empty page rather than an error. Any other
    failure (bad arguments, store errors) is raised.
    """
    if not user_id:
        return Page(items=[], next_cursor=None)

    validate_limit(limit, maximum=MAX_LIMIT)
    if status is not None and status not in {s.value for s in OrderStatus}:
        raise BadRequest(f"Unknown order status: {status}")
    offset = decode_cursor(cursor)

    criteria = {"user_id": str(user_id)}
    if status is not None:
        criteria["status"] = status

    results = (
        current_domain.repository_for(Order)
        ._dao.query.filter(**criteria)
        .order_by("-created_at")
        .offset(offset)
        .limit(limit + 1)
        .all()
        .items
    )
    return paginate(results, offset, limit)


def get_order(user_id: str | None, order_id: str) -> Order:
    """Fetch one of the caller's orders. Other users' orders look missing."""
    if not user_id:
        raise Unauthorized("You need to sign in to view this order")

    try:
        order = current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        raise NotFound("Order not found") from None

    if str(order.user_id) != str(user_id):
        raise NotFound("Order not found")
    return order
