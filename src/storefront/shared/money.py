"""Fixed-point money handling.

Amounts are stored as integer minor units (cents). Conversion to and from
``Decimal`` happens once, at the API edge.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENT = Decimal("0.01")


def to_cents(amount: Decimal | str | int) -> int:
    """Convert a decimal amount to integer cents, rounding half-up."""
    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
        if not value.is_finite():
            raise InvalidOperation
        return int(value.quantize(CENT, rounding=ROUND_HALF_UP) * 100)
    except InvalidOperation:
        raise ValueError(f"Not a valid amount: {amount!r}") from None


def from_cents(cents: int) -> Decimal:
    """Convert integer cents back to a two-place decimal amount."""
    return (Decimal(cents) / 100).quantize(CENT)


def line_total(unit_price_cents: int, quantity: int) -> int:
    return unit_price_cents * quantity
