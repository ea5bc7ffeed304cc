"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state — no cross-user sharing.
State tracks entity IDs returned by creation endpoints so follow-up
operations can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class StoreOwnerState:
    """Tracks the products a simulated store owner has listed."""

    user_id: str | None = None
    product_ids: list[str] = field(default_factory=list)


@dataclass
class ShopperState:
    """Tracks a simulated shopper from browsing to order history."""

    user_id: str | None = None
    product_ids: list[str] = field(default_factory=list)
    order_ids: list[str] = field(default_factory=list)
    rejected: int = 0
