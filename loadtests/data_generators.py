"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the API's validation rules and
use the camelCase field names of the request schemas.
"""

import os
import random
import uuid

from faker import Faker

from storefront.identity import DEVELOPMENT_SECRET
from storefront.identity.signed_adapter import SignedSessionVerifier

fake = Faker()

_verifier = SignedSessionVerifier(os.environ.get("SESSION_SECRET") or DEVELOPMENT_SECRET)


# ---------- Identity ----------


def user_id() -> str:
    """Generate unique user ids like 'user-lt-a1b2c3d4'."""
    return f"user-lt-{uuid.uuid4().hex[:8]}"


def auth_headers(uid: str) -> dict:
    """Authorization header signed with the server's session secret."""
    return {"Authorization": f"Bearer {_verifier.issue(uid)}"}


# ---------- Catalogue ----------


def valid_sku(prefix: str = "LT") -> str:
    """Generate SKUs like 'LT-1A2B3C4D' (under the 50-char limit)."""
    return f"{prefix}-{uuid.uuid4().hex[:8].upper()}"


def product_data(inventory: int | None = None) -> dict:
    """Generate a ProductInput payload."""
    word = fake.word().capitalize()
    return {
        "name": f"{word} {fake.word()} {uuid.uuid4().hex[:4]}"[:255],
        "description": fake.sentence(nb_words=12),
        "price": f"{random.randint(100, 50000) / 100:.2f}",
        "sku": valid_sku("PROD"),
        "inventory": inventory if inventory is not None else random.randint(5, 500),
        "isActive": True,
    }


def search_term() -> str:
    return random.choice(["lamp", "mug", "linen", "brass", "oak", fake.word()])


# ---------- Ordering ----------


def checkout_data(product_ids: list[str], max_quantity: int = 3) -> dict:
    """Generate a checkout payload over a random subset of `product_ids`."""
    chosen = random.sample(product_ids, k=random.randint(1, min(3, len(product_ids))))
    return {
        "items": [{"productId": pid, "quantity": random.randint(1, max_quantity)} for pid in chosen],
        "shippingAddress": fake.address().replace("\n", ", "),
    }
