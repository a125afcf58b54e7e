"""Faker-based data generators for the storefront Locust scenarios.

Checkout forms pass the storefront's form rules: Indian mobile numbers
starting 6-9, an address of at least 10 characters and one of the default
delivery slots.
"""

import random
import uuid

from faker import Faker

fake = Faker("en_IN")

DELIVERY_SLOTS = (
    "Morning (7 AM - 10 AM)",
    "Afternoon (12 PM - 3 PM)",
    "Evening (5 PM - 8 PM)",
)

SEARCH_TERMS = ("milk", "ghee", "dahi", "paneer", "दूध", "तूप")
SORT_OPTIONS = ("price-asc", "price-desc", "name", None)


def session_id() -> str:
    return f"lt-{uuid.uuid4().hex[:12]}"


def client_ip() -> str:
    """A private address so each simulated user gets its own rate-limit window."""
    return f"10.{random.randint(0, 255)}.{random.randint(0, 255)}.{random.randint(1, 254)}"


def mobile_number() -> str:
    return f"{random.choice('6789')}{random.randint(0, 999_999_999):09d}"


def checkout_data(with_email: bool | None = None) -> dict:
    """CheckoutRequest payload."""
    if with_email is None:
        with_email = random.random() < 0.6
    payload = {
        "name": fake.name()[:100],
        "phone": mobile_number(),
        "address": fake.address().replace("\n", ", ")[:250],
        "delivery_slot": random.choice(DELIVERY_SLOTS),
    }
    if with_email:
        payload["email"] = f"{fake.user_name()[:20]}.{uuid.uuid4().hex[:4]}@example.com"
    if random.random() < 0.3:
        payload["special_instructions"] = fake.sentence(nb_words=6)
    return payload


def cart_item_data(product_ids: list[str]) -> dict:
    """AddToCartRequest payload for one of the listed products."""
    return {"product_id": random.choice(product_ids), "quantity": random.randint(1, 3)}


def product_query() -> dict:
    params = {}
    if random.random() < 0.4:
        params["q"] = random.choice(SEARCH_TERMS)
    sort = random.choice(SORT_OPTIONS)
    if sort:
        params["sort"] = sort
    return params
