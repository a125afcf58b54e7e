"""Storefront settings, read from the environment.

Every knob has a default matching the shop's current setup, so a bare
environment (tests, local dev) behaves like production minus the secrets.
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache

DEFAULT_DELIVERY_SLOTS = (
    "Morning (7 AM - 10 AM)",
    "Afternoon (12 PM - 3 PM)",
    "Evening (5 PM - 8 PM)",
)


def _float_env(name: str, default: float | None) -> float | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return float(raw)


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


@dataclass(frozen=True)
class StoreSettings:
    shop_name: str = "OM Yashoda Dairy"
    shop_phone: str = "+91 9320056114"
    shop_address: str = "Kalyan West, Maharashtra"

    # --- Delivery & pricing ---
    delivery_charge: float = 0.0
    free_delivery_threshold: float | None = None  # None: flat charge for every order
    min_order_amount: float = 50.0
    delivery_slots: tuple[str, ...] = field(default=DEFAULT_DELIVERY_SLOTS)
    max_item_quantity: int = 99
    payment_method: str = "Cash on Delivery"

    # --- Order submission rate limiting ---
    rate_limit_max_requests: int = 5
    rate_limit_window_seconds: float = 60 * 60
    rate_limit_max_keys: int = 10_000

    # --- Order identifiers ---
    order_id_max_attempts: int = 5

    # --- Authentication ---
    firebase_api_key: str = ""
    environment: str = "development"

    # --- Email ---
    owner_email: str = "owner@omyashodadairy.com"
    from_email: str = "orders@omyashodadairy.com"
    resend_api_key: str = ""

    @classmethod
    def from_env(cls) -> "StoreSettings":
        slots = os.getenv("DELIVERY_SLOTS")
        return cls(
            shop_name=os.getenv("SHOP_NAME", cls.shop_name),
            shop_phone=os.getenv("SHOP_OWNER_PHONE", cls.shop_phone),
            shop_address=os.getenv("SHOP_ADDRESS", cls.shop_address),
            delivery_charge=_float_env("DELIVERY_CHARGE", cls.delivery_charge),
            free_delivery_threshold=_float_env("FREE_DELIVERY_THRESHOLD", None),
            min_order_amount=_float_env("MIN_ORDER_AMOUNT", cls.min_order_amount),
            delivery_slots=(
                tuple(s.strip() for s in slots.split("|") if s.strip()) if slots else DEFAULT_DELIVERY_SLOTS
            ),
            max_item_quantity=_int_env("MAX_ITEM_QUANTITY", cls.max_item_quantity),
            rate_limit_max_requests=_int_env("RATE_LIMIT_MAX_REQUESTS", cls.rate_limit_max_requests),
            rate_limit_window_seconds=_float_env("RATE_LIMIT_WINDOW_SECONDS", cls.rate_limit_window_seconds),
            rate_limit_max_keys=_int_env("RATE_LIMIT_MAX_KEYS", cls.rate_limit_max_keys),
            order_id_max_attempts=_int_env("ORDER_ID_MAX_ATTEMPTS", cls.order_id_max_attempts),
            owner_email=os.getenv("SHOP_OWNER_EMAIL", cls.owner_email),
            from_email=os.getenv("RESEND_FROM_EMAIL", cls.from_email),
            resend_api_key=os.getenv("RESEND_API_KEY", ""),
            firebase_api_key=os.getenv("FIREBASE_API_KEY", ""),
            environment=os.getenv("PROTEAN_ENV", cls.environment).lower(),
        )


@lru_cache(maxsize=1)
def get_settings() -> StoreSettings:
    """Process-wide settings, loaded once from the environment."""
    return StoreSettings.from_env()
