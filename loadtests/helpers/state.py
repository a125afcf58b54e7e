"""Per-user state for Locust scenarios. Nothing is shared between users."""

from dataclasses import dataclass, field


@dataclass
class CartState:
    session_id: str
    product_ids: list[str] = field(default_factory=list)
    in_cart: list[str] = field(default_factory=list)


@dataclass
class CheckoutBurstState:
    """Counts checkout attempts from one simulated client address."""

    client_ip: str
    attempts: int = 0
    throttled: int = 0
