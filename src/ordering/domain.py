"""Ordering bounded context: product catalogue, shopping cart and checkout.

Owns the read-only product catalogue, the per-session shopping cart, the
checkout flow that turns a cart into an immutable order record, and the
order history a signed-in customer can look up.
"""

from protean.domain import Domain

from ordering.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

ordering = Domain(name="ordering")
