"""Order identifiers: ``ORD-YYYYMMDD-NNN``.

The date part is the order's calendar day; ``NNN`` is a random suffix in
000-999, so identifiers are only unique per day with high probability. The
checkout checks the store and draws again on a collision.
"""

import random
from datetime import UTC, datetime

ORDER_ID_PREFIX = "ORD"


def generate_order_id(now: datetime | None = None, rng: random.Random | None = None) -> str:
    now = now or datetime.now(UTC)
    suffix = (rng or random).randint(0, 999)
    return f"{ORDER_ID_PREFIX}-{now:%Y%m%d}-{suffix:03d}"
