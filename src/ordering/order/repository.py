"""Repository for the Order aggregate."""

from ordering.domain import ordering
from ordering.order.order import Order

ORDER_HISTORY_LIMIT = 50


@ordering.repository(part_of=Order)
class OrderRepository:
    def find_for_user(self, user_id: str, limit: int = ORDER_HISTORY_LIMIT) -> list[Order]:
        """A user's orders, newest first."""
        return self._dao.query.filter(user_id=user_id).order_by("-created_at").limit(limit).all().items
