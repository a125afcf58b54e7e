"""Order store: the narrow persistence interface checkout depends on.

``OrderStore`` is the port; ``RepositoryOrderStore`` backs it with the
domain's ``Order`` repository and whatever provider the domain is configured
with. Failures from the underlying provider surface as ``PersistenceError``
with the original exception chained.
"""

from abc import ABC, abstractmethod

import structlog
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from ordering.exceptions import NotFoundError, PersistenceError
from ordering.order.order import Order
from ordering.order.repository import ORDER_HISTORY_LIMIT

logger = structlog.get_logger(__name__)


class OrderStore(ABC):
    @abstractmethod
    def create(self, order: Order) -> str:
        """Write a new order once and return its identifier."""

    @abstractmethod
    def get(self, order_id: str) -> Order | None:
        """Fetch an order, ``None`` when it does not exist."""

    @abstractmethod
    def exists(self, order_id: str) -> bool: ...

    @abstractmethod
    def for_user(self, user_id: str, limit: int = ORDER_HISTORY_LIMIT) -> list[Order]:
        """A user's orders, newest first."""

    @abstractmethod
    def update_status(self, order_id: str, status: str) -> Order: ...


class RepositoryOrderStore(OrderStore):
    def __init__(self, repository=None):
        self._repository = repository

    @property
    def repository(self):
        return self._repository or current_domain.repository_for(Order)

    def create(self, order: Order) -> str:
        try:
            self.repository.add(order)
        except ValidationError:
            raise
        except Exception as exc:
            logger.error("Order write failed", order_id=order.order_id, error=str(exc))
            raise PersistenceError() from exc
        logger.info("Order stored", order_id=order.order_id, total=order.total)
        return order.order_id

    def get(self, order_id: str) -> Order | None:
        try:
            return self.repository.get(order_id)
        except ObjectNotFoundError:
            return None
        except Exception as exc:
            logger.error("Order read failed", order_id=order_id, error=str(exc))
            raise PersistenceError() from exc

    def exists(self, order_id: str) -> bool:
        return self.get(order_id) is not None

    def for_user(self, user_id: str, limit: int = ORDER_HISTORY_LIMIT) -> list[Order]:
        try:
            return self.repository.find_for_user(user_id, limit=limit)
        except Exception as exc:
            logger.error("Order history read failed", user_id=user_id, error=str(exc))
            raise PersistenceError() from exc

    def update_status(self, order_id: str, status: str) -> Order:
        order = self.get(order_id)
        if order is None:
            raise NotFoundError("Order not found")
        order.transition_to(status)
        try:
            self.repository.add(order)
        except Exception as exc:
            logger.error("Order status write failed", order_id=order_id, error=str(exc))
            raise PersistenceError() from exc
        logger.info("Order status updated", order_id=order_id, status=order.status)
        return order
