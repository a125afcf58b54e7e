"""Order notification fan-out.

After an order is stored, the shop owner always gets a new-order alert and
the customer gets a confirmation when they left an email address. Both sends
run concurrently in worker threads and are best-effort: a failure is logged
and reported in the ``FanoutResult``, never raised.
"""

import asyncio
from dataclasses import dataclass
from html import unescape

import structlog

from notifications.channel import get_email_channel
from notifications.channel.email_port import EmailPort
from notifications.templates import get_template
from notifications.types import DeliveryOutcome, NotificationType

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class FanoutResult:
    owner: DeliveryOutcome
    customer: DeliveryOutcome

    @property
    def sends_attempted(self) -> int:
        return sum(outcome != DeliveryOutcome.SKIPPED for outcome in (self.owner, self.customer))


class NotificationFanout:
    def __init__(self, settings, channel: EmailPort | None = None):
        self.settings = settings
        self._channel = channel

    @property
    def channel(self) -> EmailPort:
        return self._channel or get_email_channel()

    def _context(self, order: dict) -> dict:
        return {
            **order,
            "shop_name": self.settings.shop_name,
            "shop_phone": self.settings.shop_phone,
            "shop_address": self.settings.shop_address,
        }

    def _send(self, notification_type: NotificationType, to: str, context: dict) -> DeliveryOutcome:
        content = get_template(notification_type.value).render(context)
        result = self.channel.send(
            to=to,
            subject=content["subject"],
            body=content["body"],
            html_body=content.get("html_body"),
        )
        if result.get("status") != DeliveryOutcome.SENT.value:
            raise RuntimeError(result.get("error") or "Unknown dispatch error")
        return DeliveryOutcome.SENT

    async def _skipped(self) -> DeliveryOutcome:
        return DeliveryOutcome.SKIPPED

    async def dispatch(self, order) -> FanoutResult:
        """Send the owner alert and, if the customer gave an email, their confirmation."""
        payload = order if isinstance(order, dict) else order.to_payload()
        context = self._context(payload)
        order_id = payload.get("order_id")
        customer_email = unescape((payload.get("customer") or {}).get("email") or "")

        owner_send = asyncio.to_thread(
            self._send, NotificationType.NEW_ORDER_ALERT, self.settings.owner_email, context
        )
        if customer_email:
            customer_send = asyncio.to_thread(
                self._send, NotificationType.ORDER_CONFIRMATION, customer_email, context
            )
        else:
            customer_send = self._skipped()

        owner_result, customer_result = await asyncio.gather(owner_send, customer_send, return_exceptions=True)
        result = FanoutResult(
            owner=self._outcome(owner_result, "owner", order_id),
            customer=self._outcome(customer_result, "customer", order_id),
        )
        logger.info(
            "Order notifications dispatched",
            order_id=order_id,
            owner=result.owner.value,
            customer=result.customer.value,
        )
        return result

    @staticmethod
    def _outcome(result, recipient: str, order_id) -> DeliveryOutcome:
        if isinstance(result, BaseException):
            logger.error(
                "Order notification failed",
                order_id=order_id,
                recipient=recipient,
                error=str(result),
            )
            return DeliveryOutcome.FAILED
        return result
