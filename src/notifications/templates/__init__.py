"""Template registry: maps NotificationType to template classes.

Each template renders ``subject``, a plain-text ``body`` and an
``html_body`` from an order context dict.
"""

from notifications.templates.new_order_alert import NewOrderAlertTemplate
from notifications.templates.order_confirmation import OrderConfirmationTemplate
from notifications.types import NotificationType

TEMPLATE_REGISTRY: dict[str, type] = {
    NotificationType.NEW_ORDER_ALERT.value: NewOrderAlertTemplate,
    NotificationType.ORDER_CONFIRMATION.value: OrderConfirmationTemplate,
}


def get_template(notification_type: str):
    """Look up a template class by notification type string."""
    template_cls = TEMPLATE_REGISTRY.get(notification_type)
    if template_cls is None:
        raise ValueError(f"No template registered for notification type: {notification_type}")
    return template_cls
