"""Order confirmation template: sent to the customer when they gave an email."""

from html import unescape

from notifications.templates.formatting import html_items, money, text_items
from notifications.types import NotificationType


class OrderConfirmationTemplate:
    notification_type = NotificationType.ORDER_CONFIRMATION.value

    @staticmethod
    def render(context: dict) -> dict:
        order_id = context.get("order_id", "N/A")
        customer = context.get("customer") or {}
        items = context.get("items") or []
        total = money(context.get("total"))
        slot = context.get("delivery_slot", "")
        payment = context.get("payment_method", "Cash on Delivery")
        shop_name = context.get("shop_name", "")
        shop_phone = context.get("shop_phone", "")
        shop_address = context.get("shop_address", "")

        body = (
            f"Dear {customer.get('name', '')},\n\n"
            "Thank you for your order! We've received it and will prepare it fresh for delivery.\n\n"
            f"Order #{order_id}\n"
            f"Delivery Slot: {slot}\n"
            f"Delivery Address: {customer.get('address', '')}\n\n"
            f"Items:\n{text_items(items)}\n\n"
            f"Total: {total}\n"
            f"Payment: {payment}\n\n"
            f"If you have any questions, please contact us at {shop_phone}\n\n"
            f"{shop_name}\n{shop_address}"
        )

        html_body = (
            "<!DOCTYPE html><html><body>"
            "<h1>🥛 Order Confirmed!</h1>"
            f"<p>Dear {customer.get('name', '')},</p>"
            "<p>Thank you for your order! We've received it and will prepare it fresh for delivery.</p>"
            f"<h3>Order #{order_id}</h3>"
            f"<p><strong>Delivery Slot:</strong> {slot}</p>"
            f"<p><strong>Delivery Address:</strong><br>{customer.get('address', '')}</p>"
            "<h4>Items:</h4>"
            f"<ul>{html_items(items)}</ul>"
            f'<p class="total">Total: {total}</p>'
            f"<p><strong>Payment:</strong> {payment}</p>"
            f"<p>If you have any questions, please contact us at {shop_phone}</p>"
            f"<p>{shop_name}<br>{shop_address}</p>"
            "</body></html>"
        )

        # Stored order fields are HTML-escaped; plain-text bodies show them as typed.
        return {
            "subject": f"Order Confirmed - {order_id}",
            "body": unescape(body),
            "html_body": html_body,
        }
