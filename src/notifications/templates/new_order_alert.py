"""New order alert template: sent to the shop owner for every order."""

from html import unescape

from notifications.templates.formatting import html_items, money, text_items
from notifications.types import NotificationType


class NewOrderAlertTemplate:
    notification_type = NotificationType.NEW_ORDER_ALERT.value

    @staticmethod
    def render(context: dict) -> dict:
        order_id = context.get("order_id", "N/A")
        customer = context.get("customer") or {}
        items = context.get("items") or []
        total = money(context.get("total"))
        slot = context.get("delivery_slot", "")
        payment = context.get("payment_method", "Cash on Delivery")
        placed_at = context.get("created_at", "")
        landmark = customer.get("landmark")
        instructions = context.get("special_instructions")

        body_lines = [
            f"New order {order_id}",
            f"Time: {placed_at}",
            "",
            "Customer Details:",
            f"Name: {customer.get('name', '')}",
            f"Phone: {customer.get('phone', '')}",
            f"Address: {customer.get('address', '')}",
        ]
        if landmark:
            body_lines.append(f"Landmark: {landmark}")
        body_lines += ["", "Items:", text_items(items), "", f"Total: {total}", "", f"Delivery: {slot}", f"Payment: {payment}"]
        if instructions:
            body_lines += ["", f"Note: {instructions}"]

        html_body = (
            "<!DOCTYPE html><html><body>"
            "<h1>🛒 NEW ORDER!</h1>"
            f"<h3>Order #{order_id}</h3>"
            f"<p><strong>Time:</strong> {placed_at}</p>"
            "<h4>Customer Details:</h4>"
            "<p>"
            f"<strong>Name:</strong> {customer.get('name', '')}<br>"
            f"<strong>Phone:</strong> {customer.get('phone', '')}<br>"
            f"<strong>Address:</strong> {customer.get('address', '')}"
            + (f"<br><strong>Landmark:</strong> {landmark}" if landmark else "")
            + "</p>"
            "<h4>Items:</h4>"
            f"<ul>{html_items(items)}</ul>"
            f'<p class="total">Total: {total}</p>'
            f"<p><strong>Delivery Slot:</strong> {slot}<br><strong>Payment:</strong> {payment}</p>"
            + (f"<p><strong>Special Instructions:</strong> {instructions}</p>" if instructions else "")
            + "</body></html>"
        )

        # Stored order fields are HTML-escaped; plain-text bodies show them as typed.
        return {
            "subject": f"🛒 NEW ORDER - {order_id}",
            "body": unescape("\n".join(body_lines)),
            "html_body": html_body,
        }
