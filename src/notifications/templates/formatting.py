"""Shared pieces of the order email templates."""


def money(amount) -> str:
    """Rupee amount without trailing zeros: 1600.0 -> ₹1600, 42.5 -> ₹42.50."""
    amount = float(amount or 0)
    if amount.is_integer():
        return f"₹{amount:.0f}"
    return f"₹{amount:.2f}"


def item_line(item: dict) -> str:
    return f"{item.get('name_english')} ({item.get('quantity')}x {item.get('unit')}) - {money(item.get('subtotal'))}"


def text_items(items: list[dict]) -> str:
    return "\n".join(f"- {item_line(item)}" for item in items)


def html_items(items: list[dict]) -> str:
    return "".join(f"<li>{item_line(item)}</li>" for item in items)
