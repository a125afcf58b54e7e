"""Checkout form: field checks and markup escaping.

``clean_checkout_form`` validates every field, collects all failures into a
single ``ValidationError`` and, on success, returns a copy of the form with
every string trimmed and HTML-escaped so it is safe to render in emails and
the order history page.
"""

import re
from dataclasses import dataclass, replace

from protean.exceptions import ValidationError

from ordering.config import StoreSettings, get_settings

PHONE_PATTERN = re.compile(r"^(\+91|91)?[6-9]\d{9}$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

MIN_NAME_LENGTH = 2
MIN_ADDRESS_LENGTH = 10

_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#x27;",
    "/": "&#x2F;",
}
_ESCAPE_PATTERN = re.compile("[&<>\"'/]")


def sanitize_input(value: str | None) -> str:
    """Escape ``& < > " ' /`` as HTML entities. ``None`` becomes an empty string."""
    if not value:
        return ""
    return _ESCAPE_PATTERN.sub(lambda match: _ESCAPES[match.group(0)], value)


def is_valid_phone(phone: str | None) -> bool:
    return bool(phone) and PHONE_PATTERN.match(phone) is not None


def is_valid_email(email: str | None) -> bool:
    return bool(email) and EMAIL_PATTERN.match(email) is not None


@dataclass(frozen=True)
class CheckoutForm:
    name: str
    phone: str
    address: str
    delivery_slot: str
    email: str | None = None
    landmark: str | None = None
    special_instructions: str | None = None

    def customer(self) -> dict:
        return {
            "name": self.name,
            "phone": self.phone,
            "address": self.address,
            "email": self.email or None,
            "landmark": self.landmark or None,
        }


def _strip(value: str | None) -> str:
    return value.strip() if value else ""


def clean_checkout_form(form: CheckoutForm, settings: StoreSettings | None = None) -> CheckoutForm:
    settings = settings or get_settings()
    name = _strip(form.name)
    phone = _strip(form.phone)
    email = _strip(form.email)
    address = _strip(form.address)
    slot = _strip(form.delivery_slot)

    errors = {}
    if len(name) < MIN_NAME_LENGTH:
        errors["name"] = ["Please enter your full name"]
    if not is_valid_phone(phone):
        errors["phone"] = ["Please enter a valid 10-digit mobile number"]
    if email and not is_valid_email(email):
        errors["email"] = ["Please enter a valid email address"]
    if len(address) < MIN_ADDRESS_LENGTH:
        errors["address"] = ["Please enter a complete delivery address"]
    if slot not in settings.delivery_slots:
        errors["delivery_slot"] = ["Please select a delivery time slot"]

    if errors:
        raise ValidationError(errors)

    # Delivery slot is matched against the fixed list and stored as-is.
    return replace(
        form,
        name=sanitize_input(name),
        phone=sanitize_input(phone),
        email=sanitize_input(email) or None,
        address=sanitize_input(address),
        delivery_slot=slot,
        landmark=sanitize_input(_strip(form.landmark)) or None,
        special_instructions=sanitize_input(_strip(form.special_instructions)) or None,
    )
