"""Presence and shape checks for a submitted order payload.

Every rule is evaluated; the result lists one message per violated rule so
the caller can show all of them at once.
"""

from dataclasses import dataclass, field
from numbers import Number


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    errors: list[str] = field(default_factory=list)


def _present(value) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def validate_order_payload(payload: dict) -> ValidationResult:
    errors = []

    if not _present(payload.get("order_id")):
        errors.append("Order ID is required")

    if not _present(payload.get("user_id")):
        errors.append("User ID is required")

    customer = payload.get("customer")
    if not customer:
        errors.append("Customer details are required")

    items = payload.get("items")
    if not items:
        errors.append("Order must contain at least one item")

    if customer:
        if not _present(customer.get("name")):
            errors.append("Customer name is required")
        if not _present(customer.get("phone")):
            errors.append("Customer phone is required")
        if not _present(customer.get("address")):
            errors.append("Customer address is required")

    total = payload.get("total")
    if isinstance(total, bool) or not isinstance(total, Number) or not total > 0:
        errors.append("Invalid order total")

    return ValidationResult(is_valid=not errors, errors=errors)
