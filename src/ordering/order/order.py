"""Order aggregate: the immutable record of a placed order.

An order is created once at checkout with a snapshot of every line (name,
price, unit and quantity copied from the catalogue at that moment), so later
catalogue edits never change historical orders. Only ``status`` moves after
creation.

State Machine:
    PENDING → CONFIRMED → DELIVERED
    PENDING | CONFIRMED → CANCELLED
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Integer, String, Text, ValueObject

from ordering.domain import ordering


class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.CONFIRMED, OrderStatus.CANCELLED},
    OrderStatus.CONFIRMED: {OrderStatus.DELIVERED, OrderStatus.CANCELLED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@ordering.value_object(part_of="Order")
class CustomerContact:
    """Who receives the order and where, as entered on the checkout form."""

    name = String(required=True, max_length=200)
    phone = String(required=True, max_length=20)
    address = Text(required=True)
    email = String(max_length=254)
    landmark = String(max_length=255)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderLineItem:
    product_id = String(required=True, max_length=100)
    name_english = String(required=True, max_length=200)
    name_hindi = String(max_length=200)
    price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    unit = String(max_length=50)
    subtotal = Float(required=True, min_value=0.0)

    def to_dict(self) -> dict:
        return {
            "product_id": self.product_id,
            "name_english": self.name_english,
            "name_hindi": self.name_hindi,
            "price": self.price,
            "quantity": self.quantity,
            "unit": self.unit,
            "subtotal": self.subtotal,
        }


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    order_id = String(identifier=True, max_length=20)
    user_id = String(required=True, max_length=128)
    customer = ValueObject(CustomerContact)
    items = HasMany(OrderLineItem)
    delivery_slot = String(required=True, max_length=100)
    special_instructions = Text()
    payment_method = String(max_length=50, default="Cash on Delivery")
    subtotal = Float(required=True, min_value=0.0)
    delivery_charge = Float(default=0.0, min_value=0.0)
    total = Float(required=True)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def total_must_be_positive(self):
        if self.total is not None and self.total <= 0:
            raise ValidationError({"total": ["Invalid order total"]})

    @invariant.post
    def total_must_equal_subtotal_plus_delivery(self):
        if self.total is None or self.subtotal is None:
            return
        if round(self.subtotal + (self.delivery_charge or 0.0), 2) != round(self.total, 2):
            raise ValidationError({"total": ["Order total must equal subtotal plus delivery charge"]})

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        order_id,
        user_id,
        customer,
        items,
        delivery_slot,
        subtotal,
        delivery_charge,
        total,
        special_instructions=None,
        payment_method="Cash on Delivery",
        created_at=None,
    ):
        """Build a pending order.

        Args:
            customer: Dict with name, phone, address and optional email, landmark.
            items: List of dicts with product_id, name_english, name_hindi,
                   price, quantity, unit and subtotal.
        """
        if not items:
            raise ValidationError({"items": ["Order must contain at least one item"]})
        if total is None or total <= 0:
            raise ValidationError({"total": ["Invalid order total"]})
        if subtotal is not None and round(subtotal + (delivery_charge or 0.0), 2) != round(total, 2):
            raise ValidationError({"total": ["Order total must equal subtotal plus delivery charge"]})

        now = created_at or datetime.now(UTC)
        return cls(
            order_id=order_id,
            user_id=user_id,
            customer=CustomerContact(**customer),
            items=[OrderLineItem(**item) for item in items],
            delivery_slot=delivery_slot,
            special_instructions=special_instructions,
            payment_method=payment_method,
            subtotal=subtotal,
            delivery_charge=delivery_charge,
            total=total,
            status=OrderStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )

    # -------------------------------------------------------------------
    # Status transitions
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def transition_to(self, status):
        target = OrderStatus(status)
        self._assert_can_transition(target)
        self.status = target.value
        self.updated_at = datetime.now(UTC)

    def confirm(self):
        self.transition_to(OrderStatus.CONFIRMED)

    def mark_delivered(self):
        self.transition_to(OrderStatus.DELIVERED)

    def cancel(self):
        self.transition_to(OrderStatus.CANCELLED)

    # -------------------------------------------------------------------
    # Representation
    # -------------------------------------------------------------------
    def to_payload(self) -> dict:
        customer = self.customer
        return {
            "order_id": self.order_id,
            "user_id": self.user_id,
            "customer": {
                "name": customer.name,
                "phone": customer.phone,
                "address": customer.address,
                "email": customer.email,
                "landmark": customer.landmark,
            },
            "items": [item.to_dict() for item in self.items],
            "delivery_slot": self.delivery_slot,
            "special_instructions": self.special_instructions,
            "payment_method": self.payment_method,
            "subtotal": self.subtotal,
            "delivery_charge": self.delivery_charge,
            "total": self.total,
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
