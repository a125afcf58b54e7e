"""Shopping Cart aggregate: the items a visitor has picked, held in one named slot.

A cart is keyed by its slot name (the browser session key) and is read and
written as a whole on every mutation. It knows nothing about prices or stock;
``CartEngine`` joins it with the catalogue.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Integer, String

from ordering.domain import ordering

# Default per-line cap; the storefront passes its configured cap to each change.
MAX_ITEM_QUANTITY = 99


@ordering.entity(part_of="ShoppingCart")
class CartItem:
    product_id = String(required=True, max_length=100)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@ordering.aggregate
class ShoppingCart:
    session_id = String(identifier=True, max_length=255)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, session_id):
        now = datetime.now(UTC)
        return cls(session_id=session_id, created_at=now, updated_at=now)

    def find(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def add_item(self, product_id, quantity=1, max_quantity=MAX_ITEM_QUANTITY):
        """Add ``quantity`` of a product, merging with an existing line.

        The stored quantity saturates at ``max_quantity``.
        """
        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be a positive whole number"]})

        now = datetime.now(UTC)
        existing = self.find(product_id)
        if existing:
            existing.quantity = min(existing.quantity + quantity, max_quantity)
            line = existing
        else:
            line = CartItem(
                product_id=str(product_id),
                quantity=min(quantity, max_quantity),
                added_at=now,
            )
            self.add_items(line)

        self.updated_at = now
        return line

    def set_quantity(self, product_id, quantity, max_quantity=MAX_ITEM_QUANTITY):
        """Set a line's quantity, clamped to ``[1, max_quantity]``.

        Returns ``None`` when the product has no line in the cart.
        """
        item = self.find(product_id)
        if item is None:
            return None
        item.quantity = max(1, min(quantity, max_quantity))
        self.updated_at = datetime.now(UTC)
        return item

    def remove_item(self, product_id) -> bool:
        item = self.find(product_id)
        if item is None:
            return False
        self.remove_items(item)
        self.updated_at = datetime.now(UTC)
        return True

    def clear(self):
        for item in list(self.items):
            self.remove_items(item)
        self.updated_at = datetime.now(UTC)
