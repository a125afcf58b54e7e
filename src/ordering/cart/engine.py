"""Cart engine: cart mutations and totals against the live catalogue.

``CartEngine`` wraps one ``ShoppingCart`` slot. It checks each change against
the catalogue and then dispatches the matching cart command, whose handler
loads the cart, applies the change and writes it back as a unit. Prices,
names and stock always come from the ``ProductCatalog`` at the time of the
call; the cart itself only stores product ids and quantities.
"""

from dataclasses import dataclass, field

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart
from ordering.cart.items import AddToCart, ClearCart, RemoveFromCart, UpdateCartQuantity
from ordering.catalogue.catalog import ProductCatalog
from ordering.config import StoreSettings, get_settings
from ordering.exceptions import BelowMinimumError, EmptyCartError, NotFoundError, OutOfStockError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CartLine:
    product_id: str
    name_english: str
    name_hindi: str | None
    price: float
    unit: str
    quantity: int
    subtotal: float
    in_stock: bool
    image: str | None = None

    def to_dict(self) -> dict:
        return {
            "product_id": self.product_id,
            "name_english": self.name_english,
            "name_hindi": self.name_hindi,
            "price": self.price,
            "unit": self.unit,
            "quantity": self.quantity,
            "subtotal": self.subtotal,
            "in_stock": self.in_stock,
            "image": self.image,
        }


@dataclass(frozen=True)
class CartTotals:
    subtotal: float
    delivery_charge: float
    total: float
    lines: tuple[CartLine, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "subtotal": self.subtotal,
            "delivery_charge": self.delivery_charge,
            "total": self.total,
        }


class CartEngine:
    def __init__(
        self,
        session_id: str,
        catalog: ProductCatalog | None = None,
        settings: StoreSettings | None = None,
    ):
        self.session_id = session_id
        self.catalog = catalog or ProductCatalog()
        self.settings = settings or get_settings()

    def load(self) -> ShoppingCart:
        try:
            return current_domain.repository_for(ShoppingCart).get(self.session_id)
        except ObjectNotFoundError:
            return ShoppingCart.create(self.session_id)

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add_item(self, product_id: str, quantity: int = 1) -> int:
        """Add a product to the cart. Returns the line's new quantity."""
        product = self.catalog.get(product_id)
        if product is None:
            raise NotFoundError()
        if not product.in_stock:
            raise OutOfStockError([product.name_english])

        new_quantity = current_domain.process(
            AddToCart(
                session_id=self.session_id,
                product_id=product_id,
                quantity=quantity,
                max_quantity=self.settings.max_item_quantity,
            ),
            asynchronous=False,
        )

        logger.info("Cart item added", session_id=self.session_id, product_id=product_id, quantity=new_quantity)
        return new_quantity

    def update_quantity(self, product_id: str, new_quantity: int) -> int:
        """Replace a line's quantity; anything below 1 removes the line.

        Returns the stored quantity, 0 when the line was removed.
        """
        if self.load().find(product_id) is None:
            raise NotFoundError("Item not found in cart")

        return current_domain.process(
            UpdateCartQuantity(
                session_id=self.session_id,
                product_id=product_id,
                new_quantity=new_quantity,
                max_quantity=self.settings.max_item_quantity,
            ),
            asynchronous=False,
        )

    def remove_item(self, product_id: str) -> bool:
        return current_domain.process(
            RemoveFromCart(session_id=self.session_id, product_id=product_id),
            asynchronous=False,
        )

    def clear(self) -> None:
        current_domain.process(ClearCart(session_id=self.session_id), asynchronous=False)
        logger.info("Cart cleared", session_id=self.session_id)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def item_count(self) -> int:
        return sum(item.quantity for item in self.load().items)

    def unique_item_count(self) -> int:
        return len(self.load().items)

    def lines(self, cart: ShoppingCart | None = None) -> list[CartLine]:
        """Cart items joined with their products; items for deleted products are dropped."""
        cart = cart or self.load()
        lines = []
        for item in cart.items:
            product = self.catalog.get(item.product_id)
            if product is None:
                logger.warning(
                    "Cart item dropped, product no longer exists",
                    session_id=self.session_id,
                    product_id=item.product_id,
                )
                continue
            lines.append(
                CartLine(
                    product_id=str(product.product_id),
                    name_english=product.name_english,
                    name_hindi=product.name_hindi,
                    price=product.price,
                    unit=product.unit,
                    quantity=item.quantity,
                    subtotal=round(product.price * item.quantity, 2),
                    in_stock=bool(product.in_stock),
                    image=product.image,
                )
            )
        return lines

    def delivery_charge_for(self, subtotal: float) -> float:
        threshold = self.settings.free_delivery_threshold
        if threshold is not None and subtotal >= threshold:
            return 0.0
        return self.settings.delivery_charge

    def compute_totals(self, cart: ShoppingCart | None = None) -> CartTotals:
        lines = self.lines(cart)
        subtotal = round(sum(line.subtotal for line in lines), 2)
        delivery = self.delivery_charge_for(subtotal)
        return CartTotals(
            subtotal=subtotal,
            delivery_charge=delivery,
            total=round(subtotal + delivery, 2),
            lines=tuple(lines),
        )

    def validate_for_checkout(self) -> CartTotals:
        """Check the cart can be ordered right now and return its totals."""
        cart = self.load()
        if not cart.items:
            raise EmptyCartError()

        totals = self.compute_totals(cart)

        out_of_stock = [line.name_english for line in totals.lines if not line.in_stock]
        if out_of_stock:
            raise OutOfStockError(out_of_stock)

        if totals.subtotal < self.settings.min_order_amount:
            raise BelowMinimumError(self.settings.min_order_amount, totals.subtotal)

        return totals
