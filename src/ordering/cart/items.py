"""Cart item management: commands and handler.

Each command names the cart slot by its session id. A slot that has never
been written is created on first use, so handlers never fail on a missing
cart. Catalogue checks happen before dispatch, in ``CartEngine``.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from ordering.cart.cart import MAX_ITEM_QUANTITY, ShoppingCart
from ordering.domain import ordering


@ordering.command(part_of="ShoppingCart")
class AddToCart:
    session_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    max_quantity = Integer(default=MAX_ITEM_QUANTITY, min_value=1)


@ordering.command(part_of="ShoppingCart")
class UpdateCartQuantity:
    """Replace a line's quantity. Anything below 1 removes the line."""

    session_id = Identifier(required=True)
    product_id = Identifier(required=True)
    new_quantity = Integer(required=True)
    max_quantity = Integer(default=MAX_ITEM_QUANTITY, min_value=1)


@ordering.command(part_of="ShoppingCart")
class RemoveFromCart:
    session_id = Identifier(required=True)
    product_id = Identifier(required=True)


@ordering.command(part_of="ShoppingCart")
class ClearCart:
    session_id = Identifier(required=True)


def _load(repo, session_id):
    try:
        return repo.get(session_id)
    except ObjectNotFoundError:
        return ShoppingCart.create(session_id)


@ordering.command_handler(part_of=ShoppingCart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = _load(repo, command.session_id)
        line = cart.add_item(
            product_id=command.product_id,
            quantity=command.quantity,
            max_quantity=command.max_quantity,
        )
        repo.add(cart)
        return line.quantity

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = _load(repo, command.session_id)
        if command.new_quantity < 1:
            cart.remove_item(command.product_id)
            repo.add(cart)
            return 0

        line = cart.set_quantity(command.product_id, command.new_quantity, max_quantity=command.max_quantity)
        repo.add(cart)
        return line.quantity if line else 0

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = _load(repo, command.session_id)
        removed = cart.remove_item(command.product_id)
        if removed:
            repo.add(cart)
        return removed

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = _load(repo, command.session_id)
        cart.clear()
        repo.add(cart)
