"""Cart item management: commands and handler.

Every command names the cart owner with ``user_id`` or ``guest_id``. A cart is
created on the first add and retired once its last item goes.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from ordering.cart.cart import Cart
from ordering.domain import ordering


@ordering.command(part_of="Cart")
class AddToCart:
    user_id = Identifier()
    guest_id = String(max_length=255)
    product_id = Identifier(required=True)
    quantity = Integer(default=1)


@ordering.command(part_of="Cart")
class UpdateCartItemQuantity:
    """Step a quantity up or down by ``delta``."""

    user_id = Identifier()
    guest_id = String(max_length=255)
    product_id = Identifier(required=True)
    delta = Integer(required=True)


@ordering.command(part_of="Cart")
class SetCartItemQuantity:
    user_id = Identifier()
    guest_id = String(max_length=255)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@ordering.command(part_of="Cart")
class RemoveFromCart:
    user_id = Identifier()
    guest_id = String(max_length=255)
    product_id = Identifier(required=True)


@ordering.command(part_of="Cart")
class ClearCart:
    user_id = Identifier()
    guest_id = String(max_length=255)


def find_cart(user_id=None, guest_id=None):
    """The owner's cart, or None."""
    if user_id:
        criteria = {"user_id": str(user_id)}
    elif guest_id:
        criteria = {"guest_id": guest_id}
    else:
        raise ValidationError({"owner": ["Either user_id or guest_id is required"]})

    carts = current_domain.repository_for(Cart)._dao.query.filter(**criteria).all().items
    return carts[0] if carts else None


def require_cart(user_id=None, guest_id=None):
    cart = find_cart(user_id=user_id, guest_id=guest_id)
    if cart is None:
        raise ValidationError({"cart": ["Cart is empty"]})
    return cart


def delete_cart(cart):
    current_domain.repository_for(Cart)._dao.delete(cart)


def retire_cart(cart):
    """Empty the cart and drop it, unless a client has synced it.

    A synced cart is kept, empty, with its ``synced_at`` intact so that an
    older snapshot arriving later is still recognised as stale.
    """
    if cart.synced_at is None:
        delete_cart(cart)
        return

    cart.clear()
    current_domain.repository_for(Cart).add(cart)


def cart_count(user_id=None, guest_id=None):
    """Total units in the owner's cart, for the header badge."""
    cart = find_cart(user_id=user_id, guest_id=guest_id)
    return cart.item_count if cart else 0


@ordering.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = find_cart(user_id=command.user_id, guest_id=command.guest_id)
        if cart is None:
            cart = Cart.create(user_id=command.user_id, guest_id=None if command.user_id else command.guest_id)

        cart.add_item(command.product_id, command.quantity)
        repo.add(cart)
        return cart.item_count

    @handle(UpdateCartItemQuantity)
    def update_cart_item_quantity(self, command):
        repo = current_domain.repository_for(Cart)
        cart = require_cart(user_id=command.user_id, guest_id=command.guest_id)
        cart.change_item_quantity(command.product_id, command.delta)
        repo.add(cart)
        return cart.item_count

    @handle(SetCartItemQuantity)
    def set_cart_item_quantity(self, command):
        repo = current_domain.repository_for(Cart)
        cart = find_cart(user_id=command.user_id, guest_id=command.guest_id)
        if cart is None:
            cart = Cart.create(user_id=command.user_id, guest_id=None if command.user_id else command.guest_id)

        cart.set_item_quantity(command.product_id, command.quantity)
        repo.add(cart)
        return cart.item_count

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = require_cart(user_id=command.user_id, guest_id=command.guest_id)
        cart.remove_item(command.product_id)

        if not cart.items:
            retire_cart(cart)
            return 0

        repo.add(cart)
        return cart.item_count

    @handle(ClearCart)
    def clear_cart(self, command):
        cart = find_cart(user_id=command.user_id, guest_id=command.guest_id)
        if cart is not None:
            retire_cart(cart)
