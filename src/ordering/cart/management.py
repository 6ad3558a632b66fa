"""Cart reconciliation: guest cart merge on sign-in and client sync."""

import json

import structlog
from protean import handle
from protean.fields import DateTime, Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.cart.cart import Cart
from ordering.cart.items import delete_cart, find_cart
from ordering.domain import ordering

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Cart")
class MergeGuestCart:
    """Move a guest session's cart into the signed-in user's cart."""

    guest_id = String(required=True, max_length=255)
    user_id = Identifier(required=True)


@ordering.command(part_of="Cart")
class SyncCart:
    """Push client-side cart state, taken at ``client_timestamp``, to the server."""

    user_id = Identifier()
    guest_id = String(max_length=255)
    items = Text(required=True)  # JSON: list of {product_id, quantity}
    client_timestamp = DateTime(required=True)


@ordering.command_handler(part_of=Cart)
class ReconcileCartHandler:
    @handle(MergeGuestCart)
    def merge_guest_cart(self, command):
        repo = current_domain.repository_for(Cart)
        guest_cart = find_cart(guest_id=command.guest_id)
        user_cart = find_cart(user_id=command.user_id)

        if guest_cart is None or not guest_cart.items:
            return user_cart.snapshot() if user_cart else []

        if user_cart is None:
            guest_cart.claim(command.user_id)
            repo.add(guest_cart)
            logger.info("Guest cart claimed", user_id=str(command.user_id), cart_id=str(guest_cart.id))
            return guest_cart.snapshot()

        user_cart.absorb(guest_cart)
        repo.add(user_cart)
        delete_cart(guest_cart)

        logger.info(
            "Guest cart merged",
            user_id=str(command.user_id),
            cart_id=str(user_cart.id),
            items_merged=len(guest_cart.items),
        )
        return user_cart.snapshot()

    @handle(SyncCart)
    def sync_cart(self, command):
        items = json.loads(command.items) if isinstance(command.items, str) else (command.items or [])
        repo = current_domain.repository_for(Cart)
        cart = find_cart(user_id=command.user_id, guest_id=command.guest_id)

        if cart is None:
            cart = Cart.create(user_id=command.user_id, guest_id=None if command.user_id else command.guest_id)
        elif not cart.is_stale_against(command.client_timestamp):
            logger.info("Stale cart sync ignored", cart_id=str(cart.id))
            return cart.snapshot()

        cart.replace_items(items, command.client_timestamp)
        repo.add(cart)
        return cart.snapshot()
