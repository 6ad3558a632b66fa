"""Wishlist: products a signed-in customer has saved for later.

Each saved product is its own ``WishlistItem``, unique per user and product.
Listings are read through the product card, so a product that has left the
storefront drops out of the list.
"""

from datetime import datetime

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, Identifier
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product
from catalogue.projections.product_card import ProductCard

logger = structlog.get_logger(__name__)


@catalogue.aggregate
class WishlistItem:
    user_id: Identifier(required=True)
    product_id: Identifier(required=True)
    added_at: DateTime(default=datetime.now)


@catalogue.command(part_of="WishlistItem")
class AddToWishlist:
    user_id: Identifier(required=True)
    product_id: Identifier(required=True)


@catalogue.command(part_of="WishlistItem")
class RemoveFromWishlist:
    user_id: Identifier(required=True)
    product_id: Identifier(required=True)


def _items(**criteria):
    return current_domain.repository_for(WishlistItem)._dao.query.filter(**criteria).all().items


def find_item(user_id, product_id):
    items = _items(user_id=str(user_id), product_id=str(product_id))
    return items[0] if items else None


def is_in_wishlist(user_id, product_id) -> bool:
    return find_item(user_id, product_id) is not None


def wishlist_count(user_id) -> int:
    return len(_items(user_id=str(user_id)))


def wishlist_products(user_id):
    """Saved products as ``(item, card)`` pairs, most recently saved first."""
    cards = current_domain.repository_for(ProductCard)
    saved = sorted(_items(user_id=str(user_id)), key=lambda item: item.added_at, reverse=True)

    products = []
    for item in saved:
        try:
            products.append((item, cards.get(str(item.product_id))))
        except ObjectNotFoundError:
            continue
    return products


def remove_items_for_product(product_id) -> int:
    dao = current_domain.repository_for(WishlistItem)._dao
    items = _items(product_id=str(product_id))
    for item in items:
        dao.delete(item)
    return len(items)


@catalogue.command_handler(part_of=WishlistItem)
class ManageWishlistHandler:
    @handle(AddToWishlist)
    def add_to_wishlist(self, command):
        try:
            product = current_domain.repository_for(Product).get(command.product_id)
        except ObjectNotFoundError:
            raise ValidationError({"product_id": ["Product not found"]})
        if product.is_removed:
            raise ValidationError({"product_id": ["Product has been removed"]})

        if is_in_wishlist(command.user_id, command.product_id):
            raise ValidationError({"product_id": ["Product is already in the wishlist"]})

        item = WishlistItem(user_id=command.user_id, product_id=command.product_id, added_at=datetime.now())
        current_domain.repository_for(WishlistItem).add(item)
        logger.info("Product saved to wishlist", user_id=str(command.user_id), product_id=str(command.product_id))
        return wishlist_count(command.user_id)

    @handle(RemoveFromWishlist)
    def remove_from_wishlist(self, command):
        item = find_item(command.user_id, command.product_id)
        if item is None:
            raise ValidationError({"product_id": ["Product is not in the wishlist"]})

        current_domain.repository_for(WishlistItem)._dao.delete(item)
        return wishlist_count(command.user_id)
