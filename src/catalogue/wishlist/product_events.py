"""Removed products leave every wishlist they were saved to."""

import structlog
from protean.utils.mixins import handle

from catalogue.domain import catalogue
from catalogue.product.events import ProductRemoved
from catalogue.wishlist.wishlist import WishlistItem, remove_items_for_product

logger = structlog.get_logger(__name__)


@catalogue.event_handler(part_of=WishlistItem, stream_category="catalogue::product")
class ProductRemovalHandler:
    @handle(ProductRemoved)
    def on_product_removed(self, event: ProductRemoved) -> None:
        removed = remove_items_for_product(event.product_id)
        if removed:
            logger.info("Wishlist entries dropped", product_id=str(event.product_id), count=removed)
