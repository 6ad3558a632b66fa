"""Inbound cross-domain event handler: Catalogue reacts to Reviews events."""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle
from shared.events.reviews import ProductReviewSubmitted

from catalogue.domain import catalogue
from catalogue.product.product import Product

logger = structlog.get_logger(__name__)

catalogue.register_external_event(ProductReviewSubmitted, "Reviews.ProductReviewSubmitted.v1")


@catalogue.event_handler(part_of=Product, stream_category="reviews::product_review")
class ProductReviewsHandler:
    @handle(ProductReviewSubmitted)
    def on_review_submitted(self, event: ProductReviewSubmitted) -> None:
        """Fold the new rating into the product's running average."""
        repo = current_domain.repository_for(Product)
        try:
            product = repo.get(event.product_id)
        except ObjectNotFoundError:
            logger.warning("Review submitted for unknown product", product_id=str(event.product_id))
            return

        product.record_rating(event.rating)
        repo.add(product)
