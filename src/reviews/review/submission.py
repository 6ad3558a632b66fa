"""SubmitProductReview: one review per user per product.

The uniqueness check spans aggregates, so it lives in the handler. The
VerifiedPurchase projection decides whether the review is flagged verified.
"""

import structlog
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from reviews.domain import reviews
from reviews.projections.verified_purchases import VerifiedPurchase, has_purchased
from reviews.review.review import ProductReview

logger = structlog.get_logger(__name__)


@reviews.command(part_of="ProductReview")
class SubmitProductReview:
    product_id = Identifier(required=True)
    user_id = Identifier(required=True)
    rating = Integer(required=True, min_value=1, max_value=5)
    comment = Text(required=True)


def find_review(user_id, product_id):
    existing = (
        current_domain.repository_for(ProductReview)
        ._dao.query.filter(user_id=str(user_id), product_id=str(product_id))
        .all()
        .items
    )
    return existing[0] if existing else None


def product_reviews(product_id):
    """Reviews of a product, newest first."""
    items = current_domain.repository_for(ProductReview)._dao.query.filter(product_id=str(product_id)).all().items
    return sorted(items, key=lambda r: r.created_at, reverse=True)


def rateable_products(user_id):
    """Delivered products the user has not reviewed yet."""
    purchases = current_domain.repository_for(VerifiedPurchase)._dao.query.filter(user_id=str(user_id)).all().items
    return [p for p in purchases if find_review(user_id, p.product_id) is None]


@reviews.command_handler(part_of=ProductReview)
class SubmitProductReviewHandler:
    @handle(SubmitProductReview)
    def submit_review(self, command):
        if find_review(command.user_id, command.product_id) is not None:
            raise ValidationError({"product_id": ["You have already reviewed this product"]})

        review = ProductReview.submit(
            product_id=command.product_id,
            user_id=command.user_id,
            rating=command.rating,
            comment=command.comment,
            is_verified=has_purchased(command.user_id, command.product_id),
        )
        current_domain.repository_for(ProductReview).add(review)

        logger.info(
            "Product review submitted",
            review_id=str(review.id),
            product_id=str(command.product_id),
            rating=command.rating,
            is_verified=review.is_verified,
        )
        return str(review.id)
