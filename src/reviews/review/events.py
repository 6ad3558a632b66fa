"""Domain events for the ProductReview aggregate.

``ProductReviewSubmitted`` is consumed by Catalogue to roll the rating into
the product's average; the contract lives in ``shared/events/reviews.py``.
"""

from protean.fields import Boolean, DateTime, Identifier, Integer

from reviews.domain import reviews


@reviews.event(part_of="ProductReview")
class ProductReviewSubmitted:
    __version__ = 1

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    user_id = Identifier(required=True)
    rating = Integer(required=True)
    is_verified = Boolean(default=False)
    submitted_at = DateTime(required=True)
