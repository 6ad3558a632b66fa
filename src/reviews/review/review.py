"""ProductReview aggregate: a customer's star rating and comment on a product.

A user reviews a product at most once. Reviews are write-once; there is no
editing or moderation flow.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, Integer, Text

from reviews.domain import reviews
from reviews.review.events import ProductReviewSubmitted

MIN_COMMENT_LENGTH = 3


@reviews.aggregate
class ProductReview:
    product_id = Identifier(required=True)
    user_id = Identifier(required=True)
    rating = Integer(required=True, min_value=1, max_value=5)
    comment = Text(required=True)
    is_verified = Boolean(default=False)
    created_at = DateTime()

    @invariant.post
    def comment_minimum_length(self):
        if self.comment is not None and len(self.comment.strip()) < MIN_COMMENT_LENGTH:
            raise ValidationError({"comment": [f"Comment must be at least {MIN_COMMENT_LENGTH} characters"]})

    @classmethod
    def submit(cls, product_id, user_id, rating, comment, is_verified=False):
        now = datetime.now(UTC)
        review = cls(
            product_id=product_id,
            user_id=user_id,
            rating=rating,
            comment=comment.strip() if comment else comment,
            is_verified=is_verified,
            created_at=now,
        )
        review.raise_(
            ProductReviewSubmitted(
                review_id=str(review.id),
                product_id=str(product_id),
                user_id=str(user_id),
                rating=rating,
                is_verified=is_verified,
                submitted_at=now,
            )
        )
        return review
