"""Cross-domain event contracts for Reviews domain events.

Catalogue folds each submitted rating into the product's running average.

The source-of-truth events are in src/reviews/review/events.py.
"""

from protean.core.event import BaseEvent
from protean.fields import Boolean, DateTime, Identifier, Integer


class ProductReviewSubmitted(BaseEvent):
    __version__ = 1

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    user_id = Identifier(required=True)
    rating = Integer(required=True)
    is_verified = Boolean(default=False)
    submitted_at = DateTime(required=True)
