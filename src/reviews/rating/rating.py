"""OrderRating aggregate: feedback on a delivery or on the app itself.

A ``Delivery`` rating belongs to one delivered order and names the driver
being rated. An ``App`` rating names the feature the feedback is about.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer, String, Text

from reviews.domain import reviews
from reviews.rating.events import AppRated, DeliveryRated
from reviews.review.review import MIN_COMMENT_LENGTH


class RatingType(Enum):
    DELIVERY = "Delivery"
    APP = "App"


@reviews.aggregate
class OrderRating:
    rating_type = String(choices=RatingType, required=True)
    user_id = Identifier(required=True)
    order_id = Identifier()
    driver_id = Identifier()
    feature = String(max_length=100)
    rating = Integer(required=True, min_value=1, max_value=5)
    comment = Text(required=True)
    created_at = DateTime()

    @invariant.post
    def comment_minimum_length(self):
        if self.comment is not None and len(self.comment.strip()) < MIN_COMMENT_LENGTH:
            raise ValidationError({"comment": [f"Comment must be at least {MIN_COMMENT_LENGTH} characters"]})

    @invariant.post
    def delivery_ratings_need_an_order(self):
        if self.rating_type == RatingType.DELIVERY.value and not self.order_id:
            raise ValidationError({"order_id": ["A delivery rating needs an order"]})

    @invariant.post
    def app_ratings_need_a_feature(self):
        if self.rating_type == RatingType.APP.value and not self.feature:
            raise ValidationError({"feature": ["An app rating needs a feature"]})

    @classmethod
    def rate_delivery(cls, user_id, order_id, driver_id, rating, comment):
        now = datetime.now(UTC)
        record = cls(
            rating_type=RatingType.DELIVERY.value,
            user_id=user_id,
            order_id=order_id,
            driver_id=driver_id,
            rating=rating,
            comment=comment,
            created_at=now,
        )
        record.raise_(
            DeliveryRated(
                rating_id=str(record.id),
                order_id=str(order_id),
                user_id=str(user_id),
                driver_id=str(driver_id) if driver_id else None,
                rating=rating,
                rated_at=now,
            )
        )
        return record

    @classmethod
    def rate_app(cls, user_id, feature, rating, comment):
        now = datetime.now(UTC)
        record = cls(
            rating_type=RatingType.APP.value,
            user_id=user_id,
            feature=feature,
            rating=rating,
            comment=comment,
            created_at=now,
        )
        record.raise_(
            AppRated(rating_id=str(record.id), user_id=str(user_id), feature=feature, rating=rating, rated_at=now)
        )
        return record
