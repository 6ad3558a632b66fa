"""Domain events for the OrderRating aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from reviews.domain import reviews


@reviews.event(part_of="OrderRating")
class DeliveryRated:
    __version__ = 1

    rating_id = Identifier(required=True)
    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    driver_id = Identifier()
    rating = Integer(required=True)
    rated_at = DateTime(required=True)


@reviews.event(part_of="OrderRating")
class AppRated:
    __version__ = 1

    rating_id = Identifier(required=True)
    user_id = Identifier(required=True)
    feature = String(required=True)
    rating = Integer(required=True)
    rated_at = DateTime(required=True)
