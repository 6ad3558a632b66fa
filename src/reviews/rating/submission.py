"""Delivery and app ratings: commands, handler and the ratings page queries."""

import structlog
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from reviews.domain import reviews
from reviews.projections.delivered_orders import DeliveredOrder
from reviews.rating.rating import OrderRating, RatingType

logger = structlog.get_logger(__name__)


@reviews.command(part_of="OrderRating")
class RateDelivery:
    user_id = Identifier(required=True)
    order_id = Identifier(required=True)
    rating = Integer(required=True, min_value=1, max_value=5)
    comment = Text(required=True)


@reviews.command(part_of="OrderRating")
class RateApp:
    user_id = Identifier(required=True)
    feature = String(required=True, max_length=100)
    rating = Integer(required=True, min_value=1, max_value=5)
    comment = Text(required=True)


def _ratings(user_id, rating_type):
    items = (
        current_domain.repository_for(OrderRating)
        ._dao.query.filter(user_id=str(user_id), rating_type=rating_type.value)
        .all()
        .items
    )
    return sorted(items, key=lambda r: r.created_at, reverse=True)


def delivery_ratings(user_id):
    return _ratings(user_id, RatingType.DELIVERY)


def app_ratings(user_id):
    return _ratings(user_id, RatingType.APP)


def unrated_deliveries(user_id):
    """The user's delivered orders that have no delivery rating yet."""
    rated = {str(r.order_id) for r in delivery_ratings(user_id)}
    orders = current_domain.repository_for(DeliveredOrder)._dao.query.filter(user_id=str(user_id)).all().items
    return sorted(
        (o for o in orders if str(o.order_id) not in rated),
        key=lambda o: o.delivered_at,
        reverse=True,
    )


def _delivered_order_of(user_id, order_id):
    try:
        order = current_domain.repository_for(DeliveredOrder).get(str(order_id))
    except ObjectNotFoundError:
        order = None
    if order is None or str(order.user_id) != str(user_id):
        raise ValidationError({"order_id": ["Order not found or not delivered yet"]})
    return order


@reviews.command_handler(part_of=OrderRating)
class OrderRatingHandler:
    @handle(RateDelivery)
    def rate_delivery(self, command):
        order = _delivered_order_of(command.user_id, command.order_id)
        if any(str(r.order_id) == str(order.order_id) for r in delivery_ratings(command.user_id)):
            raise ValidationError({"order_id": ["You have already rated this delivery"]})

        record = OrderRating.rate_delivery(
            user_id=command.user_id,
            order_id=order.order_id,
            driver_id=order.driver_id,
            rating=command.rating,
            comment=command.comment,
        )
        current_domain.repository_for(OrderRating).add(record)
        logger.info("Delivery rated", order_id=str(order.order_id), driver_id=str(order.driver_id), rating=command.rating)
        return str(record.id)

    @handle(RateApp)
    def rate_app(self, command):
        record = OrderRating.rate_app(
            user_id=command.user_id,
            feature=command.feature,
            rating=command.rating,
            comment=command.comment,
        )
        current_domain.repository_for(OrderRating).add(record)
        return str(record.id)
