"""Inbound cross-domain event handler: Reviews reacts to Ordering events.

An OrderDelivered event records one VerifiedPurchase per product on the
order and a DeliveredOrder row that the customer can later rate.
"""

import json

import structlog
from protean.utils.globals import current_domain
from protean.utils.mixins import handle
from shared.events.ordering import OrderDelivered

from reviews.domain import reviews
from reviews.projections.delivered_orders import DeliveredOrder
from reviews.projections.verified_purchases import VerifiedPurchase, has_purchased, purchase_key
from reviews.review.review import ProductReview

logger = structlog.get_logger(__name__)

reviews.register_external_event(OrderDelivered, "Ordering.OrderDelivered.v1")


@reviews.event_handler(part_of=ProductReview, stream_category="ordering::order")
class OrderingEventsHandler:
    @handle(OrderDelivered)
    def on_order_delivered(self, event: OrderDelivered) -> None:
        current_domain.repository_for(DeliveredOrder).add(
            DeliveredOrder(
                order_id=str(event.order_id),
                order_number=event.order_number,
                user_id=str(event.user_id),
                driver_id=str(event.driver_id) if event.driver_id else None,
                delivered_at=event.delivered_at,
            )
        )

        repo = current_domain.repository_for(VerifiedPurchase)
        items = json.loads(event.items) if isinstance(event.items, str) else (event.items or [])
        for item in items:
            if has_purchased(event.user_id, item["product_id"]):
                continue

            repo.add(
                VerifiedPurchase(
                    purchase_id=purchase_key(event.user_id, item["product_id"]),
                    user_id=str(event.user_id),
                    product_id=str(item["product_id"]),
                    product_name=item.get("name"),
                    order_id=str(event.order_id),
                    delivered_at=event.delivered_at,
                )
            )

        logger.info(
            "Delivery recorded for reviews",
            order_id=str(event.order_id),
            user_id=str(event.user_id),
            products=len(items),
        )
