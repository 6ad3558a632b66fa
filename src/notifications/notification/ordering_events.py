"""Inbound cross-domain event handler: Notifications reacts to Ordering events.

Staff hear about every new order. The customer hears about each step of
delivery, in the inbox and (when subscribed) by web push.
"""

import structlog
from notifications.domain import notifications
from notifications.notification.helpers import notify, notify_many
from notifications.notification.notification import NotificationType, UserNotification
from notifications.projections.staff_directory import active_staff_ids
from notifications.subscription.push import ICON, send_order_notification, send_to_users
from protean.utils.mixins import handle
from shared.events.ordering import (
    DriverAssigned,
    OrderCancelled,
    OrderDelivered,
    OrderPlaced,
    TripStarted,
)

logger = structlog.get_logger(__name__)

notifications.register_external_event(OrderPlaced, "Ordering.OrderPlaced.v1")
notifications.register_external_event(DriverAssigned, "Ordering.DriverAssigned.v1")
notifications.register_external_event(TripStarted, "Ordering.TripStarted.v1")
notifications.register_external_event(OrderDelivered, "Ordering.OrderDelivered.v1")
notifications.register_external_event(OrderCancelled, "Ordering.OrderCancelled.v1")

MANAGEMENT_ORDERS_URL = "/dashboard/management-orders"


def _notify_customer(event, template_name, kind, **context):
    notify(
        event.user_id,
        template_name,
        {"order_number": event.order_number, **context},
        type=NotificationType.ORDER.value,
        order_id=event.order_id,
    )
    sent = send_order_notification(
        event.user_id, event.order_id, kind, order_number=event.order_number, **context
    )
    logger.info(
        "Customer notified",
        order_id=str(event.order_id),
        user_id=str(event.user_id),
        template=template_name,
        pushed=sent,
    )


@notifications.event_handler(part_of=UserNotification, stream_category="ordering::order")
class OrderingEventsHandler:
    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        staff = active_staff_ids()
        content = notify_many(
            staff,
            "NEW_ORDER",
            {"order_number": event.order_number, "total": event.total, "customer_name": event.contact_name},
            type=NotificationType.ORDER.value,
            action_url=MANAGEMENT_ORDERS_URL,
            order_id=event.order_id,
        )
        if content is None:
            logger.warning("No staff to notify of new order", order_id=str(event.order_id))
            return

        result = send_to_users(
            staff,
            {
                **content,
                "icon": ICON,
                "tag": f"order-{event.order_id}-new",
                "data": {"order_id": str(event.order_id), "url": MANAGEMENT_ORDERS_URL},
                "require_interaction": True,
            },
        )
        logger.info("Staff notified of new order", order_id=str(event.order_id), pushed=len(result["success"]))

    @handle(DriverAssigned)
    def on_driver_assigned(self, event: DriverAssigned) -> None:
        _notify_customer(event, "ORDER_SHIPPED", "order_shipped", driver_name=event.driver_name)

    @handle(TripStarted)
    def on_trip_started(self, event: TripStarted) -> None:
        _notify_customer(event, "TRIP_STARTED", "trip_started", driver_name=event.driver_name)

    @handle(OrderDelivered)
    def on_order_delivered(self, event: OrderDelivered) -> None:
        _notify_customer(event, "ORDER_DELIVERED", "delivered")

    @handle(OrderCancelled)
    def on_order_cancelled(self, event: OrderCancelled) -> None:
        _notify_customer(event, "ORDER_CANCELLED", "cancelled", reason=event.reason)
