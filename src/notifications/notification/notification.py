"""UserNotification aggregate: one entry in a user's in-app inbox."""

from datetime import UTC, datetime
from enum import Enum

from notifications.domain import notifications
from notifications.notification.events import NotificationCreated
from protean.fields import Boolean, DateTime, Identifier, String, Text


class NotificationType(Enum):
    ORDER = "Order"
    PROMO = "Promo"
    SYSTEM = "System"
    INFO = "Info"


def order_url(order_id) -> str:
    return f"/user/orders/{order_id}"


@notifications.aggregate
class UserNotification:
    user_id: Identifier(required=True)
    title: String(required=True, max_length=200)
    body: Text(required=True)
    type: String(choices=NotificationType, default=NotificationType.INFO.value)
    is_read: Boolean(default=False)
    action_url: String(max_length=500)
    order_id: Identifier()
    created_at: DateTime()

    @classmethod
    def create(cls, user_id, title, body, type=NotificationType.INFO.value, action_url=None, order_id=None):
        if action_url is None and order_id is not None:
            action_url = order_url(order_id)

        now = datetime.now(UTC)
        notification = cls(
            user_id=user_id,
            title=title,
            body=body,
            type=type,
            is_read=False,
            action_url=action_url,
            order_id=order_id,
            created_at=now,
        )
        notification.raise_(
            NotificationCreated(
                notification_id=str(notification.id),
                user_id=str(user_id),
                type=type,
                title=title,
                created_at=now,
            )
        )
        return notification

    def mark_read(self):
        self.is_read = True

    def toggle_read(self):
        self.is_read = not self.is_read
