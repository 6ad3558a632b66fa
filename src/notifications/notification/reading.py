"""Inbox commands and queries: mark read, toggle, mark all, unread count."""

import structlog
from notifications.domain import notifications
from notifications.notification.notification import UserNotification
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

logger = structlog.get_logger(__name__)


@notifications.command(part_of="UserNotification")
class MarkNotificationRead:
    notification_id: Identifier(required=True)
    user_id: Identifier(required=True)


@notifications.command(part_of="UserNotification")
class ToggleNotificationRead:
    notification_id: Identifier(required=True)
    user_id: Identifier(required=True)


@notifications.command(part_of="UserNotification")
class MarkAllNotificationsRead:
    user_id: Identifier(required=True)


def list_notifications(user_id):
    """A user's inbox, newest first."""
    items = current_domain.repository_for(UserNotification)._dao.query.filter(user_id=str(user_id)).all().items
    return sorted(items, key=lambda n: n.created_at, reverse=True)


def unread_count(user_id) -> int:
    return (
        current_domain.repository_for(UserNotification)
        ._dao.query.filter(user_id=str(user_id), is_read=False)
        .all()
        .total
    )


def _own_notification(notification_id, user_id):
    notification = current_domain.repository_for(UserNotification).get(notification_id)
    if str(notification.user_id) != str(user_id):
        raise ObjectNotFoundError(f"Notification {notification_id} not found")
    return notification


@notifications.command_handler(part_of=UserNotification)
class InboxHandler:
    @handle(MarkNotificationRead)
    def mark_read(self, command: MarkNotificationRead):
        notification = _own_notification(command.notification_id, command.user_id)
        notification.mark_read()
        current_domain.repository_for(UserNotification).add(notification)

    @handle(ToggleNotificationRead)
    def toggle_read(self, command: ToggleNotificationRead):
        notification = _own_notification(command.notification_id, command.user_id)
        notification.toggle_read()
        current_domain.repository_for(UserNotification).add(notification)
        return notification.is_read

    @handle(MarkAllNotificationsRead)
    def mark_all_read(self, command: MarkAllNotificationsRead):
        repo = current_domain.repository_for(UserNotification)
        unread = repo._dao.query.filter(user_id=str(command.user_id), is_read=False).all().items
        for notification in unread:
            notification.mark_read()
            repo.add(notification)

        logger.info("Inbox marked read", user_id=str(command.user_id), count=len(unread))
        return len(unread)
