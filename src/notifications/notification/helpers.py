"""Shared helpers for the inbound event handlers."""

import structlog
from notifications.notification.notification import NotificationType, UserNotification
from notifications.templates import get_template
from protean.utils.globals import current_domain

logger = structlog.get_logger(__name__)


def notify(user_id, template_name, context=None, type=NotificationType.INFO.value, action_url=None, order_id=None):
    """Render a template and store it in one user's inbox.

    Returns the rendered ``{"title", "body"}`` so callers can reuse it for push.
    """
    content = get_template(template_name).render(context or {})
    notification = UserNotification.create(
        user_id=user_id,
        title=content["title"],
        body=content["body"],
        type=type,
        action_url=action_url,
        order_id=order_id,
    )
    current_domain.repository_for(UserNotification).add(notification)

    logger.info(
        "Notification stored",
        notification_id=str(notification.id),
        user_id=str(user_id),
        template=template_name,
    )
    return content


def notify_many(user_ids, template_name, context=None, **kwargs):
    content = None
    for user_id in user_ids:
        content = notify(user_id, template_name, context, **kwargs)
    return content
