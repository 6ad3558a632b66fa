"""Web push dispatch through the registered :class:`PushPort` adapter.

Failures are reported as return values and logged, never raised: a push that
cannot be delivered must not abort the command or event that triggered it.
Subscriptions the push service reports as gone (HTTP 410) are deleted.
"""

import structlog
from notifications.channel import get_push_channel
from notifications.subscription.subscription import PushSubscription, remove_subscription, subscriptions_for
from notifications.templates import get_template
from protean.utils.globals import current_domain

logger = structlog.get_logger(__name__)

ICON = "/icons/icon-192x192.png"

ORDER_NOTIFICATION_KINDS = {
    "order_shipped": "ORDER_SHIPPED",
    "driver_assigned": "DRIVER_ASSIGNED",
    "trip_started": "TRIP_STARTED",
    "delivered": "ORDER_DELIVERED",
    "cancelled": "ORDER_CANCELLED",
}

_INTERACTIVE_KINDS = {"driver_assigned", "trip_started"}


def _is_gone(result: dict) -> bool:
    return result.get("status_code") == 410 or result.get("status") == "expired"


def _deliver(subscription, payload) -> bool:
    try:
        result = get_push_channel().send(subscription.as_web_push(), payload)
    except Exception as exc:
        logger.error("Push adapter raised", user_id=str(subscription.user_id), error=str(exc))
        return False

    if result.get("status") == "sent":
        return True

    if _is_gone(result):
        remove_subscription(subscription)
    else:
        logger.warning(
            "Push delivery failed",
            user_id=str(subscription.user_id),
            error=result.get("error"),
        )
    return False


def send_to_user(user_id, payload: dict) -> bool:
    """Push to every browser the user subscribed. False when none took it."""
    subscriptions = subscriptions_for(user_id)
    if not subscriptions:
        logger.debug("No push subscription", user_id=str(user_id))
        return False

    delivered = [_deliver(subscription, payload) for subscription in subscriptions]
    if any(delivered):
        logger.info("Push sent", user_id=str(user_id), title=payload.get("title"))
        return True
    return False


def send_to_users(user_ids, payload: dict) -> dict:
    success, failed = [], []
    for user_id in user_ids:
        (success if send_to_user(user_id, payload) else failed).append(str(user_id))

    logger.debug("Batch push finished", success=len(success), failed=len(failed))
    return {"success": success, "failed": failed}


def order_payload(order_id, kind: str, order_number=None, driver_name=None, reason=None) -> dict:
    template_name = ORDER_NOTIFICATION_KINDS.get(kind)
    if template_name is None:
        raise ValueError(f"Unknown order notification kind: {kind}")

    content = get_template(template_name).render(
        {"order_number": order_number or order_id, "driver_name": driver_name, "reason": reason}
    )
    return {
        **content,
        "icon": ICON,
        "badge": ICON,
        "tag": f"order-{order_id}-{kind}",
        "data": {"order_id": str(order_id), "order_number": order_number, "type": kind},
        "require_interaction": kind in _INTERACTIVE_KINDS,
        "actions": [
            {"action": "view_order", "title": "View order", "icon": ICON},
            {"action": "close", "title": "Close"},
        ],
    }


def send_order_notification(user_id, order_id, kind: str, **context) -> bool:
    try:
        payload = order_payload(order_id, kind, **context)
    except ValueError as exc:
        logger.error("Order push skipped", order_id=str(order_id), error=str(exc))
        return False
    return send_to_user(user_id, payload)


def cleanup_invalid_subscriptions() -> int:
    """Ping every subscription and delete the ones the push service rejects as gone."""
    removed = 0
    ping = {"title": "Test", "body": "Test notification"}
    for subscription in current_domain.repository_for(PushSubscription)._dao.query.all().items:
        try:
            result = get_push_channel().send(subscription.as_web_push(), ping)
        except Exception as exc:
            logger.error("Push adapter raised", user_id=str(subscription.user_id), error=str(exc))
            continue
        if _is_gone(result):
            remove_subscription(subscription)
            removed += 1

    logger.info("Push subscription cleanup finished", removed=removed)
    return removed
