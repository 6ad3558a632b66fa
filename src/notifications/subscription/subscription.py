"""PushSubscription aggregate: one browser registered for web push.

The push service endpoint identifies a subscription; re-subscribing the same
browser refreshes its keys and owner instead of creating a duplicate.
"""

from datetime import UTC, datetime

import structlog
from notifications.domain import notifications
from protean.fields import DateTime, Identifier, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

logger = structlog.get_logger(__name__)


@notifications.aggregate
class PushSubscription:
    user_id: Identifier(required=True)
    endpoint: String(required=True, max_length=1000)
    p256dh: String(required=True, max_length=255)
    auth: String(required=True, max_length=255)
    created_at: DateTime()
    updated_at: DateTime()

    def as_web_push(self) -> dict:
        return {"endpoint": self.endpoint, "p256dh": self.p256dh, "auth": self.auth}


@notifications.command(part_of="PushSubscription")
class SubscribeToPush:
    user_id: Identifier(required=True)
    endpoint: String(required=True, max_length=1000)
    p256dh: String(required=True, max_length=255)
    auth: String(required=True, max_length=255)


@notifications.command(part_of="PushSubscription")
class UnsubscribeFromPush:
    endpoint: String(required=True, max_length=1000)


def find_by_endpoint(endpoint):
    found = current_domain.repository_for(PushSubscription)._dao.query.filter(endpoint=endpoint).all().items
    return found[0] if found else None


def subscriptions_for(user_id):
    return current_domain.repository_for(PushSubscription)._dao.query.filter(user_id=str(user_id)).all().items


def remove_subscription(subscription):
    current_domain.repository_for(PushSubscription)._dao.delete(subscription)
    logger.info("Push subscription removed", user_id=str(subscription.user_id), endpoint=subscription.endpoint)


@notifications.command_handler(part_of=PushSubscription)
class PushSubscriptionHandler:
    @handle(SubscribeToPush)
    def subscribe(self, command: SubscribeToPush):
        now = datetime.now(UTC)
        subscription = find_by_endpoint(command.endpoint)
        if subscription is None:
            subscription = PushSubscription(
                user_id=command.user_id,
                endpoint=command.endpoint,
                p256dh=command.p256dh,
                auth=command.auth,
                created_at=now,
                updated_at=now,
            )
        else:
            subscription.user_id = command.user_id
            subscription.p256dh = command.p256dh
            subscription.auth = command.auth
            subscription.updated_at = now

        current_domain.repository_for(PushSubscription).add(subscription)
        logger.info("Push subscription saved", user_id=str(command.user_id))
        return str(subscription.id)

    @handle(UnsubscribeFromPush)
    def unsubscribe(self, command: UnsubscribeFromPush):
        subscription = find_by_endpoint(command.endpoint)
        if subscription is None:
            return False
        remove_subscription(subscription)
        return True
