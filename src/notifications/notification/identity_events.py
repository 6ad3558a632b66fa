"""Inbound cross-domain event handler: Notifications reacts to Identity events.

New customers get three onboarding notifications. Admins and marketers are
tracked in the StaffDirectory so back-office alerts know whom to reach.
"""

import structlog
from notifications.domain import notifications
from notifications.notification.helpers import notify
from notifications.notification.notification import NotificationType, UserNotification
from notifications.projections.staff_directory import STAFF_ROLES, StaffDirectory
from notifications.subscription.subscription import remove_subscription, subscriptions_for
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle
from shared.events.identity import (
    UserDeactivated,
    UserProfileUpdated,
    UserReactivated,
    UserRegistered,
    UserRemoved,
    UserRoleChanged,
)

logger = structlog.get_logger(__name__)

notifications.register_external_event(UserRegistered, "Identity.UserRegistered.v1")
notifications.register_external_event(UserProfileUpdated, "Identity.UserProfileUpdated.v1")
notifications.register_external_event(UserRoleChanged, "Identity.UserRoleChanged.v1")
notifications.register_external_event(UserDeactivated, "Identity.UserDeactivated.v1")
notifications.register_external_event(UserReactivated, "Identity.UserReactivated.v1")
notifications.register_external_event(UserRemoved, "Identity.UserRemoved.v1")

ONBOARDING = (
    ("WELCOME", "/"),
    ("ADD_ADDRESS", "/user/addresses"),
    ("ACTIVATE_ACCOUNT", "/auth/verify"),
)


def _staff_entry(user_id):
    try:
        return current_domain.repository_for(StaffDirectory).get(str(user_id))
    except ObjectNotFoundError:
        return None


def _set_active(user_id, is_active):
    entry = _staff_entry(user_id)
    if entry is not None:
        entry.is_active = is_active
        current_domain.repository_for(StaffDirectory).add(entry)


@notifications.event_handler(part_of=UserNotification, stream_category="identity::user")
class IdentityEventsHandler:
    @handle(UserRegistered)
    def on_user_registered(self, event: UserRegistered) -> None:
        if event.role in STAFF_ROLES:
            current_domain.repository_for(StaffDirectory).add(
                StaffDirectory(user_id=str(event.user_id), name=event.name, role=event.role, is_active=True)
            )
            return

        if event.role != "Customer":
            return

        for template_name, action_url in ONBOARDING:
            notify(event.user_id, template_name, type=NotificationType.SYSTEM.value, action_url=action_url)
        logger.info("Onboarding notifications created", user_id=str(event.user_id))

    @handle(UserProfileUpdated)
    def on_profile_updated(self, event: UserProfileUpdated) -> None:
        entry = _staff_entry(event.user_id)
        if entry is not None:
            entry.name = event.name
            current_domain.repository_for(StaffDirectory).add(entry)

    @handle(UserRoleChanged)
    def on_role_changed(self, event: UserRoleChanged) -> None:
        repo = current_domain.repository_for(StaffDirectory)
        entry = _staff_entry(event.user_id)

        if event.new_role in STAFF_ROLES:
            if entry is None:
                entry = StaffDirectory(user_id=str(event.user_id), name=event.name, role=event.new_role)
            entry.role = event.new_role
            entry.is_active = event.is_active
            repo.add(entry)
        elif entry is not None:
            repo._dao.delete(entry)

    @handle(UserDeactivated)
    def on_user_deactivated(self, event: UserDeactivated) -> None:
        _set_active(event.user_id, False)

    @handle(UserReactivated)
    def on_user_reactivated(self, event: UserReactivated) -> None:
        _set_active(event.user_id, True)

    @handle(UserRemoved)
    def on_user_removed(self, event: UserRemoved) -> None:
        entry = _staff_entry(event.user_id)
        if entry is not None:
            current_domain.repository_for(StaffDirectory)._dao.delete(entry)

        for subscription in subscriptions_for(event.user_id):
            remove_subscription(subscription)
