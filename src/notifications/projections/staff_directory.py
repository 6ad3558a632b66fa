"""StaffDirectory: admins and marketers who receive back-office alerts."""

from notifications.domain import notifications
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain

STAFF_ROLES = ("Admin", "Marketer")


@notifications.projection
class StaffDirectory:
    user_id: Identifier(identifier=True, required=True)
    name: String(max_length=200)
    role: String(required=True, max_length=50)
    is_active: Boolean(default=True)


def active_staff_ids() -> list[str]:
    entries = current_domain.repository_for(StaffDirectory)._dao.query.filter(is_active=True).all().items
    return [str(entry.user_id) for entry in entries]
