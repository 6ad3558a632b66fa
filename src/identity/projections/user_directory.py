"""UserDirectory: back-office listing of every account, filterable by role."""

from datetime import datetime

from protean.core.projector import on
from protean.fields import DateTime, Identifier, String
from protean.utils.globals import current_domain

from identity.domain import identity
from identity.user.events import (
    UserDeactivated,
    UserProfileUpdated,
    UserReactivated,
    UserRegistered,
    UserRemoved,
    UserRoleChanged,
)
from identity.user.user import User


@identity.projection
class UserDirectory:
    user_id = Identifier(identifier=True, required=True)
    name = String(required=True)
    phone = String(required=True)
    email = String()
    role = String(required=True)
    status = String(required=True)
    registered_at = DateTime()


@identity.projector(projector_for=UserDirectory, aggregates=[User])
class UserDirectoryProjector:
    @on(UserRegistered)
    def on_user_registered(self, event):
        current_domain.repository_for(UserDirectory).add(
            UserDirectory(
                user_id=event.user_id,
                name=event.name,
                phone=event.phone,
                email=event.email,
                role=event.role,
                status="Active",
                registered_at=event.registered_at,
            )
        )

    @on(UserProfileUpdated)
    def on_profile_updated(self, event):
        repo = current_domain.repository_for(UserDirectory)
        entry = repo.get(event.user_id)
        entry.name = event.name
        entry.phone = event.phone
        entry.email = event.email
        repo.add(entry)

    @on(UserRoleChanged)
    def on_role_changed(self, event):
        repo = current_domain.repository_for(UserDirectory)
        entry = repo.get(event.user_id)
        entry.role = event.new_role
        repo.add(entry)

    @on(UserDeactivated)
    def on_deactivated(self, event):
        self._set_status(event.user_id, "Inactive")

    @on(UserReactivated)
    def on_reactivated(self, event):
        self._set_status(event.user_id, "Active")

    @on(UserRemoved)
    def on_removed(self, event):
        self._set_status(event.user_id, "Removed")

    def _set_status(self, user_id, status):
        repo = current_domain.repository_for(UserDirectory)
        entry = repo.get(user_id)
        entry.status = status
        repo.add(entry)


def list_users(role=None, status=None):
    """Directory entries, newest first, optionally narrowed by role and status."""
    filters = {}
    if role:
        filters["role"] = role
    if status:
        filters["status"] = status

    dao = current_domain.repository_for(UserDirectory)._dao
    entries = dao.query.filter(**filters).all().items if filters else dao.query.all().items
    return sorted(entries, key=lambda e: e.registered_at or datetime.min, reverse=True)
