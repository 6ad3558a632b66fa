"""Application tests for IdentityEventsHandler: onboarding and the staff directory."""

from datetime import UTC, datetime

import pytest
from notifications.notification.identity_events import IdentityEventsHandler
from notifications.notification.reading import list_notifications
from notifications.projections.staff_directory import StaffDirectory, active_staff_ids
from protean import current_domain
from protean.exceptions import ObjectNotFoundError
from shared.events.identity import UserDeactivated, UserRegistered, UserRemoved, UserRoleChanged


def _register(user_id="user-1", role="Customer"):
    IdentityEventsHandler().on_user_registered(
        UserRegistered(user_id=user_id, name="Sara", phone="0551112222", role=role, registered_at=datetime.now(UTC))
    )


class TestOnboarding:
    def test_customer_gets_three_system_notifications(self):
        _register()
        inbox = list_notifications("user-1")
        assert len(inbox) == 3
        assert {n.type for n in inbox} == {"System"}
        assert {n.action_url for n in inbox} == {"/", "/user/addresses", "/auth/verify"}

    def test_drivers_get_none(self):
        _register("driver-1", role="Driver")
        assert list_notifications("driver-1") == []


class TestStaffDirectory:
    def test_admins_and_marketers_join(self):
        _register("admin-1", role="Admin")
        _register("marketer-1", role="Marketer")
        assert sorted(active_staff_ids()) == ["admin-1", "marketer-1"]
        assert list_notifications("admin-1") == []

    def test_deactivated_staff_drop_out(self):
        _register("admin-1", role="Admin")
        IdentityEventsHandler().on_user_deactivated(
            UserDeactivated(user_id="admin-1", role="Admin", deactivated_at=datetime.now(UTC))
        )
        assert active_staff_ids() == []

    def test_role_change(self):
        handler = IdentityEventsHandler()
        handler.on_role_changed(
            UserRoleChanged(user_id="user-1", name="Sara", previous_role="Customer", new_role="Marketer")
        )
        assert active_staff_ids() == ["user-1"]

        handler.on_role_changed(
            UserRoleChanged(user_id="user-1", name="Sara", previous_role="Marketer", new_role="Customer")
        )
        with pytest.raises(ObjectNotFoundError):
            current_domain.repository_for(StaffDirectory).get("user-1")

    def test_inactive_account_promoted_to_staff(self):
        IdentityEventsHandler().on_role_changed(
            UserRoleChanged(
                user_id="user-1", name="Sara", previous_role="Customer", new_role="Admin", is_active=False
            )
        )
        assert current_domain.repository_for(StaffDirectory).get("user-1").is_active is False
        assert active_staff_ids() == []

    def test_removed_user(self, subscribe):
        _register("admin-1", role="Admin")
        subscribe("admin-1")
        IdentityEventsHandler().on_user_removed(
            UserRemoved(user_id="admin-1", role="Admin", removed_at=datetime.now(UTC))
        )
        assert active_staff_ids() == []
