import pytest
from notifications.notification.notification import UserNotification
from notifications.notification.reading import (
    MarkAllNotificationsRead,
    MarkNotificationRead,
    ToggleNotificationRead,
    list_notifications,
    unread_count,
)
from protean import current_domain
from protean.exceptions import ObjectNotFoundError


def _store(user_id="user-1", title="Hello"):
    notification = UserNotification.create(user_id=user_id, title=title, body="...")
    current_domain.repository_for(UserNotification).add(notification)
    return str(notification.id)


class TestMarkRead:
    def test_mark_read(self):
        notification_id = _store()
        current_domain.process(
            MarkNotificationRead(notification_id=notification_id, user_id="user-1"), asynchronous=False
        )
        assert unread_count("user-1") == 0

    def test_cannot_mark_someone_elses(self):
        notification_id = _store(user_id="user-2")
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(
                MarkNotificationRead(notification_id=notification_id, user_id="user-1"), asynchronous=False
            )
        assert unread_count("user-2") == 1

    def test_toggle_returns_new_state(self):
        notification_id = _store()
        toggle = ToggleNotificationRead(notification_id=notification_id, user_id="user-1")
        assert current_domain.process(toggle, asynchronous=False) is True
        assert current_domain.process(toggle, asynchronous=False) is False


class TestMarkAllRead:
    def test_only_the_users_inbox(self):
        _store("user-1")
        _store("user-1")
        _store("user-2")

        updated = current_domain.process(MarkAllNotificationsRead(user_id="user-1"), asynchronous=False)

        assert updated == 2
        assert unread_count("user-1") == 0
        assert unread_count("user-2") == 1


class TestListNotifications:
    def test_newest_first(self):
        _store(title="First")
        _store(title="Second")
        assert [n.title for n in list_notifications("user-1")] == ["Second", "First"]
