import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def notifications_bed():
    from notifications.domain import notifications

    bed = DomainFixture(notifications)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(notifications_bed):
    with notifications_bed.domain_context():
        yield


@pytest.fixture(autouse=True)
def push():
    """A fresh fake push adapter for every test."""
    from notifications.channel import get_push_channel, reset_push_channels

    reset_push_channels()
    yield get_push_channel()
    reset_push_channels()


@pytest.fixture()
def subscribe():
    from notifications.subscription.subscription import SubscribeToPush
    from protean.utils.globals import current_domain

    def _subscribe(user_id="user-1", endpoint=None):
        return current_domain.process(
            SubscribeToPush(
                user_id=user_id,
                endpoint=endpoint or f"https://push.example.com/{user_id}",
                p256dh="p256dh-key",
                auth="auth-secret",
            ),
            asynchronous=False,
        )

    return _subscribe


@pytest.fixture()
def add_staff():
    from notifications.projections.staff_directory import StaffDirectory
    from protean.utils.globals import current_domain

    def _add(user_id="admin-1", role="Admin", is_active=True):
        current_domain.repository_for(StaffDirectory).add(
            StaffDirectory(user_id=user_id, name=f"Staff {user_id}", role=role, is_active=is_active)
        )
        return user_id

    return _add
