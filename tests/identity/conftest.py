import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def identity_bed():
    from identity.domain import identity

    bed = DomainFixture(identity)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(identity_bed):
    with identity_bed.domain_context():
        yield


@pytest.fixture
def register_user():
    """Register a user through the domain and return its id."""
    from identity.shared.passwords import hash_password
    from identity.user.user import User
    from protean import current_domain

    def _register(name="Sara Ali", phone="0551234567", role="Customer", password="secret1", **kwargs):
        user = User.register(name=name, phone=phone, password_hash=hash_password(password), role=role, **kwargs)
        current_domain.repository_for(User).add(user)
        return str(user.id)

    return _register
