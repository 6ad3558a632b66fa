import pytest
from identity.projections.user_directory import UserDirectory
from identity.shared.passwords import verify_password
from identity.user.registration import RegisterCustomer
from identity.user.user import User
from protean import current_domain
from protean.exceptions import ValidationError


def _register(**overrides):
    payload = {"name": "Sara Ali", "phone": "055 123 4567", "password": "secret1"}
    payload.update(overrides)
    return current_domain.process(RegisterCustomer(**payload), asynchronous=False)


class TestRegisterCustomer:
    def test_registers_customer_with_normalized_phone(self):
        user_id = _register()

        user = current_domain.repository_for(User).get(user_id)
        assert user.phone == "0551234567"
        assert user.role == "Customer"
        assert verify_password("secret1", user.password_hash)

    def test_duplicate_phone_is_rejected(self):
        _register()
        with pytest.raises(ValidationError) as exc:
            _register(name="Other Person", phone="0551234567")
        assert "phone" in exc.value.messages

    def test_short_password_is_rejected(self):
        with pytest.raises(ValidationError):
            _register(password="123")

    def test_invalid_phone_is_rejected(self):
        with pytest.raises(ValidationError):
            _register(phone="12ab")

    def test_directory_entry_is_projected(self):
        user_id = _register()

        entry = current_domain.repository_for(UserDirectory).get(user_id)
        assert entry.name == "Sara Ali"
        assert entry.role == "Customer"
        assert entry.status == "Active"

    def test_registration_event_is_stored(self):
        _register()

        messages = current_domain.event_store.store.read("identity::user")
        registered = [
            m
            for m in messages
            if m.metadata and m.metadata.headers and m.metadata.headers.type == "Identity.UserRegistered.v1"
        ]
        assert len(registered) == 1
