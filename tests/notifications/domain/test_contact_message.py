import pytest
from notifications.contact.contact import ContactMessage
from protean.exceptions import ValidationError


class TestContactMessage:
    def test_submit_normalizes_email(self):
        contact = ContactMessage.submit(
            name="Noura", email=" Noura@Example.com ", subject="Hours", message="Open Fridays?"
        )
        assert contact.email == "noura@example.com"
        assert contact.created_at is not None

    @pytest.mark.parametrize("email", ["noura", "noura@example", "no ura@example.com", "a@@b.com"])
    def test_invalid_email(self, email):
        with pytest.raises(ValidationError) as exc:
            ContactMessage.submit(name="Noura", email=email, subject="Hours", message="Open Fridays?")
        assert "email" in exc.value.messages

    def test_all_fields_required(self):
        with pytest.raises(ValidationError):
            ContactMessage.submit(name="Noura", email="noura@example.com", subject="", message="Hi")
