"""ContactMessage aggregate: a message left through the storefront's contact form.

Submitting one alerts every active admin and marketer in their inbox.
"""

from datetime import UTC, datetime

import structlog
from notifications.domain import notifications
from notifications.notification.helpers import notify_many
from notifications.notification.notification import NotificationType
from notifications.projections.staff_directory import active_staff_ids
from protean.fields import DateTime, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle
from shared.email import normalize_email

logger = structlog.get_logger(__name__)

CONTACT_INBOX_URL = "/dashboard/contact"


@notifications.aggregate
class ContactMessage:
    name: String(required=True, max_length=200)
    email: String(required=True, max_length=254)
    subject: String(required=True, max_length=200)
    message: Text(required=True)
    created_at: DateTime()

    @classmethod
    def submit(cls, name, email, subject, message):
        return cls(
            name=name,
            email=normalize_email(email),
            subject=subject,
            message=message,
            created_at=datetime.now(UTC),
        )


@notifications.command(part_of="ContactMessage")
class SubmitContactMessage:
    name: String(required=True, max_length=200)
    email: String(required=True, max_length=254)
    subject: String(required=True, max_length=200)
    message: Text(required=True)


@notifications.command_handler(part_of=ContactMessage)
class ContactMessageHandler:
    @handle(SubmitContactMessage)
    def submit(self, command: SubmitContactMessage):
        contact = ContactMessage.submit(
            name=command.name,
            email=command.email,
            subject=command.subject,
            message=command.message,
        )
        current_domain.repository_for(ContactMessage).add(contact)

        staff = active_staff_ids()
        notify_many(
            staff,
            "CONTACT_MESSAGE",
            {"name": contact.name, "subject": contact.subject},
            type=NotificationType.INFO.value,
            action_url=CONTACT_INBOX_URL,
        )

        logger.info("Contact message received", contact_id=str(contact.id), staff_notified=len(staff))
        return str(contact.id)


def contact_messages():
    """All contact messages, newest first."""
    items = current_domain.repository_for(ContactMessage)._dao.query.all().items
    return sorted(items, key=lambda m: m.created_at, reverse=True)
