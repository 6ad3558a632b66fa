"""Staff alert for a new contact-form submission."""


class ContactMessageTemplate:
    name = "CONTACT_MESSAGE"

    @staticmethod
    def render(context: dict) -> dict:
        name = context.get("name", "A visitor")
        subject = context.get("subject", "")
        return {"title": "New contact message", "body": f"{name}: {subject}"}
