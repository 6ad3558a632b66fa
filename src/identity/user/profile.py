"""Profile and credential changes: commands and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain
from shared.email import normalize_email
from shared.phone import normalize_phone

from identity.domain import identity
from identity.shared.passwords import hash_password, verify_password
from identity.user.lookup import ensure_contact_details_unique
from identity.user.user import User


@identity.command(part_of="User")
class UpdateUser:
    user_id = Identifier(required=True)
    name = String(min_length=2, max_length=50)
    phone = String(max_length=20)
    email = String(max_length=254)


@identity.command(part_of="User")
class ChangePassword:
    user_id = Identifier(required=True)
    current_password = String(required=True, max_length=128)
    new_password = String(required=True, max_length=128)


@identity.command(part_of="User")
class MarkVerified:
    user_id = Identifier(required=True)


@identity.command_handler(part_of=User)
class ManageProfileHandler:
    @handle(UpdateUser)
    def update_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)

        phone = normalize_phone(command.phone) if command.phone else None
        changes = {"name": command.name, "phone": phone}
        if command.email is not None:
            changes["email"] = normalize_email(command.email)

        ensure_contact_details_unique(phone=phone, email=changes.get("email"), exclude_user_id=user.id)
        user.update_profile(**changes)
        repo.add(user)

    @handle(ChangePassword)
    def change_password(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)

        if not verify_password(command.current_password, user.password_hash):
            raise ValidationError({"current_password": ["Current password is incorrect"]})

        user.change_password(hash_password(command.new_password))
        repo.add(user)

    @handle(MarkVerified)
    def mark_verified(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.verify()
        repo.add(user)
