"""Sign-in by phone number and password."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain
from shared.phone import normalize_phone

from identity.domain import identity
from identity.shared.passwords import verify_password
from identity.user.lookup import find_by_phone
from identity.user.user import User

logger = structlog.get_logger(__name__)

_INVALID_CREDENTIALS = {"credentials": ["Invalid phone number or password"]}


@identity.command(part_of="User")
class Authenticate:
    phone = String(required=True, max_length=20)
    password = String(required=True, max_length=128)


@identity.command_handler(part_of=User)
class AuthenticationHandler:
    @handle(Authenticate)
    def authenticate(self, command):
        """Return the user id on success.

        Unknown phone numbers, wrong passwords and accounts that are not active
        all fail with the same error.
        """
        try:
            phone = normalize_phone(command.phone)
        except ValidationError:
            raise ValidationError(_INVALID_CREDENTIALS) from None

        user = find_by_phone(phone)
        if user is None or not user.is_active or not verify_password(command.password, user.password_hash):
            logger.info("Failed sign-in attempt", phone_suffix=phone[-4:])
            raise ValidationError(_INVALID_CREDENTIALS)

        user.record_login()
        current_domain.repository_for(User).add(user)
        return str(user.id)
