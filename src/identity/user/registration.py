"""Customer self-registration: command and handler."""

import structlog
from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain
from shared.phone import normalize_phone

from identity.domain import identity
from identity.shared.passwords import hash_password
from identity.user.lookup import ensure_contact_details_unique
from identity.user.user import Role, User

logger = structlog.get_logger(__name__)


@identity.command(part_of="User")
class RegisterCustomer:
    """Sign up a new customer with name, phone number and password."""

    name = String(required=True, min_length=2, max_length=50)
    phone = String(required=True, max_length=20)
    password = String(required=True, max_length=128)


@identity.command_handler(part_of=User)
class RegisterCustomerHandler:
    @handle(RegisterCustomer)
    def register_customer(self, command):
        phone = normalize_phone(command.phone)
        ensure_contact_details_unique(phone=phone)

        user = User.register(
            name=command.name.strip(),
            phone=phone,
            password_hash=hash_password(command.password),
            role=Role.CUSTOMER.value,
        )
        current_domain.repository_for(User).add(user)

        logger.info("Customer registered", user_id=str(user.id))
        return str(user.id)
