"""Back-office user management: accounts for every role plus role-specific profiles."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Float, Identifier, Integer, String
from protean.utils.globals import current_domain
from shared.email import normalize_email
from shared.phone import require_ten_digits

from identity.domain import identity
from identity.shared.passwords import hash_password
from identity.user.lookup import ensure_contact_details_unique
from identity.user.user import MarketerProfile, Role, User, Vehicle

logger = structlog.get_logger(__name__)


@identity.command(part_of="User")
class CreateStaffUser:
    """Create an admin, driver, marketer or customer account from the back office."""

    role = String(required=True, choices=Role)
    name = String(required=True, min_length=2, max_length=50)
    phone = String(required=True, max_length=20)
    password = String(required=True, max_length=128)
    email = String(max_length=254)
    vehicle_type = String()
    plate_number = String(max_length=20)
    vehicle_color = String(max_length=30)
    vehicle_model = String(max_length=50)
    license_number = String(max_length=50)
    experience_years = Integer(min_value=0)
    max_orders = Integer(min_value=1)
    marketer_level = String()
    commission_rate = Float(min_value=0.0, max_value=100.0)


@identity.command(part_of="User")
class ChangeRole:
    user_id = Identifier(required=True)
    role = String(required=True, choices=Role)


@identity.command(part_of="User")
class UpdateDriverProfile:
    user_id = Identifier(required=True)
    vehicle_type = String()
    plate_number = String(max_length=20)
    vehicle_color = String(max_length=30)
    vehicle_model = String(max_length=50)
    license_number = String(max_length=50)
    experience_years = Integer(min_value=0)
    max_orders = Integer(min_value=1)


@identity.command(part_of="User")
class UpdateMarketerProfile:
    user_id = Identifier(required=True)
    level = String(required=True)
    commission_rate = Float(required=True, min_value=0.0, max_value=100.0)


def _vehicle_from(command):
    if not command.vehicle_type:
        return None
    return Vehicle(
        vehicle_type=command.vehicle_type,
        plate_number=command.plate_number,
        color=command.vehicle_color,
        model=command.vehicle_model,
        license_number=command.license_number,
        experience_years=command.experience_years or 0,
    )


@identity.command_handler(part_of=User)
class ManageStaffHandler:
    @handle(CreateStaffUser)
    def create_staff_user(self, command):
        phone = require_ten_digits(command.phone)
        email = normalize_email(command.email)
        ensure_contact_details_unique(phone=phone, email=email)

        vehicle = None
        max_orders = None
        marketer_profile = None
        if command.role == Role.DRIVER.value:
            vehicle = _vehicle_from(command)
            max_orders = command.max_orders
        elif command.role == Role.MARKETER.value:
            marketer_profile = MarketerProfile(
                level=command.marketer_level or "Junior",
                commission_rate=command.commission_rate or 0.0,
            )

        user = User.register(
            name=command.name.strip(),
            phone=phone,
            email=email,
            password_hash=hash_password(command.password),
            role=command.role,
            vehicle=vehicle,
            max_orders=max_orders,
            marketer_profile=marketer_profile,
        )
        current_domain.repository_for(User).add(user)

        logger.info("Back-office account created", user_id=str(user.id), role=command.role)
        return str(user.id)

    @handle(ChangeRole)
    def change_role(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.change_role(command.role)
        repo.add(user)

    @handle(UpdateDriverProfile)
    def update_driver_profile(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        if command.vehicle_type is None and command.max_orders is None:
            raise ValidationError({"driver": ["Nothing to update"]})
        user.update_driver_profile(vehicle=_vehicle_from(command), max_orders=command.max_orders)
        repo.add(user)

    @handle(UpdateMarketerProfile)
    def update_marketer_profile(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.update_marketer_profile(level=command.level, commission_rate=command.commission_rate)
        repo.add(user)
