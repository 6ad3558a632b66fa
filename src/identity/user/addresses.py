"""Address book management: commands and handler."""

from protean import handle
from protean.fields import Boolean, Float, Identifier, String
from protean.utils.globals import current_domain

from identity.domain import identity
from identity.user.user import User


@identity.command(part_of="User")
class AddAddress:
    user_id = Identifier(required=True)
    label = String(required=True, max_length=50)
    district = String(required=True, max_length=100)
    street = String(required=True, max_length=255)
    building_number = String(max_length=20)
    floor = String(max_length=20)
    apartment = String(max_length=20)
    landmark = String(max_length=255)
    delivery_instructions = String(max_length=500)
    latitude = Float()
    longitude = Float()
    is_default = Boolean(default=False)


@identity.command(part_of="User")
class UpdateAddress:
    user_id = Identifier(required=True)
    address_id = Identifier(required=True)
    label = String(max_length=50)
    district = String(max_length=100)
    street = String(max_length=255)
    building_number = String(max_length=20)
    floor = String(max_length=20)
    apartment = String(max_length=20)
    landmark = String(max_length=255)
    delivery_instructions = String(max_length=500)
    latitude = Float()
    longitude = Float()


@identity.command(part_of="User")
class RemoveAddress:
    user_id = Identifier(required=True)
    address_id = Identifier(required=True)


@identity.command(part_of="User")
class SetDefaultAddress:
    user_id = Identifier(required=True)
    address_id = Identifier(required=True)


_DETAIL_FIELDS = (
    "building_number",
    "floor",
    "apartment",
    "landmark",
    "delivery_instructions",
    "latitude",
    "longitude",
)


@identity.command_handler(part_of=User)
class ManageAddressesHandler:
    @handle(AddAddress)
    def add_address(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        address = user.add_address(
            label=command.label,
            district=command.district,
            street=command.street,
            is_default=command.is_default,
            **{field: getattr(command, field) for field in _DETAIL_FIELDS},
        )
        repo.add(user)
        return str(address.id)

    @handle(UpdateAddress)
    def update_address(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.update_address(
            command.address_id,
            label=command.label,
            district=command.district,
            street=command.street,
            **{field: getattr(command, field) for field in _DETAIL_FIELDS},
        )
        repo.add(user)

    @handle(RemoveAddress)
    def remove_address(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.remove_address(command.address_id)
        repo.add(user)

    @handle(SetDefaultAddress)
    def set_default_address(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.set_default_address(command.address_id)
        repo.add(user)
