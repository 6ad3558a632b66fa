"""Domain events for the User aggregate."""

from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String

from identity.domain import identity


@identity.event(part_of="User")
class UserRegistered:
    """A user account was created, either by self-registration or from the back office."""

    __version__ = 1

    user_id = Identifier(required=True)
    name = String(required=True)
    phone = String(required=True)
    email = String()
    role = String(required=True)
    max_orders = Integer()
    registered_at = DateTime(required=True)


@identity.event(part_of="User")
class UserProfileUpdated:
    __version__ = 1

    user_id = Identifier(required=True)
    name = String(required=True)
    phone = String(required=True)
    email = String()


@identity.event(part_of="User")
class UserRoleChanged:
    __version__ = 1

    user_id = Identifier(required=True)
    name = String(required=True)
    previous_role = String(required=True)
    new_role = String(required=True)
    max_orders = Integer()
    is_active = Boolean(default=True)


@identity.event(part_of="User")
class UserDeactivated:
    __version__ = 1

    user_id = Identifier(required=True)
    role = String(required=True)
    deactivated_at = DateTime(required=True)


@identity.event(part_of="User")
class UserReactivated:
    __version__ = 1

    user_id = Identifier(required=True)
    role = String(required=True)
    reactivated_at = DateTime(required=True)


@identity.event(part_of="User")
class UserRemoved:
    """The account was soft-deleted and can no longer sign in or be reactivated."""

    __version__ = 1

    user_id = Identifier(required=True)
    role = String(required=True)
    removed_at = DateTime(required=True)


@identity.event(part_of="User")
class PasswordChanged:
    __version__ = 1

    user_id = Identifier(required=True)
    changed_at = DateTime(required=True)


@identity.event(part_of="User")
class UserVerified:
    __version__ = 1

    user_id = Identifier(required=True)
    verified_at = DateTime(required=True)


@identity.event(part_of="User")
class DriverProfileUpdated:
    """Vehicle details or order capacity of a driver changed."""

    __version__ = 1

    user_id = Identifier(required=True)
    vehicle_type = String()
    plate_number = String()
    max_orders = Integer(required=True)


@identity.event(part_of="User")
class MarketerProfileUpdated:
    __version__ = 1

    user_id = Identifier(required=True)
    level = String(required=True)
    commission_rate = Float(required=True)


@identity.event(part_of="User")
class AddressAdded:
    __version__ = 1

    user_id = Identifier(required=True)
    address_id = Identifier(required=True)
    label = String(required=True)
    district = String(required=True)
    street = String(required=True)
    building_number = String()
    floor = String()
    apartment = String()
    landmark = String()
    delivery_instructions = String()
    latitude = Float()
    longitude = Float()
    is_default = Boolean(default=False)


@identity.event(part_of="User")
class AddressUpdated:
    """An address was edited. Carries the full address after the change."""

    __version__ = 1

    user_id = Identifier(required=True)
    address_id = Identifier(required=True)
    label = String(required=True)
    district = String(required=True)
    street = String(required=True)
    building_number = String()
    floor = String()
    apartment = String()
    landmark = String()
    delivery_instructions = String()
    latitude = Float()
    longitude = Float()
    is_default = Boolean(default=False)


@identity.event(part_of="User")
class AddressRemoved:
    __version__ = 1

    user_id = Identifier(required=True)
    address_id = Identifier(required=True)


@identity.event(part_of="User")
class DefaultAddressChanged:
    __version__ = 1

    user_id = Identifier(required=True)
    address_id = Identifier(required=True)
    previous_default_address_id = Identifier()
