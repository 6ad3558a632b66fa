"""Cross-domain event contracts for Identity domain events.

Ordering keeps a roster of drivers and a copy of every customer's delivery
addresses; Notifications keeps a directory of staff who receive back-office
alerts and sends onboarding notifications to new customers. Both register
these classes with ``register_external_event()`` under the matching
``Identity.<Event>.v1`` type string.

The source-of-truth events are in src/identity/user/events.py.
"""

from protean.core.event import BaseEvent
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String


class UserRegistered(BaseEvent):
    __version__ = 1

    user_id = Identifier(required=True)
    name = String(required=True)
    phone = String(required=True)
    email = String()
    role = String(required=True)
    max_orders = Integer()
    registered_at = DateTime(required=True)


class UserProfileUpdated(BaseEvent):
    __version__ = 1

    user_id = Identifier(required=True)
    name = String(required=True)
    phone = String(required=True)
    email = String()


class UserRoleChanged(BaseEvent):
    __version__ = 1

    user_id = Identifier(required=True)
    name = String(required=True)
    previous_role = String(required=True)
    new_role = String(required=True)
    max_orders = Integer()
    is_active = Boolean(default=True)


class UserDeactivated(BaseEvent):
    __version__ = 1

    user_id = Identifier(required=True)
    role = String(required=True)
    deactivated_at = DateTime(required=True)


class UserReactivated(BaseEvent):
    __version__ = 1

    user_id = Identifier(required=True)
    role = String(required=True)
    reactivated_at = DateTime(required=True)


class UserRemoved(BaseEvent):
    __version__ = 1

    user_id = Identifier(required=True)
    role = String(required=True)
    removed_at = DateTime(required=True)


class DriverProfileUpdated(BaseEvent):
    __version__ = 1

    user_id = Identifier(required=True)
    vehicle_type = String()
    plate_number = String()
    max_orders = Integer(required=True)


class AddressAdded(BaseEvent):
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


class AddressUpdated(BaseEvent):
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


class AddressRemoved(BaseEvent):
    __version__ = 1

    user_id = Identifier(required=True)
    address_id = Identifier(required=True)
