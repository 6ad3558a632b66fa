"""User aggregate root with Address entity, Vehicle and MarketerProfile value objects.

A single aggregate covers all four roles of the platform. Role-specific data
(a driver's vehicle and order capacity, a marketer's level and commission) is
carried as optional value objects that only make sense for the matching role.
"""

from datetime import datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Integer, String, ValueObject

from identity.domain import identity

# Distinguishes "not provided" from None in partial updates
_UNSET = object()

DEFAULT_DRIVER_CAPACITY = 3


class Role(Enum):
    CUSTOMER = "Customer"
    ADMIN = "Admin"
    DRIVER = "Driver"
    MARKETER = "Marketer"


class UserStatus(Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    REMOVED = "Removed"


class VehicleType(Enum):
    MOTORCYCLE = "Motorcycle"
    CAR = "Car"
    VAN = "Van"
    TRUCK = "Truck"
    BICYCLE = "Bicycle"


class MarketerLevel(Enum):
    JUNIOR = "Junior"
    SENIOR = "Senior"
    LEAD = "Lead"
    MANAGER = "Manager"


@identity.value_object(part_of="User")
class Vehicle:
    """The vehicle a driver delivers with."""

    vehicle_type = String(required=True, choices=VehicleType)
    plate_number = String(max_length=20)
    color = String(max_length=30)
    model = String(max_length=50)
    license_number = String(max_length=50)
    experience_years = Integer(default=0, min_value=0)


@identity.value_object(part_of="User")
class MarketerProfile:
    level = String(choices=MarketerLevel, default=MarketerLevel.JUNIOR.value)
    commission_rate = Float(default=0.0, min_value=0.0, max_value=100.0)


@identity.entity(part_of="User")
class Address:
    """A delivery location in a user's address book.

    Exactly one address is the default whenever the book is non-empty; checkout
    snapshots the chosen address, including its delivery instructions.
    """

    label = String(required=True, max_length=50)
    district = String(required=True, max_length=100)
    street = String(required=True, max_length=255)
    building_number = String(max_length=20)
    floor = String(max_length=20)
    apartment = String(max_length=20)
    landmark = String(max_length=255)
    delivery_instructions = String(max_length=500)
    latitude = Float(min_value=-90.0, max_value=90.0)
    longitude = Float(min_value=-180.0, max_value=180.0)
    is_default = Boolean(default=False)

    def to_dict(self):
        return {
            "address_id": str(self.id),
            "label": self.label,
            "district": self.district,
            "street": self.street,
            "building_number": self.building_number,
            "floor": self.floor,
            "apartment": self.apartment,
            "landmark": self.landmark,
            "delivery_instructions": self.delivery_instructions,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "is_default": self.is_default,
        }


_ADDRESS_FIELDS = (
    "label",
    "district",
    "street",
    "building_number",
    "floor",
    "apartment",
    "landmark",
    "delivery_instructions",
    "latitude",
    "longitude",
)


@identity.aggregate
class User:
    """Anyone who can sign in: customers, admins, drivers and marketers."""

    name = String(required=True, min_length=2, max_length=50)
    phone = String(required=True, max_length=15)
    email = String(max_length=254)
    password_hash = String(required=True, max_length=255)
    role = String(choices=Role, default=Role.CUSTOMER.value)
    status = String(choices=UserStatus, default=UserStatus.ACTIVE.value)
    is_verified = Boolean(default=False)
    addresses = HasMany(Address)
    vehicle = ValueObject(Vehicle)
    max_orders = Integer(min_value=1)
    marketer_profile = ValueObject(MarketerProfile)
    registered_at = DateTime(default=datetime.now)
    updated_at = DateTime(default=datetime.now)
    last_login_at = DateTime()

    @invariant.post
    def exactly_one_default_address_when_addresses_exist(self):
        if not self.addresses:
            return
        defaults = [a for a in self.addresses if a.is_default]
        if len(defaults) != 1:
            raise ValidationError({"addresses": ["Exactly one address must be marked as default"]})

    @invariant.post
    def role_profiles_match_role(self):
        if self.vehicle is not None and self.role != Role.DRIVER.value:
            raise ValidationError({"vehicle": ["Only drivers can have a vehicle"]})
        if self.marketer_profile is not None and self.role != Role.MARKETER.value:
            raise ValidationError({"marketer_profile": ["Only marketers can have a marketer profile"]})

    @property
    def is_active(self):
        return self.status == UserStatus.ACTIVE.value

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def register(
        cls,
        name,
        phone,
        password_hash,
        role=Role.CUSTOMER.value,
        email=None,
        vehicle=None,
        max_orders=None,
        marketer_profile=None,
    ):
        from identity.user.events import UserRegistered

        if role == Role.DRIVER.value and max_orders is None:
            max_orders = DEFAULT_DRIVER_CAPACITY

        now = datetime.now()
        user = cls(
            name=name,
            phone=phone,
            email=email,
            password_hash=password_hash,
            role=role,
            vehicle=vehicle,
            max_orders=max_orders if role == Role.DRIVER.value else None,
            marketer_profile=marketer_profile,
            registered_at=now,
            updated_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=user.id,
                name=name,
                phone=phone,
                email=email,
                role=role,
                max_orders=user.max_orders,
                registered_at=now,
            )
        )
        return user

    # -------------------------------------------------------------------
    # Profile and credentials
    # -------------------------------------------------------------------
    def update_profile(self, name=_UNSET, phone=_UNSET, email=_UNSET):
        """Apply a partial profile update. Returns True when anything changed."""
        from identity.user.events import UserProfileUpdated

        new_name = self.name if name is _UNSET or name is None else name
        new_phone = self.phone if phone is _UNSET or phone is None else phone
        new_email = self.email if email is _UNSET else email

        if (new_name, new_phone, new_email) == (self.name, self.phone, self.email):
            return False

        self.name = new_name
        self.phone = new_phone
        self.email = new_email
        self.updated_at = datetime.now()

        self.raise_(
            UserProfileUpdated(
                user_id=self.id,
                name=new_name,
                phone=new_phone,
                email=new_email,
            )
        )
        return True

    def change_password(self, new_password_hash):
        from identity.user.events import PasswordChanged

        now = datetime.now()
        self.password_hash = new_password_hash
        self.updated_at = now
        self.raise_(PasswordChanged(user_id=self.id, changed_at=now))

    def verify(self):
        from identity.user.events import UserVerified

        if self.is_verified:
            raise ValidationError({"is_verified": ["Account is already verified"]})

        now = datetime.now()
        self.is_verified = True
        self.updated_at = now
        self.raise_(UserVerified(user_id=self.id, verified_at=now))

    def record_login(self):
        self.last_login_at = datetime.now()

    # -------------------------------------------------------------------
    # Roles
    # -------------------------------------------------------------------
    def change_role(self, new_role):
        from identity.user.events import UserRoleChanged

        if new_role not in {r.value for r in Role}:
            raise ValidationError({"role": [f"Unknown role {new_role}"]})
        if new_role == self.role:
            raise ValidationError({"role": [f"User already has role {new_role}"]})

        previous_role = self.role
        with atomic_change(self):
            self.role = new_role
            if new_role != Role.DRIVER.value:
                self.vehicle = None
                self.max_orders = None
            elif self.max_orders is None:
                self.max_orders = DEFAULT_DRIVER_CAPACITY
            if new_role != Role.MARKETER.value:
                self.marketer_profile = None
        self.updated_at = datetime.now()

        self.raise_(
            UserRoleChanged(
                user_id=self.id,
                name=self.name,
                previous_role=previous_role,
                new_role=new_role,
                max_orders=self.max_orders,
                is_active=self.is_active,
            )
        )

    def update_driver_profile(self, vehicle=None, max_orders=None):
        from identity.user.events import DriverProfileUpdated

        if self.role != Role.DRIVER.value:
            raise ValidationError({"role": ["Only drivers have a driver profile"]})

        if vehicle is not None:
            self.vehicle = vehicle
        if max_orders is not None:
            self.max_orders = max_orders
        self.updated_at = datetime.now()

        self.raise_(
            DriverProfileUpdated(
                user_id=self.id,
                vehicle_type=self.vehicle.vehicle_type if self.vehicle else None,
                plate_number=self.vehicle.plate_number if self.vehicle else None,
                max_orders=self.max_orders,
            )
        )

    def update_marketer_profile(self, level, commission_rate):
        from identity.user.events import MarketerProfileUpdated

        if self.role != Role.MARKETER.value:
            raise ValidationError({"role": ["Only marketers have a marketer profile"]})

        self.marketer_profile = MarketerProfile(level=level, commission_rate=commission_rate)
        self.updated_at = datetime.now()

        self.raise_(
            MarketerProfileUpdated(
                user_id=self.id,
                level=level,
                commission_rate=commission_rate,
            )
        )

    # -------------------------------------------------------------------
    # Account lifecycle
    # -------------------------------------------------------------------
    def deactivate(self):
        from identity.user.events import UserDeactivated

        if self.status != UserStatus.ACTIVE.value:
            raise ValidationError({"status": ["Only active accounts can be deactivated"]})

        now = datetime.now()
        self.status = UserStatus.INACTIVE.value
        self.updated_at = now
        self.raise_(UserDeactivated(user_id=self.id, role=self.role, deactivated_at=now))

    def reactivate(self):
        from identity.user.events import UserReactivated

        if self.status != UserStatus.INACTIVE.value:
            raise ValidationError({"status": ["Only inactive accounts can be reactivated"]})

        now = datetime.now()
        self.status = UserStatus.ACTIVE.value
        self.updated_at = now
        self.raise_(UserReactivated(user_id=self.id, role=self.role, reactivated_at=now))

    def remove(self):
        from identity.user.events import UserRemoved

        if self.status == UserStatus.REMOVED.value:
            raise ValidationError({"status": ["Account is already removed"]})

        now = datetime.now()
        self.status = UserStatus.REMOVED.value
        self.updated_at = now
        self.raise_(UserRemoved(user_id=self.id, role=self.role, removed_at=now))

    # -------------------------------------------------------------------
    # Address book
    # -------------------------------------------------------------------
    def _find_address(self, address_id):
        address = next((a for a in self.addresses if str(a.id) == str(address_id)), None)
        if address is None:
            raise ValidationError({"addresses": [f"Address {address_id} not found"]})
        return address

    def add_address(self, label, district, street, is_default=False, **details):
        from identity.user.events import AddressAdded

        # First address is always default
        if not self.addresses:
            is_default = True

        with atomic_change(self):
            if is_default:
                for addr in self.addresses:
                    if addr.is_default:
                        addr.is_default = False

            address = Address(
                label=label,
                district=district,
                street=street,
                is_default=is_default,
                **{k: v for k, v in details.items() if k in _ADDRESS_FIELDS},
            )
            self.add_addresses(address)

        self.raise_(AddressAdded(user_id=self.id, **address.to_dict()))
        return address

    def update_address(self, address_id, **changes):
        from identity.user.events import AddressUpdated

        address = self._find_address(address_id)
        for field, value in changes.items():
            if field in _ADDRESS_FIELDS and value is not None:
                setattr(address, field, value)

        self.raise_(AddressUpdated(user_id=self.id, **address.to_dict()))

    def remove_address(self, address_id):
        from identity.user.events import AddressRemoved

        address = self._find_address(address_id)
        was_default = address.is_default

        with atomic_change(self):
            self.remove_addresses(address)
            if was_default and self.addresses:
                self.addresses[0].is_default = True

        self.raise_(AddressRemoved(user_id=self.id, address_id=str(address_id)))

    def set_default_address(self, address_id):
        from identity.user.events import DefaultAddressChanged

        address = self._find_address(address_id)
        previous_default = next((a for a in self.addresses if a.is_default), None)

        with atomic_change(self):
            for addr in self.addresses:
                if addr.is_default:
                    addr.is_default = False
            address.is_default = True

        self.raise_(
            DefaultAddressChanged(
                user_id=self.id,
                address_id=str(address_id),
                previous_default_address_id=str(previous_default.id) if previous_default else None,
            )
        )
