"""Inbound cross-domain event handler: Ordering reacts to Identity events.

Keeps two local read models current:
- DriverRoster: drivers who may be dispatched, and their capacity.
- DeliveryAddress: every customer's address book, for checkout.

Cross-domain events are imported from shared.events.identity and registered
as external events via ordering.register_external_event().
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle
from shared.events.identity import (
    AddressAdded,
    AddressRemoved,
    AddressUpdated,
    DriverProfileUpdated,
    UserDeactivated,
    UserProfileUpdated,
    UserReactivated,
    UserRegistered,
    UserRemoved,
    UserRoleChanged,
)

from ordering.domain import ordering
from ordering.order.order import Order
from ordering.projections.delivery_address import DeliveryAddress
from ordering.projections.driver_roster import DEFAULT_DRIVER_CAPACITY, DriverRoster

logger = structlog.get_logger(__name__)

DRIVER_ROLE = "Driver"

ordering.register_external_event(UserRegistered, "Identity.UserRegistered.v1")
ordering.register_external_event(UserProfileUpdated, "Identity.UserProfileUpdated.v1")
ordering.register_external_event(UserRoleChanged, "Identity.UserRoleChanged.v1")
ordering.register_external_event(UserDeactivated, "Identity.UserDeactivated.v1")
ordering.register_external_event(UserReactivated, "Identity.UserReactivated.v1")
ordering.register_external_event(UserRemoved, "Identity.UserRemoved.v1")
ordering.register_external_event(DriverProfileUpdated, "Identity.DriverProfileUpdated.v1")
ordering.register_external_event(AddressAdded, "Identity.AddressAdded.v1")
ordering.register_external_event(AddressUpdated, "Identity.AddressUpdated.v1")
ordering.register_external_event(AddressRemoved, "Identity.AddressRemoved.v1")


def _roster_entry(user_id):
    try:
        return current_domain.repository_for(DriverRoster).get(str(user_id))
    except ObjectNotFoundError:
        return None


def _address_fields(event):
    return {
        "user_id": str(event.user_id),
        "label": event.label,
        "district": event.district,
        "street": event.street,
        "building_number": event.building_number,
        "floor": event.floor,
        "apartment": event.apartment,
        "landmark": event.landmark,
        "delivery_instructions": event.delivery_instructions,
        "latitude": event.latitude,
        "longitude": event.longitude,
        "is_default": event.is_default,
    }


@ordering.event_handler(part_of=Order, stream_category="identity::user")
class IdentityEventsHandler:
    """Reacts to Identity domain events affecting dispatch and checkout."""

    # -------------------------------------------------------------------
    # Driver roster
    # -------------------------------------------------------------------
    @handle(UserRegistered)
    def on_user_registered(self, event: UserRegistered) -> None:
        if event.role != DRIVER_ROLE:
            return

        logger.info("Adding driver to roster", driver_id=str(event.user_id))
        current_domain.repository_for(DriverRoster).add(
            DriverRoster(
                driver_id=str(event.user_id),
                name=event.name,
                phone=event.phone,
                is_active=True,
                max_orders=event.max_orders or DEFAULT_DRIVER_CAPACITY,
            )
        )

    @handle(UserProfileUpdated)
    def on_profile_updated(self, event: UserProfileUpdated) -> None:
        entry = _roster_entry(event.user_id)
        if entry is None:
            return
        entry.name = event.name
        entry.phone = event.phone
        current_domain.repository_for(DriverRoster).add(entry)

    @handle(UserRoleChanged)
    def on_role_changed(self, event: UserRoleChanged) -> None:
        repo = current_domain.repository_for(DriverRoster)
        entry = _roster_entry(event.user_id)

        if event.new_role == DRIVER_ROLE:
            logger.info("User became a driver", driver_id=str(event.user_id))
            if entry is None:
                entry = DriverRoster(driver_id=str(event.user_id), name=event.name)
            entry.is_active = event.is_active
            entry.max_orders = event.max_orders or DEFAULT_DRIVER_CAPACITY
            repo.add(entry)
        elif entry is not None:
            logger.info("Driver role revoked", driver_id=str(event.user_id), new_role=event.new_role)
            repo._dao.delete(entry)

    @handle(DriverProfileUpdated)
    def on_driver_profile_updated(self, event: DriverProfileUpdated) -> None:
        entry = _roster_entry(event.user_id)
        if entry is None:
            logger.warning("Driver profile update for unknown driver", driver_id=str(event.user_id))
            return
        entry.max_orders = event.max_orders
        current_domain.repository_for(DriverRoster).add(entry)

    @handle(UserDeactivated)
    def on_user_deactivated(self, event: UserDeactivated) -> None:
        self._set_driver_active(event.user_id, False)

    @handle(UserReactivated)
    def on_user_reactivated(self, event: UserReactivated) -> None:
        self._set_driver_active(event.user_id, True)

    @handle(UserRemoved)
    def on_user_removed(self, event: UserRemoved) -> None:
        entry = _roster_entry(event.user_id)
        if entry is not None:
            current_domain.repository_for(DriverRoster)._dao.delete(entry)

        address_repo = current_domain.repository_for(DeliveryAddress)
        for address in address_repo._dao.query.filter(user_id=str(event.user_id)).all().items:
            address_repo._dao.delete(address)

    def _set_driver_active(self, user_id, is_active):
        entry = _roster_entry(user_id)
        if entry is None:
            return
        entry.is_active = is_active
        current_domain.repository_for(DriverRoster).add(entry)

    # -------------------------------------------------------------------
    # Address book
    # -------------------------------------------------------------------
    @handle(AddressAdded)
    def on_address_added(self, event: AddressAdded) -> None:
        current_domain.repository_for(DeliveryAddress).add(
            DeliveryAddress(address_id=str(event.address_id), **_address_fields(event))
        )

    @handle(AddressUpdated)
    def on_address_updated(self, event: AddressUpdated) -> None:
        repo = current_domain.repository_for(DeliveryAddress)
        try:
            address = repo.get(str(event.address_id))
        except ObjectNotFoundError:
            address = DeliveryAddress(address_id=str(event.address_id), **_address_fields(event))
        else:
            for field, value in _address_fields(event).items():
                setattr(address, field, value)
        repo.add(address)

    @handle(AddressRemoved)
    def on_address_removed(self, event: AddressRemoved) -> None:
        repo = current_domain.repository_for(DeliveryAddress)
        try:
            repo._dao.delete(repo.get(str(event.address_id)))
        except ObjectNotFoundError:
            logger.debug("Removed address was never recorded", address_id=str(event.address_id))
