"""Trip lookups used by the driver actions and the tracking screen."""

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from ordering.trip.trip import ActiveTrip


def trip_for_order(order_id):
    trips = current_domain.repository_for(ActiveTrip)._dao.query.filter(order_id=str(order_id)).all().items
    return trips[0] if trips else None


def trip_for_driver(driver_id):
    trips = current_domain.repository_for(ActiveTrip)._dao.query.filter(driver_id=str(driver_id)).all().items
    return trips[0] if trips else None


def require_trip(order_id):
    trip = trip_for_order(order_id)
    if trip is None:
        raise ValidationError({"order_id": ["Order has no active trip"]})
    return trip


def close_trip(order_id):
    """Delete the order's trip, if any."""
    trip = trip_for_order(order_id)
    if trip is not None:
        current_domain.repository_for(ActiveTrip)._dao.delete(trip)


def active_trips():
    return current_domain.repository_for(ActiveTrip)._dao.query.all().items
