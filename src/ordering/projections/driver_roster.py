"""Driver roster: who can be dispatched, and how many orders each may carry."""

from protean.fields import Boolean, Identifier, Integer, String

from ordering.domain import ordering

DEFAULT_DRIVER_CAPACITY = 3


@ordering.projection
class DriverRoster:
    driver_id = Identifier(identifier=True, required=True)
    name = String(required=True)
    phone = String()
    is_active = Boolean(default=True)
    max_orders = Integer(default=DEFAULT_DRIVER_CAPACITY)
