"""Domain events for the Order aggregate.

Every event here is also published to other contexts; the contracts in
``shared/events/ordering.py`` mirror these field for field.
"""

from protean.fields import DateTime, Float, Identifier, String, Text

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A customer checked out their cart."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    user_id = Identifier(required=True)
    contact_name = String(required=True)
    contact_phone = String(required=True)
    items = Text(required=True)  # JSON: list of {product_id, name, quantity, unit_price}
    subtotal = Float(required=True)
    delivery_fee = Float(required=True)
    tax = Float(required=True)
    total = Float(required=True)
    payment_method = String(required=True)
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class DriverAssigned:
    """A driver was put on the order, possibly replacing another one."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    user_id = Identifier(required=True)
    driver_id = Identifier(required=True)
    driver_name = String()
    previous_driver_id = Identifier()
    assigned_at = DateTime(required=True)


@ordering.event(part_of="Order")
class DriverUnassigned:
    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    user_id = Identifier(required=True)
    driver_id = Identifier(required=True)
    unassigned_at = DateTime(required=True)


@ordering.event(part_of="Order")
class TripStarted:
    """The driver left with the order; it is now in transit."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    user_id = Identifier(required=True)
    driver_id = Identifier(required=True)
    driver_name = String()
    started_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderDelivered:
    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    user_id = Identifier(required=True)
    driver_id = Identifier()
    items = Text(required=True)  # JSON: list of {product_id, name, quantity, unit_price}
    delivered_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderCancelled:
    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    user_id = Identifier(required=True)
    reason = String()
    cancelled_by = String(required=True)
    cancelled_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderRevertedToAssigned:
    """An in-transit order went back to its driver's queue."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    user_id = Identifier(required=True)
    driver_id = Identifier(required=True)
    reverted_at = DateTime(required=True)
