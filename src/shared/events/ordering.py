"""Cross-domain event contracts for Ordering domain events.

Consumers:
- Identity copies the checkout contact details back onto the customer.
- Catalogue counts units sold per product for best sellers.
- Reviews records delivered purchases for verified reviews and delivery ratings.
- Notifications alerts staff about new orders and customers about progress.

The source-of-truth events are in src/ordering/order/events.py.
"""

from protean.core.event import BaseEvent
from protean.fields import DateTime, Float, Identifier, String, Text


class OrderPlaced(BaseEvent):
    """A customer checked out their cart."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    user_id = Identifier(required=True)
    contact_name = String(required=True)
    contact_phone = String(required=True)
    items = Text(required=True)  # JSON list of {product_id, name, quantity, unit_price}
    subtotal = Float(required=True)
    delivery_fee = Float(required=True)
    tax = Float(required=True)
    total = Float(required=True)
    payment_method = String(required=True)
    placed_at = DateTime(required=True)


class DriverAssigned(BaseEvent):
    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    user_id = Identifier(required=True)
    driver_id = Identifier(required=True)
    driver_name = String()
    previous_driver_id = Identifier()
    assigned_at = DateTime(required=True)


class DriverUnassigned(BaseEvent):
    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    user_id = Identifier(required=True)
    driver_id = Identifier(required=True)
    unassigned_at = DateTime(required=True)


class TripStarted(BaseEvent):
    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    user_id = Identifier(required=True)
    driver_id = Identifier(required=True)
    driver_name = String()
    started_at = DateTime(required=True)


class OrderDelivered(BaseEvent):
    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    user_id = Identifier(required=True)
    driver_id = Identifier()
    items = Text(required=True)  # JSON list of {product_id, name, quantity, unit_price}
    delivered_at = DateTime(required=True)


class OrderCancelled(BaseEvent):
    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    user_id = Identifier(required=True)
    reason = String()
    cancelled_by = String(required=True)
    cancelled_at = DateTime(required=True)


class OrderRevertedToAssigned(BaseEvent):
    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    user_id = Identifier(required=True)
    driver_id = Identifier(required=True)
    reverted_at = DateTime(required=True)
