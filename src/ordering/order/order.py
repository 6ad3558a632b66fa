"""Order aggregate: a checked-out cart on its way to the customer.

State Machine:
    PENDING → ASSIGNED → IN_TRANSIT → DELIVERED
    ASSIGNED → PENDING (driver unassigned)
    IN_TRANSIT → ASSIGNED (trip reverted)
    PENDING / ASSIGNED / IN_TRANSIT → CANCELED

DELIVERED and CANCELED are terminal.
"""

import json
import secrets
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import (
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
    ValueObject,
)

from ordering.domain import ordering
from ordering.order.events import (
    DriverAssigned,
    DriverUnassigned,
    OrderCancelled,
    OrderDelivered,
    OrderPlaced,
    OrderRevertedToAssigned,
    TripStarted,
)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "PENDING"
    ASSIGNED = "ASSIGNED"
    IN_TRANSIT = "IN_TRANSIT"
    DELIVERED = "DELIVERED"
    CANCELED = "CANCELED"


class PaymentMethod(Enum):
    CASH = "CASH"
    CARD = "CARD"
    WALLET = "WALLET"


class CancellationActor(Enum):
    CUSTOMER = "Customer"
    DRIVER = "Driver"
    ADMIN = "Admin"


_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.ASSIGNED, OrderStatus.CANCELED},
    OrderStatus.ASSIGNED: {OrderStatus.IN_TRANSIT, OrderStatus.CANCELED, OrderStatus.PENDING},
    OrderStatus.IN_TRANSIT: {OrderStatus.DELIVERED, OrderStatus.CANCELED, OrderStatus.ASSIGNED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELED: set(),  # Terminal
}

# A driver's workload: orders they still have to deliver
ACTIVE_DRIVER_STATUSES = (OrderStatus.ASSIGNED.value, OrderStatus.IN_TRANSIT.value)


def generate_order_number():
    return f"ORD-{secrets.randbelow(10**8):08d}"


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@ordering.value_object(part_of="Order")
class ShippingAddress:
    """The delivery address as it was at checkout.

    Later edits to the customer's address book do not touch placed orders.
    """

    address_id = Identifier()
    label = String(max_length=50)
    district = String(required=True, max_length=100)
    street = String(required=True, max_length=200)
    building_number = String(max_length=20)
    floor = String(max_length=10)
    apartment = String(max_length=10)
    landmark = String(max_length=200)
    delivery_instructions = String(max_length=500)
    latitude = Float()
    longitude = Float()


@ordering.value_object(part_of="Order")
class OrderPricing:
    """Checkout totals, locked when the order is placed."""

    subtotal = Float(default=0.0)
    delivery_fee = Float(default=0.0)
    tax = Float(default=0.0)
    total = Float(default=0.0)
    currency = String(max_length=3, default="SAR")


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderItem:
    """A product line, with the name and unit price snapshotted at checkout."""

    product_id = Identifier(required=True)
    name = String(required=True, max_length=200)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)

    def to_dict(self):
        return {
            "product_id": str(self.product_id),
            "name": self.name,
            "quantity": self.quantity,
            "unit_price": self.unit_price,
        }


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    order_number = String(required=True, max_length=20)
    user_id = Identifier(required=True)
    contact_name = String(required=True, max_length=50)
    contact_phone = String(required=True, max_length=20)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    items = HasMany(OrderItem)
    delivery_address = ValueObject(ShippingAddress)
    pricing = ValueObject(OrderPricing)
    payment_method = String(choices=PaymentMethod, required=True)
    shift_id = Identifier()
    shift_name = String(max_length=50)
    notes = Text()
    driver_id = Identifier()
    driver_name = String(max_length=50)
    cancel_reason = String(max_length=500)
    cancelled_by = String(max_length=50)
    placed_at = DateTime()
    assigned_at = DateTime()
    trip_started_at = DateTime()
    delivered_at = DateTime()
    cancelled_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        user_id,
        contact_name,
        contact_phone,
        items_data,
        delivery_address,
        pricing,
        payment_method,
        shift_id=None,
        shift_name=None,
        notes=None,
        order_number=None,
    ):
        """Create a PENDING order from checkout data.

        Args:
            items_data: List of dicts with product_id, name, quantity, unit_price.
            delivery_address: Dict matching the ShippingAddress fields.
            pricing: Dict with subtotal, delivery_fee, tax, total and currency.
        """
        if not items_data:
            raise ValidationError({"items": ["An order needs at least one item"]})

        now = datetime.now(UTC)
        order = cls(
            order_number=order_number or generate_order_number(),
            user_id=user_id,
            contact_name=contact_name,
            contact_phone=contact_phone,
            status=OrderStatus.PENDING.value,
            items=[OrderItem(**item) for item in items_data],
            delivery_address=ShippingAddress(**delivery_address),
            pricing=OrderPricing(**pricing),
            payment_method=payment_method,
            shift_id=shift_id,
            shift_name=shift_name,
            notes=notes,
            placed_at=now,
            updated_at=now,
        )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                order_number=order.order_number,
                user_id=str(user_id),
                contact_name=contact_name,
                contact_phone=contact_phone,
                items=order.items_json(),
                subtotal=order.pricing.subtotal,
                delivery_fee=order.pricing.delivery_fee,
                tax=order.pricing.tax,
                total=order.pricing.total,
                payment_method=payment_method,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------
    def items_json(self):
        return json.dumps([item.to_dict() for item in self.items])

    def _assert_can_transition(self, target_status):
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS[current]:
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def assert_driver(self, driver_id):
        if not self.driver_id or str(self.driver_id) != str(driver_id):
            raise ValidationError({"driver_id": ["Order is not assigned to this driver"]})

    # -------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------
    def check_assignable(self, driver_id):
        if self.driver_id and str(self.driver_id) == str(driver_id):
            raise ValidationError({"driver_id": [f"Order is already assigned to {self.driver_name or 'this driver'}"]})

        current = OrderStatus(self.status)
        if current not in (OrderStatus.PENDING, OrderStatus.ASSIGNED):
            raise ValidationError({"status": [f"Cannot assign a driver to an order in {current.value}"]})

    def assign_driver(self, driver_id, driver_name=None):
        """Put a driver on a PENDING order, or swap the driver of an ASSIGNED one."""
        self.check_assignable(driver_id)

        previous_driver_id = self.driver_id
        now = datetime.now(UTC)
        self.driver_id = driver_id
        self.driver_name = driver_name
        self.status = OrderStatus.ASSIGNED.value
        self.assigned_at = now
        self.updated_at = now

        self.raise_(
            DriverAssigned(
                order_id=str(self.id),
                order_number=self.order_number,
                user_id=str(self.user_id),
                driver_id=str(driver_id),
                driver_name=driver_name,
                previous_driver_id=str(previous_driver_id) if previous_driver_id else None,
                assigned_at=now,
            )
        )

    def unassign_driver(self):
        if not self.driver_id:
            raise ValidationError({"driver_id": ["Order has no assigned driver"]})
        self._assert_can_transition(OrderStatus.PENDING)

        driver_id = self.driver_id
        now = datetime.now(UTC)
        self.driver_id = None
        self.driver_name = None
        self.assigned_at = None
        self.status = OrderStatus.PENDING.value
        self.updated_at = now

        self.raise_(
            DriverUnassigned(
                order_id=str(self.id),
                order_number=self.order_number,
                user_id=str(self.user_id),
                driver_id=str(driver_id),
                unassigned_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Delivery
    # -------------------------------------------------------------------
    def start_trip(self, driver_id=None):
        """Move an ASSIGNED order to IN_TRANSIT.

        When ``driver_id`` is given it must be the assigned driver.
        """
        if driver_id is not None:
            self.assert_driver(driver_id)
        if not self.driver_id:
            raise ValidationError({"driver_id": ["An order needs an assigned driver before it can be in transit"]})
        self._assert_can_transition(OrderStatus.IN_TRANSIT)

        now = datetime.now(UTC)
        self.status = OrderStatus.IN_TRANSIT.value
        self.trip_started_at = now
        self.updated_at = now

        self.raise_(
            TripStarted(
                order_id=str(self.id),
                order_number=self.order_number,
                user_id=str(self.user_id),
                driver_id=str(self.driver_id),
                driver_name=self.driver_name,
                started_at=now,
            )
        )

    def deliver(self, driver_id=None):
        if driver_id is not None:
            self.assert_driver(driver_id)
        self._assert_can_transition(OrderStatus.DELIVERED)

        now = datetime.now(UTC)
        self.status = OrderStatus.DELIVERED.value
        self.delivered_at = now
        self.updated_at = now

        self.raise_(
            OrderDelivered(
                order_id=str(self.id),
                order_number=self.order_number,
                user_id=str(self.user_id),
                driver_id=str(self.driver_id) if self.driver_id else None,
                items=self.items_json(),
                delivered_at=now,
            )
        )

    def revert_to_assigned(self, driver_id=None):
        """Send an in-transit order back to its driver's queue."""
        if driver_id is not None:
            self.assert_driver(driver_id)
        if OrderStatus(self.status) != OrderStatus.IN_TRANSIT:
            raise ValidationError({"status": ["Only in-transit orders can be reverted"]})

        now = datetime.now(UTC)
        self.status = OrderStatus.ASSIGNED.value
        self.trip_started_at = None
        self.updated_at = now

        self.raise_(
            OrderRevertedToAssigned(
                order_id=str(self.id),
                order_number=self.order_number,
                user_id=str(self.user_id),
                driver_id=str(self.driver_id),
                reverted_at=now,
            )
        )

    def cancel(self, reason=None, cancelled_by=CancellationActor.ADMIN.value):
        self._assert_can_transition(OrderStatus.CANCELED)

        now = datetime.now(UTC)
        self.status = OrderStatus.CANCELED.value
        self.cancel_reason = reason
        self.cancelled_by = cancelled_by
        self.cancelled_at = now
        self.updated_at = now

        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                order_number=self.order_number,
                user_id=str(self.user_id),
                reason=reason,
                cancelled_by=cancelled_by,
                cancelled_at=now,
            )
        )

    def transition_to(self, status, notes=None, cancelled_by=CancellationActor.ADMIN.value):
        """Apply a back-office status change through the transition table."""
        try:
            target = OrderStatus(status)
        except ValueError:
            raise ValidationError({"status": [f"Unknown order status '{status}'"]}) from None

        current = OrderStatus(self.status)
        if target == current:
            raise ValidationError({"status": [f"Order is already {current.value}"]})

        if target == OrderStatus.CANCELED:
            self.cancel(reason=notes, cancelled_by=cancelled_by)
        elif target == OrderStatus.IN_TRANSIT:
            self.start_trip()
        elif target == OrderStatus.DELIVERED:
            self.deliver()
        elif target == OrderStatus.PENDING:
            self.unassign_driver()
        elif current == OrderStatus.IN_TRANSIT:
            self.revert_to_assigned()
        else:
            # PENDING → ASSIGNED needs a driver; use assign_driver instead
            raise ValidationError({"driver_id": ["Assign a driver to move an order to ASSIGNED"]})
