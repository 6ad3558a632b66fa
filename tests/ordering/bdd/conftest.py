"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from ordering.cart.cart import Cart
from ordering.cart.events import (
    CartClaimed,
    CartItemAdded,
    CartItemQuantityChanged,
    CartItemRemoved,
    CartsMerged,
    CartSynced,
)
from ordering.order.events import (
    DriverAssigned,
    DriverUnassigned,
    OrderCancelled,
    OrderDelivered,
    OrderPlaced,
    OrderRevertedToAssigned,
    TripStarted,
)
from ordering.order.order import Order
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then

_CART_EVENT_CLASSES = {
    "CartItemAdded": CartItemAdded,
    "CartItemQuantityChanged": CartItemQuantityChanged,
    "CartItemRemoved": CartItemRemoved,
    "CartsMerged": CartsMerged,
    "CartClaimed": CartClaimed,
    "CartSynced": CartSynced,
}

_ORDER_EVENT_CLASSES = {
    "OrderPlaced": OrderPlaced,
    "DriverAssigned": DriverAssigned,
    "DriverUnassigned": DriverUnassigned,
    "TripStarted": TripStarted,
    "OrderDelivered": OrderDelivered,
    "OrderCancelled": OrderCancelled,
    "OrderRevertedToAssigned": OrderRevertedToAssigned,
}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("an empty cart for a signed-in customer", target_fixture="cart")
def empty_user_cart():
    return Cart.create(user_id="user-1")


@given(parsers.cfparse('a cart holding {quantity:d} of "{product_id}"'), target_fixture="cart")
def cart_with_item(quantity, product_id):
    cart = Cart.create(user_id="user-1")
    cart.add_item(product_id, quantity)
    cart._events.clear()
    return cart


def _place_order():
    order = Order.place(
        user_id="user-1",
        contact_name="Sara Ali",
        contact_phone="0551234567",
        items_data=[{"product_id": "prod-1", "name": "Spring Water", "quantity": 1, "unit_price": 10.0}],
        delivery_address={"district": "Al Olaya", "street": "King Fahd Road"},
        pricing={"subtotal": 10.0, "delivery_fee": 25.0, "tax": 1.5, "total": 36.5},
        payment_method="CASH",
    )
    order._events.clear()
    return order


@given("a pending order", target_fixture="order")
def pending_order():
    return _place_order()


@given(parsers.cfparse('an order assigned to "{driver_id}"'), target_fixture="order")
def assigned_order(driver_id):
    order = _place_order()
    order.assign_driver(driver_id, driver_name=driver_id.title())
    order._events.clear()
    return order


# ---------------------------------------------------------------------------
# Then steps (shared)
# ---------------------------------------------------------------------------
@then("the action fails with a validation error")
def action_fails_with_validation_error(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@then(parsers.cfparse("a {event_type} cart event is raised"))
def cart_event_raised(cart, event_type):
    event_cls = _CART_EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in cart._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in cart._events]}"


@then(parsers.cfparse("a {event_type} order event is raised"))
def order_event_raised(order, event_type):
    event_cls = _ORDER_EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in order._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in order._events]}"


@then(parsers.cfparse("the order status is {status}"))
def order_status_is(order, status):
    assert order.status == status
