"""Order placement: turns the customer's cart into a PENDING order."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Identifier, String, Text
from protean.utils.globals import current_domain
from shared.phone import normalize_phone

from ordering.cart.items import find_cart, retire_cart
from ordering.checkout.pricing import compute_totals, price_cart_items
from ordering.domain import ordering
from ordering.order.order import Order, PaymentMethod, generate_order_number
from ordering.projections.delivery_address import DeliveryAddress
from ordering.projections.product_price import current_pricing_settings
from ordering.shift.management import require_active_shift

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    full_name = String(required=True, max_length=100)
    phone = String(required=True, max_length=30)
    address_id = Identifier(required=True)
    shift_id = Identifier(required=True)
    payment_method = String(required=True, choices=PaymentMethod)
    terms_accepted = Boolean(default=False)
    notes = Text()


def _validate_contact(command):
    full_name = (command.full_name or "").strip()
    if not 2 <= len(full_name) <= 50:
        raise ValidationError({"full_name": ["Name must be between 2 and 50 characters"]})
    if not command.terms_accepted:
        raise ValidationError({"terms_accepted": ["Terms and conditions must be accepted"]})
    return full_name, normalize_phone(command.phone)


def _address_of(user_id, address_id):
    addresses = (
        current_domain.repository_for(DeliveryAddress)
        ._dao.query.filter(address_id=str(address_id), user_id=str(user_id))
        .all()
        .items
    )
    if not addresses:
        raise ValidationError({"address_id": ["Delivery address not found"]})
    return addresses[0]


def _unused_order_number():
    repo = current_domain.repository_for(Order)
    while True:
        number = generate_order_number()
        if not repo._dao.query.filter(order_number=number).all().items:
            return number


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        full_name, phone = _validate_contact(command)
        address = _address_of(command.user_id, command.address_id)
        shift = require_active_shift(command.shift_id)

        cart = find_cart(user_id=command.user_id)
        if cart is None or not cart.items:
            raise ValidationError({"cart": ["Cart is empty"]})

        lines = price_cart_items(cart.items)
        pricing = compute_totals(lines, current_pricing_settings())

        order = Order.place(
            user_id=command.user_id,
            contact_name=full_name,
            contact_phone=phone,
            items_data=lines,
            delivery_address=address.snapshot(),
            pricing=pricing,
            payment_method=command.payment_method,
            shift_id=str(shift.id),
            shift_name=shift.name,
            notes=command.notes,
            order_number=_unused_order_number(),
        )
        current_domain.repository_for(Order).add(order)
        retire_cart(cart)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            order_number=order.order_number,
            user_id=str(command.user_id),
            total=pricing["total"],
        )
        return {"order_id": str(order.id), "order_number": order.order_number}
