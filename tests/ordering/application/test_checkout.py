import json

import pytest
from ordering.cart.items import AddToCart, find_cart
from ordering.checkout.placement import PlaceOrder
from ordering.checkout.pricing import compute_totals
from ordering.order.order import Order, OrderStatus
from ordering.projections.product_price import (
    PRICING_SETTINGS_ID,
    PricingSettings,
    ProductPrice,
    current_pricing_settings,
)
from ordering.shift.management import DeactivateShift
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain


@pytest.fixture()
def checkout(add_address, add_product, add_shift):
    """A user with an address, a shift and a product in their cart."""
    add_address()
    add_product(price=10.0)
    shift_id = add_shift()
    current_domain.process(AddToCart(user_id="user-1", product_id="prod-1", quantity=3), asynchronous=False)
    return {
        "user_id": "user-1",
        "full_name": "Sara Ali",
        "phone": "055 123 4567",
        "address_id": "addr-1",
        "shift_id": shift_id,
        "payment_method": "CASH",
        "terms_accepted": True,
    }


def _place(**values):
    return current_domain.process(PlaceOrder(**values), asynchronous=False)


class TestComputeTotals:
    def test_defaults_charge_delivery_and_tax(self):
        lines = [{"unit_price": 10.0, "quantity": 3}]
        totals = compute_totals(lines, current_pricing_settings())
        assert totals == {"subtotal": 30.0, "delivery_fee": 25.0, "tax": 4.5, "total": 59.5, "currency": "SAR"}

    def test_free_delivery_from_minimum(self):
        lines = [{"unit_price": 100.0, "quantity": 2}]
        totals = compute_totals(lines, current_pricing_settings())
        assert totals["delivery_fee"] == 0.0
        assert totals["total"] == 230.0

    def test_saved_settings_are_used(self):
        current_domain.repository_for(PricingSettings).add(
            PricingSettings(
                settings_id=PRICING_SETTINGS_ID,
                tax_percentage=5.0,
                shipping_fee=10.0,
                min_order_for_free_shipping=50.0,
                currency="SAR",
            )
        )
        totals = compute_totals([{"unit_price": 12.345, "quantity": 1}], current_pricing_settings())
        assert totals["delivery_fee"] == 10.0
        assert totals["tax"] == 0.62
        assert totals["total"] == 22.96


class TestPlaceOrder:
    def test_order_is_placed_and_cart_deleted(self, checkout):
        result = _place(**checkout)

        order = current_domain.repository_for(Order).get(result["order_id"])
        assert order.order_number == result["order_number"]
        assert order.status == OrderStatus.PENDING.value
        assert order.contact_phone == "0551234567"
        assert order.pricing.total == 59.5
        assert order.delivery_address.delivery_instructions == "Ring twice"
        assert json.loads(order.items_json())[0]["unit_price"] == 10.0
        assert find_cart(user_id="user-1") is None

    def test_terms_must_be_accepted(self, checkout):
        with pytest.raises(ValidationError) as exc:
            _place(**{**checkout, "terms_accepted": False})
        assert "terms_accepted" in exc.value.messages

    @pytest.mark.parametrize("name", ["S", "x" * 51, "  "])
    def test_name_length(self, checkout, name):
        with pytest.raises(ValidationError):
            _place(**{**checkout, "full_name": name})

    def test_bad_phone(self, checkout):
        with pytest.raises(ValidationError):
            _place(**{**checkout, "phone": "abc"})

    def test_address_must_belong_to_user(self, checkout, add_address):
        add_address(user_id="user-2", address_id="addr-2")
        with pytest.raises(ValidationError) as exc:
            _place(**{**checkout, "address_id": "addr-2"})
        assert "address_id" in exc.value.messages

    def test_shift_must_be_active(self, checkout):
        current_domain.process(DeactivateShift(shift_id=checkout["shift_id"]), asynchronous=False)
        with pytest.raises(ValidationError) as exc:
            _place(**checkout)
        assert "shift_id" in exc.value.messages

    def test_cart_must_not_be_empty(self, checkout, add_address):
        add_address(user_id="user-2", address_id="addr-2")
        with pytest.raises(ValidationError) as exc:
            _place(**{**checkout, "user_id": "user-2", "address_id": "addr-2"})
        assert "cart" in exc.value.messages

    def test_unavailable_products_are_rejected(self, checkout):
        repo = current_domain.repository_for(ProductPrice)
        product = repo.get("prod-1")
        product.out_of_stock = True
        repo.add(product)

        with pytest.raises(ValidationError) as exc:
            _place(**checkout)
        assert "items" in exc.value.messages
        assert find_cart(user_id="user-1") is not None

    def test_unknown_product_is_rejected(self, checkout):
        current_domain.process(AddToCart(user_id="user-1", product_id="prod-404"), asynchronous=False)
        with pytest.raises(ValidationError):
            _place(**checkout)
