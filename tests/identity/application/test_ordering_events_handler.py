"""Identity reacts to Ordering.OrderPlaced by syncing checkout contact details."""

import json
from datetime import UTC, datetime

from identity.user.ordering_events import OrderingEventsHandler
from identity.user.user import User
from protean import current_domain
from shared.events.ordering import OrderPlaced


def _order_placed(user_id, name="Sara Ali", phone="0551234567"):
    return OrderPlaced(
        order_id="ord-001",
        order_number="ORD-00000001",
        user_id=user_id,
        contact_name=name,
        contact_phone=phone,
        items=json.dumps([{"product_id": "p-1", "name": "Water", "quantity": 2, "unit_price": 5.0}]),
        subtotal=10.0,
        delivery_fee=25.0,
        tax=1.5,
        total=36.5,
        payment_method="CASH",
        placed_at=datetime.now(UTC),
    )


class TestOrderPlacedHandler:
    def test_updates_changed_contact_details(self, register_user):
        user_id = register_user()

        OrderingEventsHandler().on_order_placed(_order_placed(user_id, name="Sara Hassan", phone="0559999999"))

        user = current_domain.repository_for(User).get(user_id)
        assert user.name == "Sara Hassan"
        assert user.phone == "0559999999"

    def test_unchanged_details_leave_profile_alone(self, register_user):
        user_id = register_user()
        before = current_domain.repository_for(User).get(user_id).updated_at

        OrderingEventsHandler().on_order_placed(_order_placed(user_id))

        assert current_domain.repository_for(User).get(user_id).updated_at == before

    def test_phone_of_another_account_is_not_taken(self, register_user):
        register_user(name="Omar", phone="0552222222")
        user_id = register_user(phone="0551111111")

        OrderingEventsHandler().on_order_placed(_order_placed(user_id, name="Sara B", phone="0552222222"))

        user = current_domain.repository_for(User).get(user_id)
        assert user.phone == "0551111111"
        assert user.name == "Sara B"

    def test_unknown_user_is_ignored(self):
        OrderingEventsHandler().on_order_placed(_order_placed("missing-user"))
