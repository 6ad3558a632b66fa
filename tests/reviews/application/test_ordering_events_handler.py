"""Application tests for OrderingEventsHandler: Reviews reacts to OrderDelivered."""

from protean import current_domain
from reviews.projections.delivered_orders import DeliveredOrder
from reviews.projections.verified_purchases import VerifiedPurchase, has_purchased


class TestOrderDelivered:
    def test_records_delivery_and_purchases(self, deliver):
        deliver(product_ids=("prod-1", "prod-2"))

        order = current_domain.repository_for(DeliveredOrder).get("ord-1")
        assert str(order.driver_id) == "driver-1"
        assert has_purchased("user-1", "prod-1")
        assert has_purchased("user-1", "prod-2")
        assert not has_purchased("user-2", "prod-1")

    def test_repeat_purchase_is_recorded_once(self, deliver):
        deliver("ord-1", product_ids=("prod-1",))
        deliver("ord-2", product_ids=("prod-1",))

        purchases = current_domain.repository_for(VerifiedPurchase)._dao.query.filter(user_id="user-1").all()
        assert purchases.total == 1
        assert str(purchases.items[0].order_id) == "ord-1"
