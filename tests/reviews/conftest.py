import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def reviews_bed():
    from reviews.domain import reviews

    bed = DomainFixture(reviews)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(reviews_bed):
    with reviews_bed.domain_context():
        yield


@pytest.fixture()
def deliver():
    """Record a delivered order the way the OrderDelivered handler would."""
    import json
    from datetime import UTC, datetime

    from reviews.review.ordering_events import OrderingEventsHandler
    from shared.events.ordering import OrderDelivered

    def _deliver(order_id="ord-1", user_id="user-1", product_ids=("prod-1",), driver_id="driver-1"):
        items = [{"product_id": pid, "name": f"Product {pid}", "quantity": 1, "unit_price": 10.0} for pid in product_ids]
        OrderingEventsHandler().on_order_delivered(
            OrderDelivered(
                order_id=order_id,
                order_number=f"ORD-{order_id[-1]:0>8}",
                user_id=user_id,
                driver_id=driver_id,
                items=json.dumps(items),
                delivered_at=datetime.now(UTC),
            )
        )
        return order_id

    return _deliver
