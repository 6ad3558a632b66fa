import pytest
from protean.exceptions import ValidationError
from reviews.rating.events import AppRated, DeliveryRated
from reviews.rating.rating import OrderRating, RatingType


class TestDeliveryRating:
    def test_rate_delivery(self):
        record = OrderRating.rate_delivery(
            user_id="user-1", order_id="ord-1", driver_id="driver-1", rating=5, comment="On time"
        )
        assert record.rating_type == RatingType.DELIVERY.value
        assert str(record.driver_id) == "driver-1"
        assert isinstance(record._events[-1], DeliveryRated)

    def test_delivery_rating_needs_order(self):
        with pytest.raises(ValidationError):
            OrderRating(rating_type="Delivery", user_id="user-1", rating=4, comment="Fine driver")


class TestAppRating:
    def test_rate_app(self):
        record = OrderRating.rate_app(user_id="user-1", feature="Checkout", rating=3, comment="Too many steps")
        assert record.feature == "Checkout"
        assert record.order_id is None
        assert isinstance(record._events[-1], AppRated)

    def test_app_rating_needs_feature(self):
        with pytest.raises(ValidationError):
            OrderRating(rating_type="App", user_id="user-1", rating=3, comment="Nice app")

    def test_short_comment(self):
        with pytest.raises(ValidationError):
            OrderRating.rate_app(user_id="user-1", feature="Search", rating=3, comment="no")
