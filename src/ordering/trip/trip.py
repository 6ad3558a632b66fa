"""ActiveTrip aggregate: live position of a driver out on a delivery.

A trip exists only while its order is IN_TRANSIT; a driver has at most one.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, Float, Identifier, Integer, String

from ordering.domain import ordering


@ordering.aggregate
class ActiveTrip:
    order_id = Identifier(required=True)
    order_number = String(required=True, max_length=20)
    driver_id = Identifier(required=True)
    latitude = Float()
    longitude = Float()
    update_count = Integer(default=0)
    started_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def start(cls, order_id, order_number, driver_id, latitude=None, longitude=None):
        now = datetime.now(UTC)
        return cls(
            order_id=order_id,
            order_number=order_number,
            driver_id=driver_id,
            latitude=latitude,
            longitude=longitude,
            update_count=0,
            started_at=now,
            updated_at=now,
        )

    def move_to(self, latitude, longitude):
        self.latitude = latitude
        self.longitude = longitude
        self.update_count = (self.update_count or 0) + 1
        self.updated_at = datetime.now(UTC)
