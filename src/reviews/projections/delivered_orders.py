"""DeliveredOrder: the user's delivered orders, open for a delivery rating."""

from protean.fields import DateTime, Identifier, String

from reviews.domain import reviews


@reviews.projection
class DeliveredOrder:
    order_id = Identifier(identifier=True, required=True)
    order_number = String(required=True)
    user_id = Identifier(required=True)
    driver_id = Identifier()
    delivered_at = DateTime(required=True)
