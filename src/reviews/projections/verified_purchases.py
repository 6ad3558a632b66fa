"""VerifiedPurchase: one row per delivered (user, product) pair.

Populated by the OrderDelivered cross-domain event handler and read when a
review is submitted to flag it as verified.
"""

from protean.fields import DateTime, Identifier, String
from protean.utils.globals import current_domain

from reviews.domain import reviews


@reviews.projection
class VerifiedPurchase:
    purchase_id = Identifier(identifier=True, required=True)  # "{user_id}:{product_id}"
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    product_name = String()
    order_id = Identifier(required=True)
    delivered_at = DateTime(required=True)


def purchase_key(user_id, product_id):
    return f"{user_id}:{product_id}"


def has_purchased(user_id, product_id):
    purchases = (
        current_domain.repository_for(VerifiedPurchase)
        ._dao.query.filter(user_id=str(user_id), product_id=str(product_id))
        .all()
        .items
    )
    return bool(purchases)
