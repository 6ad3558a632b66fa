"""Domain events for the Offer aggregate."""

from protean.fields import Boolean, Float, Identifier, String, Text

from catalogue.domain import catalogue


@catalogue.event(part_of="Offer")
class OfferCreated:
    __version__ = 1

    offer_id: Identifier(required=True)
    title: String(required=True)
    discount_percentage: Float(required=True)
    product_ids: Text()


@catalogue.event(part_of="Offer")
class OfferStatusToggled:
    __version__ = 1

    offer_id: Identifier(required=True)
    is_active: Boolean(required=True)
