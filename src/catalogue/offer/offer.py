"""Offer aggregate: promotional banners shown on the storefront home page."""

import json
from datetime import datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Integer, String, Text

from catalogue.domain import catalogue


@catalogue.aggregate
class Offer:
    title: String(required=True, max_length=150)
    description: Text()
    discount_percentage: Float(default=0.0, min_value=0.0, max_value=100.0)
    product_ids: Text()  # JSON list of product ids
    banner_url: String(max_length=500)
    is_active: Boolean(default=True)
    display_order: Integer(default=0)
    created_at: DateTime(default=datetime.now)

    @classmethod
    def create(cls, title, discount_percentage=0.0, product_ids=None, description=None, banner_url=None, display_order=0):
        from catalogue.offer.events import OfferCreated

        offer = cls(
            title=title,
            description=description,
            discount_percentage=discount_percentage,
            product_ids=json.dumps(list(product_ids or [])),
            banner_url=banner_url,
            display_order=display_order,
            created_at=datetime.now(),
        )
        offer.raise_(
            OfferCreated(
                offer_id=offer.id,
                title=title,
                discount_percentage=offer.discount_percentage,
                product_ids=offer.product_ids,
            )
        )
        return offer

    @property
    def product_id_list(self):
        return json.loads(self.product_ids) if self.product_ids else []

    def toggle_status(self):
        from catalogue.offer.events import OfferStatusToggled

        self.is_active = not self.is_active
        self.raise_(OfferStatusToggled(offer_id=self.id, is_active=self.is_active))
        return self.is_active

    def reorder(self, display_order):
        if display_order < 0:
            raise ValidationError({"display_order": ["Display order cannot be negative"]})
        self.display_order = display_order
