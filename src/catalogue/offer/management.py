"""Offer management: commands, handler and the storefront query."""

import json

from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.offer.offer import Offer


@catalogue.command(part_of="Offer")
class CreateOffer:
    title: String(required=True, max_length=150)
    description: Text()
    discount_percentage: Float(default=0.0, min_value=0.0, max_value=100.0)
    product_ids: Text()  # JSON list of product ids
    banner_url: String(max_length=500)
    display_order: Integer(default=0)


@catalogue.command(part_of="Offer")
class ToggleOfferStatus:
    offer_id: Identifier(required=True)


@catalogue.command(part_of="Offer")
class ReorderOffer:
    offer_id: Identifier(required=True)
    display_order: Integer(required=True)


@catalogue.command_handler(part_of=Offer)
class ManageOfferHandler:
    @handle(CreateOffer)
    def create_offer(self, command):
        product_ids = json.loads(command.product_ids) if command.product_ids else []
        offer = Offer.create(
            title=command.title,
            description=command.description,
            discount_percentage=command.discount_percentage or 0.0,
            product_ids=product_ids,
            banner_url=command.banner_url,
            display_order=command.display_order or 0,
        )
        current_domain.repository_for(Offer).add(offer)
        return str(offer.id)

    @handle(ToggleOfferStatus)
    def toggle_offer_status(self, command):
        repo = current_domain.repository_for(Offer)
        offer = repo.get(command.offer_id)
        is_active = offer.toggle_status()
        repo.add(offer)
        return is_active

    @handle(ReorderOffer)
    def reorder_offer(self, command):
        repo = current_domain.repository_for(Offer)
        offer = repo.get(command.offer_id)
        offer.reorder(command.display_order)
        repo.add(offer)


def list_active_offers():
    offers = current_domain.repository_for(Offer)._dao.query.filter(is_active=True).all().items
    return sorted(offers, key=lambda o: (o.display_order or 0, o.created_at))
