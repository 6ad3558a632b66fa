"""Inbound cross-domain event handler: Catalogue reacts to Ordering events.

Every checkout adds the ordered quantities to each product's sales count,
which drives the "most sold" sort and the best sellers list.
"""

import json

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle
from shared.events.ordering import OrderPlaced

from catalogue.domain import catalogue
from catalogue.product.product import Product

logger = structlog.get_logger(__name__)

catalogue.register_external_event(OrderPlaced, "Ordering.OrderPlaced.v1")


@catalogue.event_handler(part_of=Product, stream_category="ordering::order")
class OrderingSalesHandler:
    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        items = json.loads(event.items) if isinstance(event.items, str) else (event.items or [])

        # An order may list the same product more than once
        quantities = {}
        for item in items:
            product_id = str(item["product_id"])
            quantities[product_id] = quantities.get(product_id, 0) + int(item["quantity"])

        repo = current_domain.repository_for(Product)
        for product_id, quantity in quantities.items():
            try:
                product = repo.get(product_id)
            except ObjectNotFoundError:
                logger.warning("Sale recorded for unknown product", product_id=product_id, order_id=str(event.order_id))
                continue
            product.record_sale(quantity)
            repo.add(product)
