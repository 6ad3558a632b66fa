"""Inbound cross-domain event handlers: Ordering reacts to Catalogue events.

Carts store product references only. Checkout prices them from the
ProductPrice projection and applies the platform's tax and delivery rules from
PricingSettings; both are maintained here.
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle
from shared.events.catalogue import (
    PlatformSettingsUpdated,
    ProductCreated,
    ProductDetailsUpdated,
    ProductPriceChanged,
    ProductPublished,
    ProductRemoved,
    ProductStockChanged,
    ProductUnpublished,
)

from ordering.domain import ordering
from ordering.order.order import Order
from ordering.projections.product_price import PricingSettings, ProductPrice, current_pricing_settings

logger = structlog.get_logger(__name__)

ordering.register_external_event(ProductCreated, "Catalogue.ProductCreated.v1")
ordering.register_external_event(ProductDetailsUpdated, "Catalogue.ProductDetailsUpdated.v1")
ordering.register_external_event(ProductPriceChanged, "Catalogue.ProductPriceChanged.v1")
ordering.register_external_event(ProductPublished, "Catalogue.ProductPublished.v1")
ordering.register_external_event(ProductUnpublished, "Catalogue.ProductUnpublished.v1")
ordering.register_external_event(ProductStockChanged, "Catalogue.ProductStockChanged.v1")
ordering.register_external_event(ProductRemoved, "Catalogue.ProductRemoved.v1")
ordering.register_external_event(PlatformSettingsUpdated, "Catalogue.PlatformSettingsUpdated.v1")


@ordering.event_handler(part_of=Order, stream_category="catalogue::product")
class CatalogueProductEventsHandler:
    @handle(ProductCreated)
    def on_product_created(self, event: ProductCreated) -> None:
        current_domain.repository_for(ProductPrice).add(
            ProductPrice(
                product_id=str(event.product_id),
                name=event.name,
                price=event.price,
                is_published=event.is_published,
            )
        )

    @handle(ProductDetailsUpdated)
    def on_details_updated(self, event: ProductDetailsUpdated) -> None:
        self._update(event.product_id, name=event.name)

    @handle(ProductPriceChanged)
    def on_price_changed(self, event: ProductPriceChanged) -> None:
        logger.info(
            "Checkout price changed",
            product_id=str(event.product_id),
            previous_price=event.previous_price,
            price=event.price,
        )
        self._update(event.product_id, price=event.price)

    @handle(ProductPublished)
    def on_published(self, event: ProductPublished) -> None:
        self._update(event.product_id, is_published=True)

    @handle(ProductUnpublished)
    def on_unpublished(self, event: ProductUnpublished) -> None:
        self._update(event.product_id, is_published=False)

    @handle(ProductStockChanged)
    def on_stock_changed(self, event: ProductStockChanged) -> None:
        self._update(event.product_id, out_of_stock=event.out_of_stock)

    @handle(ProductRemoved)
    def on_removed(self, event: ProductRemoved) -> None:
        self._update(event.product_id, is_removed=True, is_published=False)

    def _update(self, product_id, **values):
        repo = current_domain.repository_for(ProductPrice)
        try:
            record = repo.get(str(product_id))
        except ObjectNotFoundError:
            logger.warning("Catalogue event for unknown product", product_id=str(product_id))
            return
        for field, value in values.items():
            setattr(record, field, value)
        repo.add(record)


@ordering.event_handler(part_of=Order, stream_category="catalogue::platform_settings")
class CatalogueSettingsEventsHandler:
    @handle(PlatformSettingsUpdated)
    def on_settings_updated(self, event: PlatformSettingsUpdated) -> None:
        settings = current_pricing_settings()
        settings.tax_percentage = event.tax_percentage
        settings.shipping_fee = event.shipping_fee
        settings.min_order_for_free_shipping = event.min_order_for_free_shipping
        settings.currency = event.currency
        current_domain.repository_for(PricingSettings).add(settings)
