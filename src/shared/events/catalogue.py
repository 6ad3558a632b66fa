"""Cross-domain event contracts for Catalogue domain events.

Ordering prices carts at checkout from its own copy of product prices and
platform settings, kept current by these events.

The source-of-truth events are in src/catalogue/product/events.py and
src/catalogue/settings/events.py.
"""

from protean.core.event import BaseEvent
from protean.fields import Boolean, DateTime, Float, Identifier, String


class ProductCreated(BaseEvent):
    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True)
    slug = String(required=True)
    price = Float(required=True)
    compare_at_price = Float()
    image_url = String()
    category_slug = String()
    brand = String()
    size = String()
    is_published = Boolean(default=False)
    created_at = DateTime(required=True)


class ProductDetailsUpdated(BaseEvent):
    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True)
    slug = String(required=True)
    image_url = String()
    category_slug = String()
    brand = String()
    size = String()


class ProductPriceChanged(BaseEvent):
    __version__ = 1

    product_id = Identifier(required=True)
    previous_price = Float(required=True)
    price = Float(required=True)
    compare_at_price = Float()


class ProductPublished(BaseEvent):
    __version__ = 1

    product_id = Identifier(required=True)
    published_at = DateTime(required=True)


class ProductUnpublished(BaseEvent):
    __version__ = 1

    product_id = Identifier(required=True)
    unpublished_at = DateTime(required=True)


class ProductStockChanged(BaseEvent):
    __version__ = 1

    product_id = Identifier(required=True)
    out_of_stock = Boolean(required=True)


class ProductRemoved(BaseEvent):
    __version__ = 1

    product_id = Identifier(required=True)
    removed_at = DateTime(required=True)


class PlatformSettingsUpdated(BaseEvent):
    __version__ = 1

    settings_id = Identifier(required=True)
    tax_percentage = Float(required=True)
    shipping_fee = Float(required=True)
    min_order_for_free_shipping = Float(required=True)
    currency = String(required=True)
