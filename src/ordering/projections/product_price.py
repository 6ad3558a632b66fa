"""Product prices and platform pricing rules, as Ordering sees them at checkout."""

from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, Float, Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import ordering

PRICING_SETTINGS_ID = "platform"

DEFAULT_TAX_PERCENTAGE = 15.0
DEFAULT_SHIPPING_FEE = 25.0
DEFAULT_MIN_ORDER_FOR_FREE_SHIPPING = 200.0
DEFAULT_CURRENCY = "SAR"


@ordering.projection
class ProductPrice:
    product_id = Identifier(identifier=True, required=True)
    name = String(required=True)
    price = Float(required=True)
    is_published = Boolean(default=False)
    out_of_stock = Boolean(default=False)
    is_removed = Boolean(default=False)

    @property
    def is_purchasable(self):
        return bool(self.is_published) and not self.out_of_stock and not self.is_removed


@ordering.projection
class PricingSettings:
    settings_id = Identifier(identifier=True, required=True)
    tax_percentage = Float(default=DEFAULT_TAX_PERCENTAGE)
    shipping_fee = Float(default=DEFAULT_SHIPPING_FEE)
    min_order_for_free_shipping = Float(default=DEFAULT_MIN_ORDER_FOR_FREE_SHIPPING)
    currency = String(default=DEFAULT_CURRENCY)


def current_pricing_settings():
    """Saved settings, or the defaults when the platform has none yet."""
    try:
        return current_domain.repository_for(PricingSettings).get(PRICING_SETTINGS_ID)
    except ObjectNotFoundError:
        return PricingSettings(settings_id=PRICING_SETTINGS_ID)
