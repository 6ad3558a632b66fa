"""PlatformSettings aggregate: checkout pricing rules and company details.

There is a single settings record, stored under the id ``platform``. Until an
admin saves one, the defaults below apply.
"""

from protean.fields import Float, String

from catalogue.domain import catalogue

PLATFORM_SETTINGS_ID = "platform"

DEFAULT_TAX_PERCENTAGE = 15.0
DEFAULT_SHIPPING_FEE = 25.0
DEFAULT_MIN_ORDER_FOR_FREE_SHIPPING = 200.0
DEFAULT_CURRENCY = "SAR"


@catalogue.aggregate
class PlatformSettings:
    tax_percentage: Float(default=DEFAULT_TAX_PERCENTAGE, min_value=0.0, max_value=100.0)
    shipping_fee: Float(default=DEFAULT_SHIPPING_FEE, min_value=0.0)
    min_order_for_free_shipping: Float(default=DEFAULT_MIN_ORDER_FOR_FREE_SHIPPING, min_value=0.0)
    currency: String(max_length=3, default=DEFAULT_CURRENCY)
    company_name: String(max_length=150)
    company_phone: String(max_length=20)
    company_email: String(max_length=254)

    def update(self, **changes):
        from catalogue.settings.events import PlatformSettingsUpdated

        for field, value in changes.items():
            if value is not None:
                setattr(self, field, value)

        self.raise_(
            PlatformSettingsUpdated(
                settings_id=self.id,
                tax_percentage=self.tax_percentage,
                shipping_fee=self.shipping_fee,
                min_order_for_free_shipping=self.min_order_for_free_shipping,
                currency=self.currency,
            )
        )
