"""Domain events for the PlatformSettings aggregate."""

from protean.fields import Float, Identifier, String

from catalogue.domain import catalogue


@catalogue.event(part_of="PlatformSettings")
class PlatformSettingsUpdated:
    """Pricing rules changed; Ordering keeps its own copy for checkout."""

    __version__ = 1

    settings_id: Identifier(required=True)
    tax_percentage: Float(required=True)
    shipping_fee: Float(required=True)
    min_order_for_free_shipping: Float(required=True)
    currency: String(required=True)
