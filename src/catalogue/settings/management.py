"""Platform settings: command, handler and read helper."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Float, String
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.settings.platform import PLATFORM_SETTINGS_ID, PlatformSettings


@catalogue.command(part_of="PlatformSettings")
class UpdatePlatformSettings:
    tax_percentage: Float(min_value=0.0, max_value=100.0)
    shipping_fee: Float(min_value=0.0)
    min_order_for_free_shipping: Float(min_value=0.0)
    currency: String(max_length=3)
    company_name: String(max_length=150)
    company_phone: String(max_length=20)
    company_email: String(max_length=254)


def get_platform_settings():
    """The saved settings, or an unsaved record carrying the defaults."""
    try:
        return current_domain.repository_for(PlatformSettings).get(PLATFORM_SETTINGS_ID)
    except ObjectNotFoundError:
        return PlatformSettings(id=PLATFORM_SETTINGS_ID)


@catalogue.command_handler(part_of=PlatformSettings)
class PlatformSettingsHandler:
    @handle(UpdatePlatformSettings)
    def update_platform_settings(self, command):
        settings = get_platform_settings()
        settings.update(
            tax_percentage=command.tax_percentage,
            shipping_fee=command.shipping_fee,
            min_order_for_free_shipping=command.min_order_for_free_shipping,
            currency=command.currency,
            company_name=command.company_name,
            company_phone=command.company_phone,
            company_email=command.company_email,
        )
        current_domain.repository_for(PlatformSettings).add(settings)
