"""Template registry: maps a template name to its renderer.

Every template renders a context dict into ``{"title": ..., "body": ...}``,
used both for the in-app inbox and for web push payloads.
"""

from notifications.templates.contact import ContactMessageTemplate
from notifications.templates.order import (
    DriverAssignedTemplate,
    NewOrderTemplate,
    OrderCancelledTemplate,
    OrderDeliveredTemplate,
    OrderShippedTemplate,
    TripStartedTemplate,
)
from notifications.templates.system import ActivateAccountTemplate, AddAddressTemplate, WelcomeTemplate

TEMPLATE_REGISTRY: dict[str, type] = {
    template.name: template
    for template in (
        NewOrderTemplate,
        OrderShippedTemplate,
        TripStartedTemplate,
        DriverAssignedTemplate,
        OrderDeliveredTemplate,
        OrderCancelledTemplate,
        WelcomeTemplate,
        AddAddressTemplate,
        ActivateAccountTemplate,
        ContactMessageTemplate,
    )
}


def get_template(name: str):
    """Look up a template class by name."""
    template_cls = TEMPLATE_REGISTRY.get(name)
    if template_cls is None:
        raise ValueError(f"No template registered under: {name}")
    return template_cls
