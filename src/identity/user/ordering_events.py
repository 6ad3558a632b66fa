"""Inbound cross-domain event handler: Identity reacts to Ordering events.

At checkout the customer confirms a contact name and phone number. When they
differ from the profile on record, the profile is brought in line with what
the customer just confirmed.
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle
from shared.events.ordering import OrderPlaced

from identity.domain import identity
from identity.user.lookup import find_by_phone
from identity.user.user import User

logger = structlog.get_logger(__name__)

identity.register_external_event(OrderPlaced, "Ordering.OrderPlaced.v1")


@identity.event_handler(part_of=User, stream_category="ordering::order")
class OrderingEventsHandler:
    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        repo = current_domain.repository_for(User)
        try:
            user = repo.get(event.user_id)
        except ObjectNotFoundError:
            logger.warning("OrderPlaced for unknown user", user_id=str(event.user_id))
            return

        phone = event.contact_phone
        if phone != user.phone:
            owner = find_by_phone(phone)
            if owner is not None and str(owner.id) != str(user.id):
                logger.warning(
                    "Checkout phone belongs to another account, keeping profile phone",
                    user_id=str(user.id),
                )
                phone = user.phone

        if user.update_profile(name=event.contact_name, phone=phone):
            repo.add(user)
            logger.info("Profile updated from checkout details", user_id=str(user.id))
