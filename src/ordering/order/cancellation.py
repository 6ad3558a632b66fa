"""Order cancellation: command and handler."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import CancellationActor, Order
from ordering.trip.tracking import close_trip

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    reason = String(required=True, max_length=500)
    cancelled_by = String(choices=CancellationActor, default=CancellationActor.ADMIN.value)


@ordering.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.cancel(reason=command.reason, cancelled_by=command.cancelled_by)
        repo.add(order)
        close_trip(order.id)

        logger.info(
            "Order cancelled",
            order_id=str(order.id),
            order_number=order.order_number,
            cancelled_by=command.cancelled_by,
        )
