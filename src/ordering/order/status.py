"""Back-office status changes that go through the order state machine."""

import structlog
from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order, OrderStatus
from ordering.trip.tracking import close_trip

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=20)
    notes = Text()


@ordering.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        previous_status = order.status

        order.transition_to(command.status, notes=command.notes)
        repo.add(order)

        if previous_status == OrderStatus.IN_TRANSIT.value:
            close_trip(order.id)

        logger.info(
            "Order status updated",
            order_id=str(order.id),
            order_number=order.order_number,
            from_status=previous_status,
            to_status=order.status,
        )
        return order.status
