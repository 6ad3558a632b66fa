"""What a driver does with an order once it is on their list.

Starting a trip opens an ``ActiveTrip`` that the tracking screen polls;
delivering or reverting closes it again.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Float, Identifier
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order, OrderStatus
from ordering.trip.tracking import close_trip, require_trip, trip_for_driver
from ordering.trip.trip import ActiveTrip

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class StartTrip:
    order_id = Identifier(required=True)
    driver_id = Identifier(required=True)
    latitude = Float()
    longitude = Float()


@ordering.command(part_of="Order")
class DeliverOrder:
    order_id = Identifier(required=True)
    driver_id = Identifier(required=True)


@ordering.command(part_of="Order")
class RevertOrderToAssigned:
    order_id = Identifier(required=True)
    driver_id = Identifier(required=True)


@ordering.command(part_of="ActiveTrip")
class UpdateDriverLocation:
    order_id = Identifier(required=True)
    latitude = Float(required=True)
    longitude = Float(required=True)


@ordering.command_handler(part_of=Order)
class DriverActionsHandler:
    @handle(StartTrip)
    def start_trip(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.assert_driver(command.driver_id)
        if order.status != OrderStatus.ASSIGNED.value:
            raise ValidationError({"status": ["Only assigned orders can start a trip"]})

        existing = trip_for_driver(command.driver_id)
        if existing is not None:
            raise ValidationError(
                {"driver_id": [f"ACTIVE_TRIP_EXISTS: finish order {existing.order_number} first"]}
            )

        order.start_trip(command.driver_id)
        repo.add(order)

        trip = ActiveTrip.start(
            order_id=order.id,
            order_number=order.order_number,
            driver_id=command.driver_id,
            latitude=command.latitude,
            longitude=command.longitude,
        )
        current_domain.repository_for(ActiveTrip).add(trip)

        logger.info("Trip started", order_id=str(order.id), driver_id=str(command.driver_id))
        return str(trip.id)

    @handle(DeliverOrder)
    def deliver_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.deliver(command.driver_id)
        repo.add(order)
        close_trip(order.id)

        logger.info("Order delivered", order_id=str(order.id), driver_id=str(command.driver_id))

    @handle(RevertOrderToAssigned)
    def revert_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.revert_to_assigned(command.driver_id)
        repo.add(order)
        close_trip(order.id)

        logger.info("Trip reverted", order_id=str(order.id), driver_id=str(command.driver_id))


@ordering.command_handler(part_of=ActiveTrip)
class TripTrackingHandler:
    @handle(UpdateDriverLocation)
    def update_location(self, command):
        trip = require_trip(command.order_id)
        trip.move_to(command.latitude, command.longitude)
        current_domain.repository_for(ActiveTrip).add(trip)
        return trip.update_count
