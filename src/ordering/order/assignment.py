"""Driver dispatch: assign, unassign and bulk-assign orders.

Single assignment makes no capacity check; the back office may overload a
driver on purpose. Bulk assignment refuses any batch that would push the
driver past ``max_orders``.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import ACTIVE_DRIVER_STATUSES, Order
from ordering.projections.driver_roster import DriverRoster

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class AssignDriver:
    order_id = Identifier(required=True)
    driver_id = Identifier(required=True)


@ordering.command(part_of="Order")
class UnassignDriver:
    order_id = Identifier(required=True)


@ordering.command(part_of="Order")
class BulkAssignDriver:
    order_ids = Text(required=True)  # JSON: list of order ids
    driver_id = Identifier(required=True)


def available_driver(driver_id):
    """The roster entry for an active driver, or a ValidationError."""
    try:
        driver = current_domain.repository_for(DriverRoster).get(str(driver_id))
    except ObjectNotFoundError:
        raise ValidationError({"driver_id": ["Driver not found"]}) from None
    if not driver.is_active:
        raise ValidationError({"driver_id": ["Driver is inactive"]})
    return driver


def driver_load(driver_id):
    """Number of orders the driver still has to deliver."""
    orders = current_domain.repository_for(Order)._dao.query.filter(driver_id=str(driver_id)).all().items
    return sum(1 for o in orders if o.status in ACTIVE_DRIVER_STATUSES)


def _assign(order_id, driver):
    repo = current_domain.repository_for(Order)
    order = repo.get(order_id)
    order.assign_driver(driver.driver_id, driver_name=driver.name)
    repo.add(order)
    logger.info(
        "Driver assigned",
        order_id=str(order.id),
        order_number=order.order_number,
        driver_id=str(driver.driver_id),
    )
    return order


@ordering.command_handler(part_of=Order)
class DispatchHandler:
    @handle(AssignDriver)
    def assign_driver(self, command):
        repo = current_domain.repository_for(Order)
        repo.get(command.order_id).check_assignable(command.driver_id)
        driver = available_driver(command.driver_id)
        _assign(command.order_id, driver)

    @handle(UnassignDriver)
    def unassign_driver(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.unassign_driver()
        repo.add(order)
        logger.info("Driver unassigned", order_id=str(order.id), order_number=order.order_number)

    @handle(BulkAssignDriver)
    def bulk_assign_driver(self, command):
        raw_ids = json.loads(command.order_ids) if isinstance(command.order_ids, str) else command.order_ids
        order_ids = list(dict.fromkeys(str(order_id) for order_id in raw_ids or []))
        if not order_ids:
            raise ValidationError({"order_ids": ["Select at least one order"]})

        driver = available_driver(command.driver_id)
        load = driver_load(driver.driver_id)
        if load + len(order_ids) > driver.max_orders:
            raise ValidationError(
                {
                    "driver_id": [
                        f"Driver has {load} active orders and can carry {driver.max_orders}; "
                        f"cannot add {len(order_ids)} more"
                    ]
                }
            )

        assigned, failed = [], []
        for order_id in order_ids:
            try:
                _assign(order_id, driver)
            except ObjectNotFoundError:
                failed.append({"order_id": order_id, "error": "Order not found"})
            except ValidationError as exc:
                failed.append({"order_id": order_id, "error": "; ".join(_flatten(exc.messages))})
            else:
                assigned.append(order_id)

        if failed:
            logger.warning("Bulk assignment partially failed", driver_id=str(driver.driver_id), failed=len(failed))
        return {"assigned": assigned, "failed": failed}


def _flatten(messages):
    for field_messages in messages.values():
        yield from field_messages
