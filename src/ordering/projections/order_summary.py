"""Order summary: one row per order for the back-office lists and counters."""

import json

from protean.core.projector import on
from protean.fields import DateTime, Float, Identifier, Integer, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.events import (
    DriverAssigned,
    DriverUnassigned,
    OrderCancelled,
    OrderDelivered,
    OrderPlaced,
    OrderRevertedToAssigned,
    TripStarted,
)
from ordering.order.order import Order, OrderStatus


@ordering.projection
class OrderSummary:
    order_id = Identifier(identifier=True, required=True)
    order_number = String(required=True)
    user_id = Identifier(required=True)
    contact_name = String()
    status = String(required=True)
    driver_id = Identifier()
    driver_name = String()
    total = Float()
    item_count = Integer(default=0)
    placed_at = DateTime()
    updated_at = DateTime()


@ordering.projector(projector_for=OrderSummary, aggregates=[Order])
class OrderSummaryProjector:
    @on(OrderPlaced)
    def on_order_placed(self, event):
        items = json.loads(event.items) if isinstance(event.items, str) else []
        current_domain.repository_for(OrderSummary).add(
            OrderSummary(
                order_id=event.order_id,
                order_number=event.order_number,
                user_id=event.user_id,
                contact_name=event.contact_name,
                status=OrderStatus.PENDING.value,
                total=event.total,
                item_count=sum(item["quantity"] for item in items),
                placed_at=event.placed_at,
                updated_at=event.placed_at,
            )
        )

    def _update(self, order_id, status, updated_at, **changes):
        repo = current_domain.repository_for(OrderSummary)
        summary = repo.get(order_id)
        summary.status = status
        summary.updated_at = updated_at
        for field, value in changes.items():
            setattr(summary, field, value)
        repo.add(summary)

    @on(DriverAssigned)
    def on_driver_assigned(self, event):
        self._update(
            event.order_id,
            OrderStatus.ASSIGNED.value,
            event.assigned_at,
            driver_id=event.driver_id,
            driver_name=event.driver_name,
        )

    @on(DriverUnassigned)
    def on_driver_unassigned(self, event):
        self._update(event.order_id, OrderStatus.PENDING.value, event.unassigned_at, driver_id=None, driver_name=None)

    @on(TripStarted)
    def on_trip_started(self, event):
        self._update(event.order_id, OrderStatus.IN_TRANSIT.value, event.started_at)

    @on(OrderRevertedToAssigned)
    def on_reverted(self, event):
        self._update(event.order_id, OrderStatus.ASSIGNED.value, event.reverted_at)

    @on(OrderDelivered)
    def on_order_delivered(self, event):
        self._update(event.order_id, OrderStatus.DELIVERED.value, event.delivered_at)

    @on(OrderCancelled)
    def on_order_cancelled(self, event):
        self._update(event.order_id, OrderStatus.CANCELED.value, event.cancelled_at)


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------
def _summaries(**filters):
    dao = current_domain.repository_for(OrderSummary)._dao
    query = dao.query.filter(**filters) if filters else dao.query
    return query.all().items


def _count_by_status(summaries):
    counts = {status.value: 0 for status in OrderStatus}
    for summary in summaries:
        counts[summary.status] = counts.get(summary.status, 0) + 1
    return counts


def order_counts():
    """Total number of orders and a count per status."""
    summaries = _summaries()
    return {"total": len(summaries), **_count_by_status(summaries)}


def driver_order_counts(driver_id):
    summaries = _summaries(driver_id=str(driver_id))
    return {"total": len(summaries), **_count_by_status(summaries)}


def orders_by_status(status, driver_id=None):
    """Orders in ``status``, newest first, optionally narrowed to one driver."""
    filters = {"status": status}
    if driver_id:
        filters["driver_id"] = str(driver_id)
    return sorted(_summaries(**filters), key=lambda s: s.placed_at, reverse=True)
