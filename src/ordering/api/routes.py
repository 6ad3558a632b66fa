"""FastAPI routes for the Ordering domain: carts, shifts and orders."""

import json

from fastapi import APIRouter
from protean.utils.globals import current_domain

from ordering.api.schemas import (
    AddToCartRequest,
    AssignDriverRequest,
    BulkAssignRequest,
    BulkAssignResponse,
    CancelOrderRequest,
    CartCountResponse,
    CartItemsResponse,
    CartOwner,
    ChangeCartQuantityRequest,
    CreateShiftRequest,
    DriverActionRequest,
    LocationRequest,
    MergeGuestCartRequest,
    OrderStatusResponse,
    OrderSummaryResponse,
    PlacedOrderResponse,
    PlaceOrderRequest,
    RemoveFromCartRequest,
    SetCartQuantityRequest,
    ShiftIdResponse,
    ShiftResponse,
    StartTripRequest,
    StatusResponse,
    SyncCartRequest,
    TripResponse,
    UpdateStatusRequest,
)
from ordering.cart.items import (
    AddToCart,
    ClearCart,
    RemoveFromCart,
    SetCartItemQuantity,
    UpdateCartItemQuantity,
    cart_count,
)
from ordering.cart.management import MergeGuestCart, SyncCart
from ordering.checkout.placement import PlaceOrder
from ordering.order.assignment import AssignDriver, BulkAssignDriver, UnassignDriver
from ordering.order.cancellation import CancelOrder
from ordering.order.driver_actions import DeliverOrder, RevertOrderToAssigned, StartTrip, UpdateDriverLocation
from ordering.order.status import UpdateOrderStatus
from ordering.projections.order_summary import driver_order_counts, order_counts, orders_by_status
from ordering.shift.management import CreateShift, DeactivateShift, list_active_shifts

cart_router = APIRouter(prefix="/cart", tags=["cart"])
shift_router = APIRouter(prefix="/shifts", tags=["shifts"])
order_router = APIRouter(prefix="/orders", tags=["orders"])


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
@cart_router.get("/count", response_model=CartCountResponse)
async def get_cart_count(user_id: str | None = None, guest_id: str | None = None) -> CartCountResponse:
    return CartCountResponse(count=cart_count(user_id=user_id, guest_id=guest_id))


@cart_router.post("/items", response_model=CartCountResponse)
async def add_to_cart(body: AddToCartRequest) -> CartCountResponse:
    count = current_domain.process(AddToCart(**body.model_dump(exclude_none=True)), asynchronous=False)
    return CartCountResponse(count=count)


@cart_router.put("/items/quantity", response_model=CartCountResponse)
async def change_cart_quantity(body: ChangeCartQuantityRequest) -> CartCountResponse:
    count = current_domain.process(UpdateCartItemQuantity(**body.model_dump(exclude_none=True)), asynchronous=False)
    return CartCountResponse(count=count)


@cart_router.put("/items", response_model=CartCountResponse)
async def set_cart_quantity(body: SetCartQuantityRequest) -> CartCountResponse:
    count = current_domain.process(SetCartItemQuantity(**body.model_dump(exclude_none=True)), asynchronous=False)
    return CartCountResponse(count=count)


@cart_router.post("/items/remove", response_model=CartCountResponse)
async def remove_from_cart(body: RemoveFromCartRequest) -> CartCountResponse:
    count = current_domain.process(RemoveFromCart(**body.model_dump(exclude_none=True)), asynchronous=False)
    return CartCountResponse(count=count)


@cart_router.post("/clear", response_model=StatusResponse)
async def clear_cart(body: CartOwner) -> StatusResponse:
    current_domain.process(ClearCart(**body.model_dump(exclude_none=True)), asynchronous=False)
    return StatusResponse()


@cart_router.post("/merge", response_model=CartItemsResponse)
async def merge_guest_cart(body: MergeGuestCartRequest) -> CartItemsResponse:
    items = current_domain.process(MergeGuestCart(guest_id=body.guest_id, user_id=body.user_id), asynchronous=False)
    return CartItemsResponse(items=items)


@cart_router.post("/sync", response_model=CartItemsResponse)
async def sync_cart(body: SyncCartRequest) -> CartItemsResponse:
    command = SyncCart(
        user_id=body.user_id,
        guest_id=body.guest_id,
        items=json.dumps([line.model_dump() for line in body.items]),
        client_timestamp=body.client_timestamp,
    )
    items = current_domain.process(command, asynchronous=False)
    return CartItemsResponse(items=items)


# ---------------------------------------------------------------------------
# Shifts
# ---------------------------------------------------------------------------
@shift_router.get("", response_model=list[ShiftResponse])
async def list_shifts() -> list[ShiftResponse]:
    return [
        ShiftResponse(shift_id=str(s.id), name=s.name, start_time=s.start_time, end_time=s.end_time)
        for s in list_active_shifts()
    ]


@shift_router.post("", status_code=201, response_model=ShiftIdResponse)
async def create_shift(body: CreateShiftRequest) -> ShiftIdResponse:
    shift_id = current_domain.process(CreateShift(**body.model_dump()), asynchronous=False)
    return ShiftIdResponse(shift_id=shift_id)


@shift_router.put("/{shift_id}/deactivate", response_model=StatusResponse)
async def deactivate_shift(shift_id: str) -> StatusResponse:
    current_domain.process(DeactivateShift(shift_id=shift_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
def _summary(summary) -> OrderSummaryResponse:
    return OrderSummaryResponse(
        order_id=str(summary.order_id),
        order_number=summary.order_number,
        user_id=str(summary.user_id),
        contact_name=summary.contact_name,
        status=summary.status,
        driver_id=str(summary.driver_id) if summary.driver_id else None,
        driver_name=summary.driver_name,
        total=summary.total,
        item_count=summary.item_count or 0,
        placed_at=summary.placed_at,
    )


@order_router.post("", status_code=201, response_model=PlacedOrderResponse)
async def place_order(body: PlaceOrderRequest) -> PlacedOrderResponse:
    result = current_domain.process(PlaceOrder(**body.model_dump(exclude_none=True)), asynchronous=False)
    return PlacedOrderResponse(**result)


@order_router.get("/counts", response_model=dict[str, int])
async def get_order_counts(driver_id: str | None = None) -> dict[str, int]:
    if driver_id:
        return driver_order_counts(driver_id)
    return order_counts()


@order_router.get("", response_model=list[OrderSummaryResponse])
async def list_orders(status: str, driver_id: str | None = None) -> list[OrderSummaryResponse]:
    return [_summary(s) for s in orders_by_status(status, driver_id=driver_id)]


@order_router.post("/bulk-assign", response_model=BulkAssignResponse)
async def bulk_assign(body: BulkAssignRequest) -> BulkAssignResponse:
    command = BulkAssignDriver(order_ids=json.dumps(body.order_ids), driver_id=body.driver_id)
    result = current_domain.process(command, asynchronous=False)
    return BulkAssignResponse(**result)


@order_router.put("/{order_id}/assign", response_model=StatusResponse)
async def assign_driver(order_id: str, body: AssignDriverRequest) -> StatusResponse:
    current_domain.process(AssignDriver(order_id=order_id, driver_id=body.driver_id), asynchronous=False)
    return StatusResponse()


@order_router.put("/{order_id}/unassign", response_model=StatusResponse)
async def unassign_driver(order_id: str) -> StatusResponse:
    current_domain.process(UnassignDriver(order_id=order_id), asynchronous=False)
    return StatusResponse()


@order_router.put("/{order_id}/status", response_model=OrderStatusResponse)
async def update_status(order_id: str, body: UpdateStatusRequest) -> OrderStatusResponse:
    command = UpdateOrderStatus(order_id=order_id, status=body.status, notes=body.notes)
    status = current_domain.process(command, asynchronous=False)
    return OrderStatusResponse(order_id=order_id, status=status)


@order_router.post("/{order_id}/trip", status_code=201, response_model=TripResponse)
async def start_trip(order_id: str, body: StartTripRequest) -> TripResponse:
    trip_id = current_domain.process(StartTrip(order_id=order_id, **body.model_dump(exclude_none=True)), asynchronous=False)
    return TripResponse(trip_id=trip_id)


@order_router.put("/{order_id}/trip/location", response_model=StatusResponse)
async def update_location(order_id: str, body: LocationRequest) -> StatusResponse:
    command = UpdateDriverLocation(order_id=order_id, latitude=body.latitude, longitude=body.longitude)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@order_router.put("/{order_id}/deliver", response_model=StatusResponse)
async def deliver_order(order_id: str, body: DriverActionRequest) -> StatusResponse:
    current_domain.process(DeliverOrder(order_id=order_id, driver_id=body.driver_id), asynchronous=False)
    return StatusResponse()


@order_router.put("/{order_id}/revert", response_model=StatusResponse)
async def revert_order(order_id: str, body: DriverActionRequest) -> StatusResponse:
    current_domain.process(RevertOrderToAssigned(order_id=order_id, driver_id=body.driver_id), asynchronous=False)
    return StatusResponse()


@order_router.put("/{order_id}/cancel", response_model=StatusResponse)
async def cancel_order(order_id: str, body: CancelOrderRequest) -> StatusResponse:
    command = CancelOrder(order_id=order_id, reason=body.reason, cancelled_by=body.cancelled_by)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()
