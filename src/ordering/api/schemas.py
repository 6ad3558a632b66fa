"""Pydantic request/response schemas for the Ordering API.

These are external contracts, kept apart from the internal Protean commands.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class CartOwner(BaseModel):
    user_id: str | None = None
    guest_id: str | None = None


class AddToCartRequest(CartOwner):
    product_id: str
    quantity: int = Field(default=1, ge=1, le=99)


class ChangeCartQuantityRequest(CartOwner):
    product_id: str
    delta: int


class SetCartQuantityRequest(CartOwner):
    product_id: str
    quantity: int = Field(ge=1, le=99)


class RemoveFromCartRequest(CartOwner):
    product_id: str


class MergeGuestCartRequest(BaseModel):
    guest_id: str
    user_id: str


class CartLine(BaseModel):
    product_id: str
    quantity: int = Field(ge=1)


class SyncCartRequest(CartOwner):
    items: list[CartLine]
    client_timestamp: datetime


class CartCountResponse(BaseModel):
    count: int


class CartItemsResponse(BaseModel):
    items: list[CartLine]


# ---------------------------------------------------------------------------
# Shifts
# ---------------------------------------------------------------------------
class CreateShiftRequest(BaseModel):
    name: str = Field(min_length=1, max_length=50)
    start_time: str = Field(pattern=r"^\d{2}:\d{2}$")
    end_time: str = Field(pattern=r"^\d{2}:\d{2}$")
    is_active: bool = True

    model_config = {
        "json_schema_extra": {"examples": [{"name": "Morning", "start_time": "08:00", "end_time": "12:00"}]}
    }


class ShiftResponse(BaseModel):
    shift_id: str
    name: str
    start_time: str
    end_time: str


class ShiftIdResponse(BaseModel):
    shift_id: str


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class PlaceOrderRequest(BaseModel):
    user_id: str
    full_name: str
    phone: str
    address_id: str
    shift_id: str
    payment_method: Literal["CASH", "CARD", "WALLET"]
    terms_accepted: bool = False
    notes: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "user_id": "user-001",
                    "full_name": "Sara Ali",
                    "phone": "0551234567",
                    "address_id": "addr-001",
                    "shift_id": "shift-001",
                    "payment_method": "CASH",
                    "terms_accepted": True,
                }
            ]
        }
    }


class PlacedOrderResponse(BaseModel):
    order_id: str
    order_number: str


class AssignDriverRequest(BaseModel):
    driver_id: str


class BulkAssignRequest(BaseModel):
    order_ids: list[str] = Field(min_length=1)
    driver_id: str


class FailedAssignment(BaseModel):
    order_id: str
    error: str


class BulkAssignResponse(BaseModel):
    assigned: list[str]
    failed: list[FailedAssignment]


class UpdateStatusRequest(BaseModel):
    status: Literal["PENDING", "ASSIGNED", "IN_TRANSIT", "DELIVERED", "CANCELED"]
    notes: str | None = None


class OrderStatusResponse(BaseModel):
    order_id: str
    status: str


class StartTripRequest(BaseModel):
    driver_id: str
    latitude: float | None = None
    longitude: float | None = None


class LocationRequest(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class DriverActionRequest(BaseModel):
    driver_id: str


class CancelOrderRequest(BaseModel):
    reason: str = Field(min_length=1, max_length=500)
    cancelled_by: Literal["Customer", "Driver", "Admin"] = "Admin"


class TripResponse(BaseModel):
    trip_id: str


class OrderSummaryResponse(BaseModel):
    order_id: str
    order_number: str
    user_id: str
    contact_name: str | None = None
    status: str
    driver_id: str | None = None
    driver_name: str | None = None
    total: float | None = None
    item_count: int = 0
    placed_at: datetime | None = None


class StatusResponse(BaseModel):
    status: str = "ok"
