"""Pydantic request/response schemas for the Identity API."""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- Request Schemas ---


class RegisterCustomerRequest(BaseModel):
    model_config = {
        "json_schema_extra": {"examples": [{"name": "Sara Ali", "phone": "0551234567", "password": "s3cret!"}]}
    }

    name: str = Field(..., min_length=2, max_length=50)
    phone: str = Field(..., max_length=20)
    password: str = Field(..., min_length=6, max_length=128)


class LoginRequest(BaseModel):
    phone: str = Field(..., max_length=20)
    password: str = Field(..., max_length=128)


class CreateStaffUserRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "role": "Driver",
                    "name": "Khalid Driver",
                    "phone": "0509876543",
                    "password": "driver1",
                    "vehicle_type": "Motorcycle",
                    "plate_number": "ABC 123",
                    "max_orders": 3,
                }
            ]
        }
    }

    role: str
    name: str = Field(..., min_length=2, max_length=50)
    phone: str = Field(..., max_length=20)
    password: str = Field(..., min_length=6, max_length=128)
    email: str | None = Field(None, max_length=254)
    vehicle_type: str | None = None
    plate_number: str | None = Field(None, max_length=20)
    vehicle_color: str | None = Field(None, max_length=30)
    vehicle_model: str | None = Field(None, max_length=50)
    license_number: str | None = Field(None, max_length=50)
    experience_years: int | None = Field(None, ge=0)
    max_orders: int | None = Field(None, ge=1)
    marketer_level: str | None = None
    commission_rate: float | None = Field(None, ge=0, le=100)


class UpdateUserRequest(BaseModel):
    name: str | None = Field(None, min_length=2, max_length=50)
    phone: str | None = Field(None, max_length=20)
    email: str | None = Field(None, max_length=254)


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., max_length=128)
    new_password: str = Field(..., min_length=6, max_length=128)


class ChangeRoleRequest(BaseModel):
    role: str


class UpdateDriverProfileRequest(BaseModel):
    vehicle_type: str | None = None
    plate_number: str | None = Field(None, max_length=20)
    vehicle_color: str | None = Field(None, max_length=30)
    vehicle_model: str | None = Field(None, max_length=50)
    license_number: str | None = Field(None, max_length=50)
    experience_years: int | None = Field(None, ge=0)
    max_orders: int | None = Field(None, ge=1)


class UpdateMarketerProfileRequest(BaseModel):
    level: str
    commission_rate: float = Field(..., ge=0, le=100)


class AddressRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "label": "Home",
                    "district": "Al Olaya",
                    "street": "King Fahd Road",
                    "building_number": "12",
                    "delivery_instructions": "Ring the bell twice",
                    "latitude": 24.7136,
                    "longitude": 46.6753,
                }
            ]
        }
    }

    label: str | None = Field(None, max_length=50)
    district: str | None = Field(None, max_length=100)
    street: str | None = Field(None, max_length=255)
    building_number: str | None = Field(None, max_length=20)
    floor: str | None = Field(None, max_length=20)
    apartment: str | None = Field(None, max_length=20)
    landmark: str | None = Field(None, max_length=255)
    delivery_instructions: str | None = Field(None, max_length=500)
    latitude: float | None = None
    longitude: float | None = None
    is_default: bool = False


# --- Response Schemas ---


class UserIdResponse(BaseModel):
    user_id: str


class AddressIdResponse(BaseModel):
    address_id: str


class UserDirectoryEntry(BaseModel):
    user_id: str
    name: str
    phone: str
    email: str | None = None
    role: str
    status: str


class StatusResponse(BaseModel):
    status: str = "ok"
