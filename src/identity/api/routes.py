"""FastAPI endpoints for the Identity domain."""

from fastapi import APIRouter
from protean.utils.globals import current_domain

from identity.api.schemas import (
    AddressIdResponse,
    AddressRequest,
    ChangePasswordRequest,
    ChangeRoleRequest,
    CreateStaffUserRequest,
    LoginRequest,
    RegisterCustomerRequest,
    StatusResponse,
    UpdateDriverProfileRequest,
    UpdateMarketerProfileRequest,
    UpdateUserRequest,
    UserDirectoryEntry,
    UserIdResponse,
)
from identity.projections.user_directory import list_users
from identity.user.account import DeactivateUser, ReactivateUser, RemoveUser
from identity.user.addresses import AddAddress, RemoveAddress, SetDefaultAddress, UpdateAddress
from identity.user.authentication import Authenticate
from identity.user.profile import ChangePassword, MarkVerified, UpdateUser
from identity.user.registration import RegisterCustomer
from identity.user.staff import ChangeRole, CreateStaffUser, UpdateDriverProfile, UpdateMarketerProfile

auth_router = APIRouter(prefix="/auth", tags=["auth"])
user_router = APIRouter(prefix="/users", tags=["users"])


# --- Registration and sign-in ---


@auth_router.post("/register", status_code=201, response_model=UserIdResponse)
async def register_customer(body: RegisterCustomerRequest) -> UserIdResponse:
    command = RegisterCustomer(name=body.name, phone=body.phone, password=body.password)
    result = current_domain.process(command, asynchronous=False)
    return UserIdResponse(user_id=result)


@auth_router.post("/login", response_model=UserIdResponse)
async def login(body: LoginRequest) -> UserIdResponse:
    result = current_domain.process(Authenticate(phone=body.phone, password=body.password), asynchronous=False)
    return UserIdResponse(user_id=result)


# --- Back-office user management ---


@user_router.get("", response_model=list[UserDirectoryEntry])
async def get_users(role: str | None = None, status: str | None = None) -> list[UserDirectoryEntry]:
    return [
        UserDirectoryEntry(
            user_id=str(entry.user_id),
            name=entry.name,
            phone=entry.phone,
            email=entry.email,
            role=entry.role,
            status=entry.status,
        )
        for entry in list_users(role=role, status=status)
    ]


@user_router.post("", status_code=201, response_model=UserIdResponse)
async def create_user(body: CreateStaffUserRequest) -> UserIdResponse:
    command = CreateStaffUser(**body.model_dump(exclude_none=True))
    result = current_domain.process(command, asynchronous=False)
    return UserIdResponse(user_id=result)


@user_router.put("/{user_id}", response_model=StatusResponse)
async def update_user(user_id: str, body: UpdateUserRequest) -> StatusResponse:
    command = UpdateUser(user_id=user_id, **body.model_dump(exclude_none=True))
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@user_router.put("/{user_id}/password", response_model=StatusResponse)
async def change_password(user_id: str, body: ChangePasswordRequest) -> StatusResponse:
    command = ChangePassword(
        user_id=user_id,
        current_password=body.current_password,
        new_password=body.new_password,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@user_router.put("/{user_id}/role", response_model=StatusResponse)
async def change_role(user_id: str, body: ChangeRoleRequest) -> StatusResponse:
    current_domain.process(ChangeRole(user_id=user_id, role=body.role), asynchronous=False)
    return StatusResponse()


@user_router.put("/{user_id}/driver-profile", response_model=StatusResponse)
async def update_driver_profile(user_id: str, body: UpdateDriverProfileRequest) -> StatusResponse:
    command = UpdateDriverProfile(user_id=user_id, **body.model_dump(exclude_none=True))
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@user_router.put("/{user_id}/marketer-profile", response_model=StatusResponse)
async def update_marketer_profile(user_id: str, body: UpdateMarketerProfileRequest) -> StatusResponse:
    command = UpdateMarketerProfile(user_id=user_id, level=body.level, commission_rate=body.commission_rate)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@user_router.put("/{user_id}/verify", response_model=StatusResponse)
async def verify_user(user_id: str) -> StatusResponse:
    current_domain.process(MarkVerified(user_id=user_id), asynchronous=False)
    return StatusResponse()


@user_router.put("/{user_id}/deactivate", response_model=StatusResponse)
async def deactivate_user(user_id: str) -> StatusResponse:
    current_domain.process(DeactivateUser(user_id=user_id), asynchronous=False)
    return StatusResponse()


@user_router.put("/{user_id}/reactivate", response_model=StatusResponse)
async def reactivate_user(user_id: str) -> StatusResponse:
    current_domain.process(ReactivateUser(user_id=user_id), asynchronous=False)
    return StatusResponse()


@user_router.delete("/{user_id}", response_model=StatusResponse)
async def remove_user(user_id: str) -> StatusResponse:
    current_domain.process(RemoveUser(user_id=user_id), asynchronous=False)
    return StatusResponse()


# --- Address book ---


@user_router.post("/{user_id}/addresses", status_code=201, response_model=AddressIdResponse)
async def add_address(user_id: str, body: AddressRequest) -> AddressIdResponse:
    command = AddAddress(user_id=user_id, **body.model_dump(exclude_none=True))
    result = current_domain.process(command, asynchronous=False)
    return AddressIdResponse(address_id=result)


@user_router.put("/{user_id}/addresses/{address_id}", response_model=StatusResponse)
async def update_address(user_id: str, address_id: str, body: AddressRequest) -> StatusResponse:
    fields = body.model_dump(exclude_none=True, exclude={"is_default"})
    current_domain.process(UpdateAddress(user_id=user_id, address_id=address_id, **fields), asynchronous=False)
    return StatusResponse()


@user_router.delete("/{user_id}/addresses/{address_id}", response_model=StatusResponse)
async def remove_address(user_id: str, address_id: str) -> StatusResponse:
    current_domain.process(RemoveAddress(user_id=user_id, address_id=address_id), asynchronous=False)
    return StatusResponse()


@user_router.put("/{user_id}/addresses/{address_id}/default", response_model=StatusResponse)
async def set_default_address(user_id: str, address_id: str) -> StatusResponse:
    current_domain.process(SetDefaultAddress(user_id=user_id, address_id=address_id), asynchronous=False)
    return StatusResponse()
