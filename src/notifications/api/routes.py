"""FastAPI routes for the Notifications domain.

Thin adapters that translate HTTP requests into domain commands.
No business logic, just schema to command to response translation.
"""

from fastapi import APIRouter
from notifications.api.schemas import (
    ContactMessageRequest,
    ContactMessageResponse,
    MarkAllReadResponse,
    NotificationListResponse,
    NotificationResponse,
    StatusResponse,
    SubscribeRequest,
    SubscriptionResponse,
    ToggleReadResponse,
    UnreadCountResponse,
    UnsubscribeRequest,
    UserRequest,
)
from notifications.contact.contact import SubmitContactMessage
from notifications.notification.reading import (
    MarkAllNotificationsRead,
    MarkNotificationRead,
    ToggleNotificationRead,
    list_notifications,
    unread_count,
)
from notifications.subscription.subscription import SubscribeToPush, UnsubscribeFromPush
from protean.utils.globals import current_domain

router = APIRouter(prefix="/notifications", tags=["notifications"])
push_router = APIRouter(prefix="/push-subscriptions", tags=["push"])
contact_router = APIRouter(prefix="/contact", tags=["contact"])


# ---------------------------------------------------------------------------
# Inbox
# ---------------------------------------------------------------------------
@router.get("/users/{user_id}", response_model=NotificationListResponse)
async def get_notifications(user_id: str) -> NotificationListResponse:
    return NotificationListResponse(
        notifications=[
            NotificationResponse(
                notification_id=str(n.id),
                title=n.title,
                body=n.body,
                type=n.type,
                is_read=bool(n.is_read),
                action_url=n.action_url,
                created_at=n.created_at,
            )
            for n in list_notifications(user_id)
        ],
        unread=unread_count(user_id),
    )


@router.get("/users/{user_id}/unread-count", response_model=UnreadCountResponse)
async def get_unread_count(user_id: str) -> UnreadCountResponse:
    return UnreadCountResponse(unread=unread_count(user_id))


@router.put("/{notification_id}/read", response_model=StatusResponse)
async def mark_read(notification_id: str, body: UserRequest) -> StatusResponse:
    current_domain.process(
        MarkNotificationRead(notification_id=notification_id, user_id=body.user_id),
        asynchronous=False,
    )
    return StatusResponse()


@router.put("/{notification_id}/toggle", response_model=ToggleReadResponse)
async def toggle_read(notification_id: str, body: UserRequest) -> ToggleReadResponse:
    is_read = current_domain.process(
        ToggleNotificationRead(notification_id=notification_id, user_id=body.user_id),
        asynchronous=False,
    )
    return ToggleReadResponse(is_read=is_read)


@router.put("/users/{user_id}/read-all", response_model=MarkAllReadResponse)
async def mark_all_read(user_id: str) -> MarkAllReadResponse:
    updated = current_domain.process(MarkAllNotificationsRead(user_id=user_id), asynchronous=False)
    return MarkAllReadResponse(updated=updated)


# ---------------------------------------------------------------------------
# Web push
# ---------------------------------------------------------------------------
@push_router.post("", status_code=201, response_model=SubscriptionResponse)
async def subscribe(body: SubscribeRequest) -> SubscriptionResponse:
    subscription_id = current_domain.process(SubscribeToPush(**body.model_dump()), asynchronous=False)
    return SubscriptionResponse(subscription_id=subscription_id)


@push_router.post("/unsubscribe", response_model=StatusResponse)
async def unsubscribe(body: UnsubscribeRequest) -> StatusResponse:
    current_domain.process(UnsubscribeFromPush(endpoint=body.endpoint), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Contact form
# ---------------------------------------------------------------------------
@contact_router.post("", status_code=201, response_model=ContactMessageResponse)
async def submit_contact_message(body: ContactMessageRequest) -> ContactMessageResponse:
    contact_id = current_domain.process(SubmitContactMessage(**body.model_dump()), asynchronous=False)
    return ContactMessageResponse(contact_id=contact_id)
