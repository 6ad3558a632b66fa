"""Pydantic request/response schemas for the Notifications API."""

from datetime import datetime

from pydantic import BaseModel, Field


class StatusResponse(BaseModel):
    status: str = "ok"


class UserRequest(BaseModel):
    user_id: str


class NotificationResponse(BaseModel):
    notification_id: str
    title: str
    body: str
    type: str
    is_read: bool
    action_url: str | None = None
    created_at: datetime | None = None


class NotificationListResponse(BaseModel):
    notifications: list[NotificationResponse]
    unread: int


class UnreadCountResponse(BaseModel):
    unread: int


class ToggleReadResponse(BaseModel):
    is_read: bool


class MarkAllReadResponse(BaseModel):
    updated: int


class SubscribeRequest(BaseModel):
    user_id: str
    endpoint: str = Field(min_length=1, max_length=1000)
    p256dh: str = Field(min_length=1)
    auth: str = Field(min_length=1)


class UnsubscribeRequest(BaseModel):
    endpoint: str = Field(min_length=1, max_length=1000)


class SubscriptionResponse(BaseModel):
    subscription_id: str


class ContactMessageRequest(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    email: str = Field(min_length=3, max_length=254)
    subject: str = Field(min_length=1, max_length=200)
    message: str = Field(min_length=1)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Noura",
                    "email": "noura@example.com",
                    "subject": "Delivery hours",
                    "message": "Do you deliver on Fridays?",
                }
            ]
        }
    }


class ContactMessageResponse(BaseModel):
    contact_id: str
