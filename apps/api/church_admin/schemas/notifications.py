import json
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from church_admin.models.entities import BroadcastStatusEnum


def _decode_data(value: Any) -> dict[str, Any]:
    if isinstance(value, str):
        return json.loads(value or "{}")
    return value or {}


class BroadcastRequest(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    body: str = Field(min_length=1)
    data: dict[str, Any] = Field(default_factory=dict)
    draft: bool = False


class BroadcastUpdate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    body: str = Field(min_length=1)
    data: dict[str, Any] = Field(default_factory=dict)
    send_now: bool = False


class BroadcastResponse(BaseModel):
    id: int
    title: str
    body: str
    data: dict[str, Any]
    status: BroadcastStatusEnum
    sent_at: datetime | None
    created_at: datetime

    @field_validator("data", mode="before")
    @classmethod
    def decode_data(cls, value: Any) -> dict[str, Any]:
        return _decode_data(value)


class BroadcastListResponse(BaseModel):
    items: list[BroadcastResponse]


class SendToUserRequest(BaseModel):
    user_id: int
    title: str = Field(min_length=1, max_length=255)
    body: str = Field(min_length=1)
    type: str = Field(default="GENERAL", max_length=50)
    data: dict[str, Any] = Field(default_factory=dict)


class NotificationResponse(BaseModel):
    id: int
    user_id: int
    title: str
    body: str
    type: str
    data: dict[str, Any]
    is_read: bool
    created_at: datetime

    @field_validator("data", mode="before")
    @classmethod
    def decode_data(cls, value: Any) -> dict[str, Any]:
        return _decode_data(value)


class NotificationListResponse(BaseModel):
    items: list[NotificationResponse]
    unread: int = 0


class DeviceTokenRequest(BaseModel):
    token: str = Field(min_length=1, max_length=512)
    platform: str = Field(pattern="^(ios|android|web)$")
