from datetime import datetime

from pydantic import BaseModel, Field

from church_admin.models.entities import EventStatusEnum


class EventCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str | None = None
    date: datetime
    location: str | None = Field(default=None, max_length=255)
    image_url: str | None = None
    is_live: bool = False
    is_featured: bool = False


class EventUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    date: datetime | None = None
    location: str | None = Field(default=None, max_length=255)
    image_url: str | None = None
    is_live: bool | None = None
    is_featured: bool | None = None


class EventResponse(BaseModel):
    id: int
    title: str
    description: str | None
    date: datetime
    location: str | None
    image_url: str | None
    status: EventStatusEnum
    is_live: bool
    is_featured: bool
    created_at: datetime
    registration_count: int = 0


class EventListResponse(BaseModel):
    items: list[EventResponse]


class EventRegistrationResponse(BaseModel):
    id: int
    event_id: int
    user_id: int
    user_email: str | None = None
    member_name: str | None = None
    created_at: datetime


class EventRegistrationListResponse(BaseModel):
    items: list[EventRegistrationResponse]
