from datetime import datetime

from pydantic import BaseModel, Field

from church_admin.models.entities import PrayerStatusEnum


class PrayerRequestCreate(BaseModel):
    content: str = Field(min_length=1, max_length=5000)


class PrayerStatusUpdate(BaseModel):
    status: PrayerStatusEnum


class PrayerRequester(BaseModel):
    id: int
    email: str
    name: str | None = None
    phone: str | None = None


class PrayerRequestResponse(BaseModel):
    id: int
    content: str
    status: PrayerStatusEnum
    created_at: datetime
    user: PrayerRequester | None = None


class PrayerRequestListResponse(BaseModel):
    items: list[PrayerRequestResponse]
