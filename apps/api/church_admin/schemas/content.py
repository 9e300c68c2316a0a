from datetime import datetime

from pydantic import BaseModel, Field


class ContentCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    body: str | None = None
    media_url: str | None = None
    date: datetime | None = None


class ContentUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    body: str | None = None
    media_url: str | None = None
    date: datetime | None = None


class ContentResponse(BaseModel):
    id: int
    type: str
    title: str
    body: str | None
    media_url: str | None
    date: datetime


class ContentListResponse(BaseModel):
    items: list[ContentResponse]
