from datetime import datetime

from pydantic import BaseModel, Field


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)


class CategoryResponse(BaseModel):
    id: int
    name: str
    album_count: int = 0


class CategoryListResponse(BaseModel):
    items: list[CategoryResponse]


class AlbumCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str | None = None
    category_id: int
    cover_image: str | None = None
    date: datetime | None = None


class AlbumUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    category_id: int | None = None
    cover_image: str | None = None
    date: datetime | None = None


class ImageResponse(BaseModel):
    id: int
    album_id: int
    url: str
    created_at: datetime


class AlbumResponse(BaseModel):
    id: int
    title: str
    description: str | None
    category_id: int
    category_name: str | None = None
    cover_image: str | None
    date: datetime | None
    created_at: datetime
    image_count: int = 0


class AlbumDetailResponse(AlbumResponse):
    images: list[ImageResponse] = Field(default_factory=list)


class AlbumListResponse(BaseModel):
    items: list[AlbumResponse]


class AddImagesRequest(BaseModel):
    urls: list[str] = Field(min_length=1)
