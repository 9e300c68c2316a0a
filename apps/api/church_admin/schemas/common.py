from pydantic import BaseModel, Field


class PageMeta(BaseModel):
    total: int
    page: int
    limit: int
    pages: int


class MessageResponse(BaseModel):
    message: str


class BulkIdsRequest(BaseModel):
    ids: list[int] = Field(min_length=1)
