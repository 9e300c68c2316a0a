from datetime import datetime

from pydantic import BaseModel, Field

from church_admin.models.entities import MinistryRoleEnum


class MinistryCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    meeting_schedule: str | None = Field(default=None, max_length=255)


class MinistryUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    meeting_schedule: str | None = Field(default=None, max_length=255)


class MinistryMemberRequest(BaseModel):
    member_id: int


class MinistryMemberResponse(BaseModel):
    member_id: int
    name: str
    email: str | None
    phone: str | None
    profile_image: str | None
    role: MinistryRoleEnum


class MinistryResponse(BaseModel):
    id: int
    name: str
    description: str | None
    meeting_schedule: str | None
    created_at: datetime
    members: list[MinistryMemberResponse] = Field(default_factory=list)


class MinistryListResponse(BaseModel):
    items: list[MinistryResponse]
