from datetime import date as date_type
from datetime import datetime

from pydantic import BaseModel, Field

from church_admin.models.entities import SacramentTypeEnum
from church_admin.schemas.common import PageMeta


class SacramentCreate(BaseModel):
    type: SacramentTypeEnum
    date: date_type
    member_id: int
    details: str | None = None


class SacramentUpdate(BaseModel):
    type: SacramentTypeEnum | None = None
    date: date_type | None = None
    member_id: int | None = None
    details: str | None = None


class SacramentMemberSummary(BaseModel):
    id: int
    name: str
    email: str | None
    phone: str | None
    profile_image: str | None


class SacramentResponse(BaseModel):
    id: int
    type: SacramentTypeEnum
    date: date_type
    member_id: int
    details: str | None
    created_at: datetime
    member: SacramentMemberSummary | None = None


class SacramentPageResponse(BaseModel):
    items: list[SacramentResponse]
    meta: PageMeta


class SacramentListResponse(BaseModel):
    items: list[SacramentResponse] = Field(default_factory=list)
