from datetime import datetime

from pydantic import BaseModel, Field

from church_admin.models.entities import FamilyRoleEnum, MemberStatusEnum


class FamilyCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    address: str | None = Field(default=None, max_length=500)
    phone: str | None = Field(default=None, max_length=50)
    house_name: str | None = Field(default=None, max_length=255)


class FamilyUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    address: str | None = Field(default=None, max_length=500)
    phone: str | None = Field(default=None, max_length=50)
    house_name: str | None = Field(default=None, max_length=255)


class FamilyMemberSummary(BaseModel):
    id: int
    name: str
    email: str | None
    phone: str | None
    profile_image: str | None
    family_role: FamilyRoleEnum | None
    status: MemberStatusEnum
    head_of_family: bool
    house_id: int | None


class RelatedFamilySummary(BaseModel):
    id: int
    name: str
    house_name: str | None


class FamilyHouseSummary(BaseModel):
    id: int
    name: str
    head_member_id: int | None


class FamilyResponse(BaseModel):
    id: int
    name: str
    address: str | None
    phone: str | None
    house_name: str | None
    created_at: datetime
    members: list[FamilyMemberSummary] = Field(default_factory=list)


class FamilyDetailResponse(FamilyResponse):
    houses: list[FamilyHouseSummary] = Field(default_factory=list)
    related_families: list[RelatedFamilySummary] = Field(default_factory=list)


class FamilyListResponse(BaseModel):
    items: list[FamilyResponse]


class RelatedFamilyLink(BaseModel):
    related_family_id: int


class FamilyMemberAssign(BaseModel):
    member_ids: list[int] = Field(min_length=1)
    house_id: int | None = None
    family_role: FamilyRoleEnum | None = None
