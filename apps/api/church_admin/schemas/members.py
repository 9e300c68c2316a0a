from datetime import date, datetime

from pydantic import BaseModel, EmailStr, Field

from church_admin.models.entities import (
    FamilyRoleEnum,
    MemberStatusEnum,
    MinistryRoleEnum,
    SacramentTypeEnum,
    UserRoleEnum,
)
from church_admin.schemas.common import PageMeta


class MemberCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=50)
    profile_image: str | None = None
    gender: str | None = Field(default=None, max_length=20)
    dob: date | None = None
    status: MemberStatusEnum = MemberStatusEnum.active
    family_id: int | None = None
    house_id: int | None = None
    family_role: FamilyRoleEnum | None = None
    spouse_id: int | None = None


class MemberUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=50)
    profile_image: str | None = None
    gender: str | None = Field(default=None, max_length=20)
    dob: date | None = None
    status: MemberStatusEnum | None = None
    family_id: int | None = None
    house_id: int | None = None
    family_role: FamilyRoleEnum | None = None
    spouse_id: int | None = None


class MemberFamilySummary(BaseModel):
    id: int
    name: str


class MemberResponse(BaseModel):
    id: int
    name: str
    email: str | None
    phone: str | None
    profile_image: str | None
    gender: str | None
    dob: date | None
    status: MemberStatusEnum
    family_id: int | None
    house_id: int | None
    family_role: FamilyRoleEnum | None
    head_of_family: bool
    spouse_id: int | None
    created_at: datetime
    family: MemberFamilySummary | None = None


class MemberSacramentSummary(BaseModel):
    id: int
    type: SacramentTypeEnum
    date: date
    details: str | None


class MemberMinistrySummary(BaseModel):
    ministry_id: int
    name: str
    role: MinistryRoleEnum


class MemberUserSummary(BaseModel):
    id: int
    email: str
    role: UserRoleEnum


class MemberDetailResponse(MemberResponse):
    sacraments: list[MemberSacramentSummary] = Field(default_factory=list)
    ministries: list[MemberMinistrySummary] = Field(default_factory=list)
    user: MemberUserSummary | None = None


class MemberPageResponse(BaseModel):
    items: list[MemberResponse]
    meta: PageMeta


class MemberListResponse(BaseModel):
    items: list[MemberResponse]


class MemberFamilyAssign(BaseModel):
    family_id: int
    house_id: int | None = None
    family_role: FamilyRoleEnum | None = None


class MemberSetHead(BaseModel):
    family_id: int


class MemberFamilyRoleUpdate(BaseModel):
    family_role: FamilyRoleEnum
