from datetime import date, datetime

from pydantic import BaseModel, EmailStr, Field

from church_admin.schemas.families import FamilyMemberSummary


class HeadMemberData(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=50)
    gender: str | None = Field(default=None, max_length=20)
    dob: date | None = None


class HouseCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    family_id: int
    head_member_id: int | None = None
    head_member_data: HeadMemberData | None = None


class HouseUpdate(BaseModel):
    name: str = Field(min_length=1, max_length=255)


class HouseResponse(BaseModel):
    id: int
    family_id: int
    name: str
    head_member_id: int | None
    created_at: datetime
    members: list[FamilyMemberSummary] = Field(default_factory=list)


class HouseListResponse(BaseModel):
    items: list[HouseResponse]
