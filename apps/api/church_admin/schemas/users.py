from datetime import date, datetime

from pydantic import BaseModel, EmailStr, Field

from church_admin.models.entities import UserRoleEnum
from church_admin.schemas.members import MemberResponse


class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)
    username: str | None = Field(default=None, min_length=1, max_length=255)
    role: UserRoleEnum = UserRoleEnum.member
    member_id: int | None = None


class UserUpdate(BaseModel):
    email: EmailStr | None = None
    password: str | None = Field(default=None, min_length=6, max_length=128)
    username: str | None = Field(default=None, min_length=1, max_length=255)
    role: UserRoleEnum | None = None
    member_id: int | None = None


class ProfileUpdate(BaseModel):
    """Self-service edits; email, password and role are admin-only."""

    username: str | None = Field(default=None, min_length=1, max_length=255)
    name: str | None = Field(default=None, min_length=1, max_length=255)
    phone: str | None = Field(default=None, max_length=50)
    profile_image: str | None = None
    gender: str | None = Field(default=None, max_length=20)
    dob: date | None = None


class UserResponse(BaseModel):
    id: int
    email: str
    username: str | None
    role: UserRoleEnum
    member_id: int | None
    member_name: str | None = None
    profile_image: str | None = None
    created_at: datetime


class UserListResponse(BaseModel):
    items: list[UserResponse]


class ProfileResponse(UserResponse):
    member: MemberResponse | None = None


class LoginRequest(BaseModel):
    identifier: str = Field(min_length=1, description="email or username")
    password: str = Field(min_length=1)


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)


class AuthResponse(BaseModel):
    token: str
    user: UserResponse
