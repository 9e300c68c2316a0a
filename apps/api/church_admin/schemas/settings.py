from pydantic import BaseModel, Field


class ChurchSettingsUpdate(BaseModel):
    church_name: str | None = Field(default=None, min_length=1, max_length=255)
    address: str | None = None
    phone: str | None = None
    email: str | None = None
    website: str | None = None
    logo_url: str | None = None
    description: str | None = None


class ChurchSettingsResponse(BaseModel):
    id: int
    church_name: str
    address: str | None
    phone: str | None
    email: str | None
    website: str | None
    logo_url: str | None
    description: str | None
