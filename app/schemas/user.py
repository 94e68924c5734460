"""Request/response schemas for admin user management."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator

from app.schemas.validators import checked_email, strip_if_str, trimmed


class UserOut(BaseModel):
    """User as returned to admins (never includes the password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: str
    deleted: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class UserUpdateRequest(BaseModel):
    """Partial update; omitted fields keep their current value."""

    name: str | None = None
    email: str | None = None
    password: str | None = None
    role: Literal["USER", "ADMIN"] | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        return None if v is None else trimmed(v, "Name", 6)

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, v: object) -> object:
        return strip_if_str(v)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str | None) -> str | None:
        return None if v is None else checked_email(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str | None) -> str | None:
        return None if v is None else trimmed(v, "Password", 6)


class UserActionResponse(BaseModel):
    """Result of an admin update or delete."""

    message: str
    user: UserOut
