"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.validators import checked_email, strip_if_str, trimmed


class SignupRequest(BaseModel):
    """New account. Any client-supplied role is ignored; signup always creates USER."""

    name: str = Field(..., description="Display name (at least 6 characters)")
    email: str = Field(..., description="Unique email address, stored as typed")
    password: str = Field(..., description="Password (at least 6 characters)")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return trimmed(v, "Name", 6)

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, v: object) -> object:
        return strip_if_str(v)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return checked_email(trimmed(v, "Email", 6))

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return trimmed(v, "Password", 6)


class SignupResponse(BaseModel):
    """Least-disclosure signup result: no id, no password."""

    email: str
    role: str


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str = Field(..., description="Account email")
    password: str = Field(..., description="Password")


class SessionResponse(BaseModel):
    """Login/logout result. The token itself only travels in the cookie."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(..., alias="userId")
    message: str


class AuthContext(BaseModel):
    """
    Authenticated identity attached to a request by get_current_user.

    token_id/token address the exact session row so logout can delete it.
    """

    model_config = ConfigDict(frozen=True)

    user_id: int
    role: str
    token_id: int
    token: str = Field(repr=False)
