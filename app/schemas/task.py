"""Request/response schemas for task endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator

from app.schemas.validators import trimmed

TITLE_MIN_LENGTH = 6
TITLE_MAX_LENGTH = 50
DESCRIPTION_MIN_LENGTH = 10
DESCRIPTION_MAX_LENGTH = 255


def _title(v: str) -> str:
    return trimmed(v, "Title", TITLE_MIN_LENGTH, TITLE_MAX_LENGTH, noun="character")


def _description(v: str) -> str:
    return trimmed(
        v, "Description", DESCRIPTION_MIN_LENGTH, DESCRIPTION_MAX_LENGTH, noun="character"
    )


class TaskCreateRequest(BaseModel):
    title: str
    description: str | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return _title(v)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return None if v is None else _description(v)


class TaskUpdateRequest(BaseModel):
    title: str | None = None
    description: str | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str | None) -> str | None:
        return None if v is None else _title(v)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return None if v is None else _description(v)


class TaskOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    completed: bool
    user_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class TaskResponse(BaseModel):
    success: bool = True
    data: TaskOut


class TaskListResponse(BaseModel):
    success: bool = True
    data: list[TaskOut]


class TaskMessageResponse(BaseModel):
    success: bool = True
    message: str
