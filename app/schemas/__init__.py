"""Pydantic request/response schemas."""

from app.schemas.auth import (
    AuthContext,
    LoginRequest,
    SessionResponse,
    SignupRequest,
    SignupResponse,
)
from app.schemas.health import HealthResponse, RootStatus
from app.schemas.task import (
    TaskCreateRequest,
    TaskListResponse,
    TaskMessageResponse,
    TaskOut,
    TaskResponse,
    TaskUpdateRequest,
)
from app.schemas.user import UserActionResponse, UserOut, UserUpdateRequest

__all__ = [
    "AuthContext",
    "HealthResponse",
    "LoginRequest",
    "RootStatus",
    "SessionResponse",
    "SignupRequest",
    "SignupResponse",
    "TaskCreateRequest",
    "TaskListResponse",
    "TaskMessageResponse",
    "TaskOut",
    "TaskResponse",
    "TaskUpdateRequest",
    "UserActionResponse",
    "UserOut",
    "UserUpdateRequest",
]
