"""Admin-only user management routes."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.routes.auth import require_admin
from app.core.config import Settings, get_settings
from app.core.database import get_db
from app.schemas.auth import AuthContext
from app.schemas.user import UserActionResponse, UserOut, UserUpdateRequest
from app.services import users as user_service

router = APIRouter()


@router.get("/", response_model=list[UserOut])
def list_users(
    _admin: Annotated[AuthContext, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> list[UserOut]:
    """List every user, soft-deleted ones included."""
    return [UserOut.model_validate(u) for u in user_service.list_users(db)]


# Declared before /{user_id} so "user" is not parsed as an id.
@router.get("/user", response_model=list[UserOut])
def filter_users(
    _admin: Annotated[AuthContext, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
    deleted: bool = False,
) -> list[UserOut]:
    """List users by soft-delete flag: ?deleted=true for deleted accounts, active ones by default."""
    return [UserOut.model_validate(u) for u in user_service.list_users(db, deleted=deleted)]


@router.get("/{user_id}", response_model=UserOut)
def get_user(
    user_id: int,
    _admin: Annotated[AuthContext, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UserOut:
    return UserOut.model_validate(user_service.get_user(db, user_id))


@router.patch("/{user_id}", response_model=UserActionResponse)
def update_user(
    user_id: int,
    body: UserUpdateRequest,
    admin: Annotated[AuthContext, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> UserActionResponse:
    """Update name, email, role or password. Admins cannot demote themselves."""
    user = user_service.update_user(db, admin, user_id, body, settings)
    return UserActionResponse(message="User updated", user=UserOut.model_validate(user))


@router.delete("/{user_id}", response_model=UserActionResponse)
def delete_user(
    user_id: int,
    admin: Annotated[AuthContext, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UserActionResponse:
    """Soft-delete a user. Admins cannot delete themselves."""
    user = user_service.soft_delete_user(db, admin, user_id)
    return UserActionResponse(message="User deleted", user=UserOut.model_validate(user))
