"""Admin user management, including the self-protection guards."""

import logging
from typing import TYPE_CHECKING

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import BadRequestError, ErrorCode, NotFoundError
from app.core.security import hash_password
from app.models import Role, User
from app.schemas.auth import AuthContext
from app.schemas.user import UserUpdateRequest

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)


def list_users(db: Session, deleted: bool | None = None) -> list[User]:
    """All users, or only those whose soft-delete flag equals ``deleted``."""
    query = db.query(User)
    if deleted is not None:
        query = query.filter(User.deleted.is_(deleted))
    return query.order_by(User.id).all()


def get_user(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise NotFoundError("User not found", ErrorCode.USER_NOT_FOUND)
    return user


def update_user(
    db: Session,
    actor: AuthContext,
    target_id: int,
    body: UserUpdateRequest,
    settings: "Settings",
) -> User:
    """
    Apply a partial update to a user.

    An admin changing their own role to anything but ADMIN is rejected before
    any field of the request is written.
    """
    user = get_user(db, target_id)

    if actor.user_id == target_id and body.role is not None and body.role != Role.ADMIN:
        logger.warning("Self-demotion rejected", extra={"user_id": actor.user_id})
        raise BadRequestError("You cannot demote yourself", ErrorCode.SELF_DEMOTION)

    if body.email is not None and body.email != user.email:
        taken = (
            db.query(User)
            .filter(User.email == body.email, User.id != user.id)
            .first()
        )
        if taken is not None:
            raise BadRequestError("User already exists!", ErrorCode.USER_ALREADY_EXISTS)

    if body.name is not None:
        user.name = body.name
    if body.email is not None:
        user.email = body.email
    if body.role is not None:
        user.role = body.role
    if body.password is not None:
        user.password_hash = hash_password(body.password, settings.BCRYPT_ROUNDS)

    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise BadRequestError(
            "User already exists!", ErrorCode.USER_ALREADY_EXISTS
        ) from e
    db.refresh(user)
    logger.info(
        "User updated", extra={"actor_id": actor.user_id, "user_id": user.id}
    )
    return user


def soft_delete_user(db: Session, actor: AuthContext, target_id: int) -> User:
    """Flag a user as deleted. Admins cannot delete themselves."""
    user = get_user(db, target_id)

    if actor.user_id == target_id:
        logger.warning("Self-deletion rejected", extra={"user_id": actor.user_id})
        raise BadRequestError("You cannot delete yourself", ErrorCode.SELF_DEMOTION)

    user.deleted = True
    db.commit()
    db.refresh(user)
    # Existing sessions of this user stay valid until logout or purge.
    logger.info(
        "User soft-deleted", extra={"actor_id": actor.user_id, "user_id": user.id}
    )
    return user
