"""Identity lifecycle: signup, login and logout."""

import logging
from typing import TYPE_CHECKING

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import BadRequestError, ErrorCode, NotFoundError
from app.core.security import create_access_token, hash_password, verify_password
from app.models import Role, SessionToken, User
from app.schemas.auth import AuthContext, LoginRequest, SignupRequest
from app.services.sessions import create_session, delete_session

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)


def find_active_user_by_email(db: Session, email: str) -> User | None:
    """Exact-email lookup that ignores soft-deleted accounts."""
    return (
        db.query(User)
        .filter(User.email == email, User.deleted.is_(False))
        .first()
    )


def signup(db: Session, body: SignupRequest, settings: "Settings") -> User:
    """
    Create a USER account. The role is always USER; clients cannot pick it.

    Raises BadRequestError when the email is taken. A soft-deleted account still
    holds its address, so the unique constraint reports that case (and a
    concurrent signup) instead of the lookup.
    """
    if find_active_user_by_email(db, body.email) is not None:
        raise BadRequestError("User already exists!", ErrorCode.USER_ALREADY_EXISTS)

    user = User(
        name=body.name,
        email=body.email,
        password_hash=hash_password(body.password, settings.BCRYPT_ROUNDS),
        role=Role.USER.value,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise BadRequestError(
            "User already exists!", ErrorCode.USER_ALREADY_EXISTS
        ) from e
    db.refresh(user)
    logger.info("User signed up", extra={"user_id": user.id})
    return user


def login(db: Session, body: LoginRequest, settings: "Settings") -> tuple[User, str]:
    """
    Verify credentials, issue a signed token and record it as an active session.

    Unknown account and wrong password are reported differently (404 vs 400).
    If the session row cannot be written the error propagates and no token is
    handed out, so a client never holds a token the store does not know.
    """
    user = find_active_user_by_email(db, body.email)
    if user is None:
        raise NotFoundError("User does not exists!", ErrorCode.USER_NOT_FOUND)
    if not verify_password(body.password, user.password_hash):
        raise BadRequestError("Incorrect password!", ErrorCode.INCORRECT_PASSWORD)

    token = create_access_token(sub=user.id, name=user.name, role=user.role, settings=settings)
    create_session(db, user.id, token)
    logger.info("User logged in", extra={"user_id": user.id})
    return user, token


def logout(db: Session, context: AuthContext) -> SessionToken:
    """Delete the exact session the request authenticated with."""
    record = delete_session(db, context.token_id, context.token)
    if record is None:
        raise NotFoundError("Token does not exists!", ErrorCode.TOKEN_NOT_FOUND)
    logger.info("User logged out", extra={"user_id": record.user_id})
    return record
