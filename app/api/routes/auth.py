"""Signup/login/logout routes and the auth dependencies (get_current_user, require_admin)."""

import logging
from typing import Annotated

import jwt
from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.core.database import get_db
from app.core.exceptions import ErrorCode, UnauthorizedError
from app.core.security import decode_access_token
from app.models import Role
from app.schemas.auth import (
    AuthContext,
    LoginRequest,
    SessionResponse,
    SignupRequest,
    SignupResponse,
)
from app.services import auth as auth_service
from app.services.sessions import find_active_session

logger = logging.getLogger(__name__)
router = APIRouter()

ADMINS_ONLY_MESSAGE = "Access Denied. Admins only"


def session_cookie(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings)],
) -> str | None:
    """The raw session token, read under the same cookie name login sets."""
    return request.cookies.get(settings.AUTH_COOKIE_NAME)


def _unauthorized(reason: str) -> UnauthorizedError:
    # reason is for server logs only; clients always see the same message
    logger.info("Authentication rejected", extra={"reason": reason})
    return UnauthorizedError("Unauthorized", ErrorCode.UNAUTHORIZED)


def get_current_user(
    token: Annotated[str | None, Depends(session_cookie)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> AuthContext:
    """
    Dependency: require a valid session cookie and return the request's AuthContext.

    The token must verify (signature, exp) AND match an active session row for
    its subject, so a logged-out token is refused even before it expires.
    Raises 401 with a single generic message for every failure.
    """
    if not token:
        raise _unauthorized("missing_cookie")
    try:
        payload = decode_access_token(token, settings)
    except jwt.PyJWTError:
        raise _unauthorized("invalid_token")
    try:
        user_id = int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise _unauthorized("invalid_subject")

    record = find_active_session(db, user_id, token)
    if record is None:
        raise _unauthorized("session_not_found")

    role = (record.user.role if record.user is not None else None) or payload.get("role")
    return AuthContext(
        user_id=record.user_id,
        role=role or "",
        token_id=record.id,
        token=record.key,
    )


def require_admin(
    current_user: Annotated[AuthContext, Depends(get_current_user)],
) -> AuthContext:
    """Dependency: require role exactly ADMIN. No other role (ROOT included) passes."""
    if current_user.role != Role.ADMIN:
        logger.info(
            "Admin access denied",
            extra={"user_id": current_user.user_id, "role": current_user.role},
        )
        raise UnauthorizedError(ADMINS_ONLY_MESSAGE, ErrorCode.UNAUTHORIZED)
    return current_user


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
def signup(
    body: SignupRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> SignupResponse:
    """Create a USER account; returns only email and role."""
    user = auth_service.signup(db, body, settings)
    return SignupResponse(email=user.email, role=user.role)


@router.post("/login", response_model=SessionResponse)
def login(
    body: LoginRequest,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> SessionResponse:
    """
    Authenticate with email and password.

    The session token is set as an HTTP-only cookie and never returned in the body.
    """
    user, token = auth_service.login(db, body, settings)
    response.set_cookie(
        settings.AUTH_COOKIE_NAME,
        token,
        max_age=settings.JWT_EXPIRE_MINUTES * 60,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
        path="/",
    )
    return SessionResponse(user_id=user.id, message="Login success!")


@router.post("/logout", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
def logout(
    response: Response,
    current_user: Annotated[AuthContext, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> SessionResponse:
    """Revoke the session used for this request and clear the cookie."""
    record = auth_service.logout(db, current_user)
    response.delete_cookie(
        settings.AUTH_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )
    return SessionResponse(user_id=record.user_id, message="Logout success")
