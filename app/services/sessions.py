"""
Session record store: the server-side list of issued session tokens.

A signed token is only honoured while a matching active row exists here, which
lets logout revoke a token before its own exp claim. Rows are never expired in
the background; purge_expired_sessions is an explicit maintenance operation.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from app.models import SessionToken

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)


def create_session(db: Session, user_id: int, token: str) -> SessionToken:
    """Insert a new active session row. Any store failure propagates to the caller."""
    record = SessionToken(user_id=user_id, key=token, active=True)
    db.add(record)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(record)
    return record


def find_active_session(db: Session, user_id: int, token: str) -> SessionToken | None:
    """
    Return the active session matching user id and the exact token string, with
    its owning user loaded in the same query. None when revoked or never issued.
    """
    return (
        db.query(SessionToken)
        .options(joinedload(SessionToken.user))
        .filter(
            SessionToken.user_id == user_id,
            SessionToken.key == token,
            SessionToken.active.is_(True),
        )
        .first()
    )


def delete_session(db: Session, token_id: int, token: str) -> SessionToken | None:
    """
    Hard-delete the active session identified by both id and exact token.

    Returns the deleted row, or None when nothing matched (e.g. double logout).
    """
    record = (
        db.query(SessionToken)
        .filter(
            SessionToken.id == token_id,
            SessionToken.key == token,
            SessionToken.active.is_(True),
        )
        .first()
    )
    if record is None:
        return None
    db.delete(record)
    db.commit()
    return record


def purge_expired_sessions(db: Session, before: datetime) -> int:
    """Delete session rows created before the cutoff. Idempotent: safe to run repeatedly."""
    deleted_count = (
        db.query(SessionToken)
        .filter(SessionToken.created_at < before)
        .delete(synchronize_session=False)
    )
    db.commit()

    if deleted_count > 0:
        logger.info(
            "Session purge run: cutoff=%s, sessions_deleted=%s",
            before.isoformat(),
            deleted_count,
        )
    return deleted_count


def run_session_purge(db: Session, settings: "Settings") -> int:
    """
    Purge sessions older than SESSION_RETENTION_HOURS; no-op when disabled.

    The window never drops below the token lifetime, so a row whose token can
    still verify is kept even when retention is configured shorter.
    """
    if not settings.SESSION_PURGE_ENABLED:
        logger.info("Session purge is disabled (SESSION_PURGE_ENABLED=false); skipping.")
        return 0

    retention = max(
        timedelta(hours=settings.SESSION_RETENTION_HOURS),
        timedelta(minutes=settings.JWT_EXPIRE_MINUTES),
    )
    cutoff = datetime.now(timezone.utc) - retention
    return purge_expired_sessions(db, cutoff)
