"""
Bootstrap the ROOT account from ROOT_EMAIL / ROOT_PASSWORD. Meant to run once per
deployment; re-running leaves an existing account untouched:
  python -m app.scripts.create_root

ROOT is not ADMIN: this account cannot reach admin-only routes unless an admin
promotes it.
"""
import logging
import sys

from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.core.database import SessionLocal
from app.core.security import hash_password
from app.models import Role, User

logger = logging.getLogger(__name__)

ROOT_NAME = "SUPER USER"


def ensure_root_user(db: Session, settings: Settings) -> User | None:
    """Create the ROOT user if missing. Returns None when the env vars are not set."""
    password = settings.ROOT_PASSWORD.get_secret_value() if settings.ROOT_PASSWORD else ""
    if not settings.ROOT_EMAIL or not password:
        logger.info("Root seed skipped: missing ROOT_EMAIL or ROOT_PASSWORD")
        return None

    existing = db.query(User).filter(User.email == settings.ROOT_EMAIL).first()
    if existing is not None:
        return existing

    user = User(
        name=ROOT_NAME,
        email=settings.ROOT_EMAIL,
        password_hash=hash_password(password, settings.BCRYPT_ROUNDS),
        role=Role.ROOT.value,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s %(message)s")
    db = SessionLocal()
    try:
        user = ensure_root_user(db, get_settings())
        if user is not None:
            print(f"{ROOT_NAME} ready ({user.email}).")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
