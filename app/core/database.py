"""Engine and per-request session for the user, session-token and task tables."""

from collections.abc import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import settings

# sqlite connections are shared across FastAPI's threadpool workers
_connect_args = (
    {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}
)

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    echo=settings.DEBUG,
    connect_args=_connect_args,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency that yields one session per request.

    Each store operation commits on its own; anything left uncommitted when the
    request fails or is cancelled is rolled back by close().
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the store is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
