"""
Delete stale session rows. Nothing in the API process does this on its own, so
schedule it, e.g. hourly from cron:

  0 * * * * cd /srv/todo-api && .venv/bin/python -m app.purge_sessions

Exit status is 0 on success (including when purging is disabled) and 1 when the
store could not be purged.
"""

import logging
import sys

from app.core.config import get_settings
from app.core.database import SessionLocal
from app.services.sessions import run_session_purge

logger = logging.getLogger("app.purge_sessions")


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    db = SessionLocal()
    try:
        purged = run_session_purge(db, get_settings())
    except Exception:
        logger.exception("Session purge failed")
        return 1
    finally:
        db.close()
    logger.info("Session purge finished", extra={"sessions_deleted": purged})
    return 0


if __name__ == "__main__":
    sys.exit(main())
