"""
CLI entrypoint for the role bootstrap. The API runs it on startup; use this
to prepare a fresh database ahead of time:

  python -m incident_desk.scripts.seed_roles
"""

import logging
import sys

from incident_desk.core.config import get_settings
from incident_desk.core.database import SessionLocal
from incident_desk.core.logging_config import configure_logging
from incident_desk.services.roles import seed_roles

logger = logging.getLogger(__name__)


def main() -> int:
    """Upsert the user/moderator/admin role rows."""
    configure_logging(get_settings().LOG_LEVEL)
    db = SessionLocal()
    try:
        created = seed_roles(db)
        logger.info("Role seed completed: created=%s", created)
        return 0
    except Exception as e:
        logger.exception("Role seed failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
