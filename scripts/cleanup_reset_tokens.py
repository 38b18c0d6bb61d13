"""Delete used and expired password reset tokens.

Meant for a periodic job (cron or similar).
"""

import logging

from todo_api.database import SessionLocal
from todo_api.services.repositories import ResetTokenRepository

logger = logging.getLogger(__name__)


def cleanup_reset_tokens() -> int:
    db = SessionLocal()
    try:
        return ResetTokenRepository(db).cleanup_expired()
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    removed = cleanup_reset_tokens()
    logger.info("Cleanup complete: %d tokens removed", removed)
