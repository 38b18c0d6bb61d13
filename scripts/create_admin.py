"""Promote a registered user to the admin role.

Registration always yields the ``user`` role; this is how an operator grants
``admin``. Existing session tokens keep their old role claim until they expire.
"""

import logging

from sqlalchemy.orm import Session as DBSession

from todo_api.models import User, UserRole
from todo_api.services.repositories import UserRepository

logger = logging.getLogger(__name__)


def promote_to_admin(db: DBSession, email: str) -> User | None:
    """
    Give the user with ``email`` the admin role.

    Args:
        db: Database session
        email: Email of an already registered user

    Returns:
        The promoted user, or None if no user has that email.
    """
    user = UserRepository(db).find_by_email(email)
    if user is None:
        logger.error("No user registered with email: %s", email)
        return None

    if user.is_admin:
        logger.info("User is already an admin: %s", email)
        return user

    user.role = UserRole.ADMIN.value
    db.commit()
    logger.info("Promoted %s (id: %s) to admin", email, user.id)
    return user


if __name__ == "__main__":
    """Run as standalone script."""
    import sys

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    from todo_api.database import SessionLocal

    if len(sys.argv) != 2:
        logger.error("Usage: python scripts/create_admin.py EMAIL")
        sys.exit(2)

    db = SessionLocal()
    try:
        sys.exit(0 if promote_to_admin(db, sys.argv[1]) else 1)
    finally:
        db.close()
