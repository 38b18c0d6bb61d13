"""Database initialization script with optional admin account."""

import logging
import os

from sqlalchemy.orm import Session

from todo_api.database import Base, SessionLocal, engine
from todo_api.models import User, UserRole
from todo_api.services.auth_service import PasswordHasher
from todo_api.services.repositories import UserRepository

logger = logging.getLogger(__name__)


def create_tables():
    """Create all database tables."""
    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=engine)
    logger.info("Tables created successfully!")


def ensure_admin(db: Session, username: str, email: str, password: str) -> User:
    """Create the admin account, or promote an existing account with that email."""
    user = UserRepository(db).find_by_email(email)
    if user:
        if not user.is_admin:
            user.role = UserRole.ADMIN.value
            db.commit()
            logger.info(f"Promoted existing user to admin: {email}")
        return user

    user = User(
        username=username,
        email=email,
        password_hash=PasswordHasher.hash_password(password),
        role=UserRole.ADMIN.value,
    )
    db.add(user)
    db.commit()
    logger.info(f"Created admin user: {email} (id: {user.id})")
    return user


def init_db():
    """Initialize database tables and, if configured, the admin account."""
    create_tables()

    admin_email = os.getenv("ADMIN_EMAIL")
    admin_password = os.getenv("ADMIN_PASSWORD")
    if not admin_email or not admin_password:
        logger.info("ADMIN_EMAIL/ADMIN_PASSWORD not set. Skipping admin creation.")
        return

    db = SessionLocal()
    try:
        ensure_admin(db, os.getenv("ADMIN_USERNAME", "admin"), admin_email, admin_password)
    except Exception:
        logger.exception("Error during database initialization")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    init_db()
