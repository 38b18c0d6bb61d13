"""User data access layer."""

import logging

from sqlalchemy import func, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from todo_api.models import User

from .exceptions import DuplicateError, NotFoundError

logger = logging.getLogger(__name__)


class UserRepository:
    """Centralized user data access.

    Naming conventions:
    - find_* : Query that may return None
    - get_* : Query that raises exception if missing
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def create(self, user: User) -> User:
        """Insert a user.

        Uniqueness of email and username is enforced by the database; a
        concurrent duplicate loses at the unique index and surfaces here.
        """
        self._db.add(user)
        try:
            self._db.commit()
        except IntegrityError as e:
            self._db.rollback()
            logger.info(f"Rejected duplicate user registration: {user.email}")
            raise DuplicateError("User", "email", user.email) from e
        self._db.refresh(user)
        return user

    def find_by_id(self, user_id: int) -> User | None:
        """Find user by primary key."""
        return self._db.query(User).filter(User.id == user_id).first()

    def find_by_email(self, email: str) -> User | None:
        """Find user by email (case-insensitive)."""
        return self._db.query(User).filter(func.lower(User.email) == email.lower()).first()

    def get_by_email(self, email: str) -> User:
        """Get user by email, raising if missing."""
        user = self.find_by_email(email)
        if user is None:
            raise NotFoundError("User", email)
        return user

    def update_password(self, user_id: int, new_hash: str) -> None:
        """Replace a user's password hash."""
        result = self._db.execute(
            update(User)
            .where(User.id == user_id)
            .values(password_hash=new_hash, updated_at=func.now())
        )
        if result.rowcount == 0:
            self._db.rollback()
            raise NotFoundError("User", user_id)
        self._db.commit()
