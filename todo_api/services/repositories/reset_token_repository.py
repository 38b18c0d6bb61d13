"""Password reset token data access layer."""

import logging
from datetime import UTC, datetime

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from todo_api.models import PasswordResetToken

logger = logging.getLogger(__name__)


class ResetTokenRepository:
    """Stores reset tokens by SHA-256 hash; the raw token never hits the database."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def save(self, user_id: int, token_hash: str, expires_at: datetime) -> PasswordResetToken:
        """Persist a token, committing any pending invalidation with it."""
        record = PasswordResetToken(user_id=user_id, token_hash=token_hash, expires_at=expires_at)
        self._db.add(record)
        try:
            self._db.commit()
        except SQLAlchemyError:
            self._db.rollback()
            raise
        self._db.refresh(record)
        return record

    def find_by_token_hash(self, token_hash: str) -> PasswordResetToken | None:
        """Find token row regardless of expiry or use; callers classify it."""
        return (
            self._db.query(PasswordResetToken)
            .filter(PasswordResetToken.token_hash == token_hash)
            .first()
        )

    def mark_used(self, token_id: int) -> None:
        try:
            self._db.query(PasswordResetToken).filter(PasswordResetToken.id == token_id).update(
                {PasswordResetToken.used_at: datetime.now(UTC)}
            )
            self._db.commit()
        except SQLAlchemyError:
            self._db.rollback()
            raise

    def invalidate_for_user(self, user_id: int) -> int:
        """Delete a user's outstanding (unused) tokens.

        Not committed here; the following ``save`` commits both together.
        """
        deleted = (
            self._db.query(PasswordResetToken)
            .filter(
                PasswordResetToken.user_id == user_id,
                PasswordResetToken.used_at.is_(None),
            )
            .delete(synchronize_session=False)
        )
        return deleted

    def cleanup_expired(self) -> int:
        """Delete tokens that are used or past expiry."""
        deleted = (
            self._db.query(PasswordResetToken)
            .filter(
                or_(
                    PasswordResetToken.used_at.is_not(None),
                    PasswordResetToken.expires_at < datetime.now(UTC),
                )
            )
            .delete(synchronize_session=False)
        )
        self._db.commit()
        logger.info(f"Removed {deleted} used or expired reset tokens")
        return deleted
