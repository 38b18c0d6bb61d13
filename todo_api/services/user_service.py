"""Registration, login and password reset."""

import logging
from datetime import UTC, datetime, timedelta

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from todo_api.config import Settings, settings
from todo_api.models import PasswordResetToken, User, UserRole
from todo_api.services.auth_service import PasswordHasher, TokenService
from todo_api.services.email_service import EmailService
from todo_api.services.exceptions import (
    DuplicateEmailError,
    InternalError,
    InvalidCredentialsError,
    ResetTokenAlreadyUsedError,
    ResetTokenExpiredError,
    ResetTokenNotFoundError,
)
from todo_api.services.repositories import (
    DuplicateError,
    NotFoundError,
    ResetTokenRepository,
    UserRepository,
)

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class UserService:
    """Account lifecycle: register, authenticate, forgot and reset password."""

    def __init__(
        self,
        db: Session,
        email_service: EmailService,
        config: Settings = settings,
    ) -> None:
        self._users = UserRepository(db)
        self._reset_tokens = ResetTokenRepository(db)
        self._email_service = email_service
        self._config = config

    def register(self, username: str, email: str, password: str) -> User:
        user = User(
            username=username,
            email=email,
            password_hash=PasswordHasher.hash_password(password),
            role=UserRole.USER.value,
        )
        try:
            user = self._users.create(user)
        except DuplicateError as e:
            raise DuplicateEmailError() from e
        except SQLAlchemyError as e:
            logger.exception("Failed to register user")
            raise InternalError("Failed to register user") from e

        logger.info(f"User registered: {user.email}")
        return user

    def authenticate(self, email: str, password: str) -> User:
        user = self._users.find_by_email(email)
        if user is None:
            # Perform dummy password verification to prevent timing-based email enumeration
            PasswordHasher.verify_password(password, PasswordHasher.get_dummy_hash())
            raise InvalidCredentialsError()

        if not PasswordHasher.verify_password(password, user.password_hash):
            raise InvalidCredentialsError()

        logger.info(f"User logged in: {user.email}")
        return user

    def forgot_password(self, email: str) -> None:
        """Issue a reset token and email its link.

        Returns normally whether or not the email is registered.
        """
        user = self._users.find_by_email(email)
        if user is None:
            logger.info("Password reset requested for unknown email")
            return

        token = TokenService.generate_reset_token()
        expires_hours = self._config.password_reset_token_expire_hours
        try:
            if self._config.invalidate_previous_reset_tokens:
                self._reset_tokens.invalidate_for_user(user.id)
            self._reset_tokens.save(
                user_id=user.id,
                token_hash=TokenService.hash_reset_token(token),
                expires_at=datetime.now(UTC) + timedelta(hours=expires_hours),
            )
        except SQLAlchemyError as e:
            logger.exception("Failed to save reset token")
            raise InternalError("Failed to process password reset") from e

        reset_url = f"{self._config.frontend_url.rstrip('/')}/reset-password/{token}"
        if not self._email_service.send_password_reset_email(user.email, reset_url, expires_hours):
            logger.warning(f"Password reset email not delivered to: {user.email}")
        else:
            logger.info(f"Password reset email sent to: {user.email}")

    def _validate_reset_token(self, token: str) -> PasswordResetToken:
        record = self._reset_tokens.find_by_token_hash(TokenService.hash_reset_token(token))
        if record is None:
            raise ResetTokenNotFoundError()
        if datetime.now(UTC) > _as_utc(record.expires_at):
            raise ResetTokenExpiredError()
        if record.used_at is not None:
            raise ResetTokenAlreadyUsedError()
        return record

    def reset_password(self, token: str, new_password: str) -> None:
        record = self._validate_reset_token(token)
        token_id, user_id = record.id, record.user_id

        try:
            self._users.update_password(user_id, PasswordHasher.hash_password(new_password))
        except NotFoundError as e:
            raise ResetTokenNotFoundError() from e
        except SQLAlchemyError as e:
            logger.exception("Failed to update password")
            raise InternalError("Failed to update password") from e

        try:
            self._reset_tokens.mark_used(token_id)
        except SQLAlchemyError:
            logger.exception(f"Failed to mark reset token {token_id} as used")

        logger.info(f"Password reset completed for user id: {user_id}")
