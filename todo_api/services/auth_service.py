"""Password hashing and token management."""

import hashlib
import logging
import secrets
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import bcrypt
import jwt

from todo_api.config import Settings, settings
from todo_api.models.user import UserRole
from todo_api.services.exceptions import InvalidOrExpiredTokenError

logger = logging.getLogger(__name__)

SESSION_CLAIMS = ("user_id", "email", "role", "iat", "exp")


class PasswordHasher:
    """bcrypt wrapper for at-rest password storage."""

    # Pre-computed bcrypt hash for timing-consistent password verification
    # Used when user doesn't exist to prevent email enumeration via timing attacks
    _DUMMY_HASH = "$2b$12$LQv3c1yqBWVHxkd0LHAkCOYz6TtxMQJqhN8/X4.VTtYA9dWQ6E3Ky"

    @staticmethod
    def get_dummy_hash() -> str:
        """Get a dummy password hash for timing-consistent verification."""
        return PasswordHasher._DUMMY_HASH

    @staticmethod
    def hash_password(password: str) -> str:
        """Hash a password using bcrypt."""
        salt = bcrypt.gensalt()
        hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
        return hashed.decode("utf-8")

    @staticmethod
    def verify_password(password: str, hashed: str) -> bool:
        """Verify a password against its hash."""
        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
        except ValueError as e:
            logger.error(f"Password verification error: {e}")
            return False


@dataclass(frozen=True)
class SessionClaims:
    """Identity carried by a session token."""

    user_id: int
    email: str
    role: str


class TokenService:
    """Issues and verifies session tokens and password reset tokens.

    Session tokens are stateless HS256 JWTs; reset tokens are opaque random
    strings whose expiry lives in the database row.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", session_ttl: timedelta | None = None):
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._session_ttl = session_ttl or timedelta(hours=24)

    @classmethod
    def from_settings(cls, config: Settings = settings) -> "TokenService":
        return cls(
            secret_key=config.jwt_secret_key,
            algorithm=config.jwt_algorithm,
            session_ttl=timedelta(hours=config.session_token_expire_hours),
        )

    def generate_session_token(
        self,
        user_id: int,
        email: str,
        role: str,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create a signed session token."""
        issued_at = datetime.now(UTC)
        payload = {
            "user_id": user_id,
            "email": email,
            "role": str(role),
            "iat": issued_at,
            "exp": issued_at + (expires_delta if expires_delta is not None else self._session_ttl),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def validate_session_token(self, token: str) -> SessionClaims:
        """Verify signature and expiry, then extract the identity claims.

        Only the configured algorithm is accepted, so a token re-signed with
        ``none`` or another algorithm fails verification.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require": list(SESSION_CLAIMS)},
            )
        except jwt.ExpiredSignatureError as e:
            logger.debug("Token expired")
            raise InvalidOrExpiredTokenError() from e
        except jwt.InvalidTokenError as e:
            logger.debug(f"Invalid token: {e}")
            raise InvalidOrExpiredTokenError() from e

        user_id = payload["user_id"]
        email = payload["email"]
        role = payload["role"]
        # bool is an int subclass
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            raise InvalidOrExpiredTokenError()
        if not isinstance(email, str) or role not in {r.value for r in UserRole}:
            raise InvalidOrExpiredTokenError()

        return SessionClaims(user_id=user_id, email=email, role=role)

    @staticmethod
    def generate_reset_token() -> str:
        """32 random bytes, hex encoded."""
        return secrets.token_hex(32)

    @staticmethod
    def hash_reset_token(token: str) -> str:
        """SHA-256 of a reset token, the form stored server-side."""
        return hashlib.sha256(token.encode("utf-8")).hexdigest()
