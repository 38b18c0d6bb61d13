"""Service-level error taxonomy.

Each error carries the HTTP status and the client-facing message. The
application's exception handlers render them as ``{"error": message}``.
"""


class ServiceError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None, headers: dict[str, str] | None = None):
        self.message = message or self.default_message
        self.headers = headers
        super().__init__(self.message)


class ValidationError(ServiceError):
    status_code = 400
    default_message = "Invalid request payload"


class DuplicateEmailError(ServiceError):
    status_code = 409
    default_message = "Username or email already exists"


class InvalidCredentialsError(ServiceError):
    """Same message for unknown email and wrong password."""

    status_code = 401
    default_message = "Invalid credentials"


class UnauthorizedError(ServiceError):
    status_code = 401
    default_message = "Authorization header required"

    def __init__(self, message: str | None = None):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class InvalidOrExpiredTokenError(UnauthorizedError):
    default_message = "Invalid or expired token"


class ForbiddenError(ServiceError):
    status_code = 403
    default_message = "Access denied"


class TodoNotFoundError(ServiceError):
    status_code = 404
    default_message = "Todo not found"


class InvalidResetTokenError(ServiceError):
    status_code = 400
    default_message = "invalid or expired token"


class ResetTokenNotFoundError(InvalidResetTokenError):
    pass


class ResetTokenExpiredError(InvalidResetTokenError):
    default_message = "token expired"


class ResetTokenAlreadyUsedError(InvalidResetTokenError):
    default_message = "token already used"


class InternalError(ServiceError):
    pass
