"""Authentication dependencies for protected routes."""

from fastapi import Depends, Request

from todo_api.dependencies.services import get_token_service
from todo_api.services.access_policy import Principal
from todo_api.services.auth_service import TokenService
from todo_api.services.exceptions import UnauthorizedError

BEARER_PREFIX = "Bearer "


def get_current_principal(
    request: Request,
    token_service: TokenService = Depends(get_token_service),
) -> Principal:
    """
    Resolve the bearer token into the request's principal.

    No header -> 401 "Authorization header required"; header not of the
    form ``Bearer <token>`` -> 401 "Invalid token format"; token rejected
    -> 401 "Invalid or expired token". The token is self-contained, so no
    database lookup happens here.

    Usage:
        @router.get("/protected")
        def protected_route(principal: Principal = Depends(get_current_principal)):
            return {"user_id": principal.user_id}
    """
    header = request.headers.get("Authorization")
    if not header:
        raise UnauthorizedError("Authorization header required")

    if not header.startswith(BEARER_PREFIX) or not header[len(BEARER_PREFIX):].strip():
        raise UnauthorizedError("Invalid token format")

    token = header[len(BEARER_PREFIX):].strip()
    # Raises InvalidOrExpiredTokenError
    claims = token_service.validate_session_token(token)

    principal = Principal(user_id=claims.user_id, email=claims.email, role=claims.role)
    request.state.principal = principal
    return principal
