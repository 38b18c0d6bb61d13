"""Authentication router."""

import logging

from fastapi import APIRouter, Depends, Request, status

from todo_api.dependencies.auth import get_current_principal
from todo_api.dependencies.services import get_token_service, get_user_service
from todo_api.rate_limiter import limiter
from todo_api.schemas.auth import (
    ForgotPasswordRequest,
    LoginResponse,
    MessageResponse,
    ProtectedResponse,
    ResetPasswordRequest,
    ResetPasswordWithTokenRequest,
    UserLogin,
    UserRegister,
    UserResponse,
)
from todo_api.schemas.common import ErrorResponse
from todo_api.services.access_policy import Principal
from todo_api.services.auth_service import TokenService
from todo_api.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["authentication"])

FORGOT_PASSWORD_MESSAGE = "If that email exists, we sent a password reset link."


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
@limiter.limit("5/minute")
def register(
    request: Request,
    data: UserRegister,
    user_service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Register a new user with the default ``user`` role."""
    user = user_service.register(data.username, data.email, data.password)
    return UserResponse.model_validate(user)


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)
@limiter.limit("10/minute")
def login(
    request: Request,
    data: UserLogin,
    user_service: UserService = Depends(get_user_service),
    token_service: TokenService = Depends(get_token_service),
) -> LoginResponse:
    """Login and get a session token."""
    user = user_service.authenticate(data.email, data.password)
    token = token_service.generate_session_token(user.id, user.email, user.role)
    return LoginResponse(token=token, user_id=user.id, role=user.role)


@router.post(
    "/forgot-password",
    response_model=MessageResponse,
    responses={400: {"model": ErrorResponse}},
)
@limiter.limit("3/minute")
def forgot_password(
    request: Request,
    data: ForgotPasswordRequest,
    user_service: UserService = Depends(get_user_service),
) -> MessageResponse:
    """Request password reset email."""
    user_service.forgot_password(data.email)
    # Always return success (don't reveal if email exists)
    return MessageResponse(message=FORGOT_PASSWORD_MESSAGE)


@router.post(
    "/reset-password/{token}",
    response_model=MessageResponse,
    responses={400: {"model": ErrorResponse}},
)
@limiter.limit("10/minute")
def reset_password(
    request: Request,
    token: str,
    data: ResetPasswordRequest,
    user_service: UserService = Depends(get_user_service),
) -> MessageResponse:
    """Reset password with the token from the emailed link."""
    user_service.reset_password(token, data.password)
    return MessageResponse(message="Password reset successfully")


@router.post(
    "/reset-password",
    response_model=MessageResponse,
    responses={400: {"model": ErrorResponse}},
)
@limiter.limit("10/minute")
def reset_password_with_body_token(
    request: Request,
    data: ResetPasswordWithTokenRequest,
    user_service: UserService = Depends(get_user_service),
) -> MessageResponse:
    """Reset password with the token in the request body."""
    user_service.reset_password(data.token, data.password)
    return MessageResponse(message="Password reset successfully")


@router.get(
    "/protected",
    response_model=ProtectedResponse,
    responses={401: {"model": ErrorResponse}},
)
def protected(principal: Principal = Depends(get_current_principal)) -> ProtectedResponse:
    """Echo the caller's token claims."""
    return ProtectedResponse(
        message="Access granted",
        user_id=principal.user_id,
        email=principal.email,
        role=principal.role,
    )
