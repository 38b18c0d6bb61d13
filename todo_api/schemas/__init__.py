"""Pydantic schemas for request/response validation."""

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
from todo_api.schemas.common import ERROR_RESPONSES, ErrorResponse
from todo_api.schemas.todo import Todo, TodoCreate, TodoUpdate

__all__ = [
    "ERROR_RESPONSES",
    "ErrorResponse",
    "ForgotPasswordRequest",
    "LoginResponse",
    "MessageResponse",
    "ProtectedResponse",
    "ResetPasswordRequest",
    "ResetPasswordWithTokenRequest",
    "Todo",
    "TodoCreate",
    "TodoUpdate",
    "UserLogin",
    "UserRegister",
    "UserResponse",
]
