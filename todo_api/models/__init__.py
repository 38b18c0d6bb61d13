"""SQLAlchemy ORM models."""

from todo_api.models.password_reset_token import PasswordResetToken
from todo_api.models.todo import Todo
from todo_api.models.user import User, UserRole

__all__ = [
    "PasswordResetToken",
    "Todo",
    "User",
    "UserRole",
]
