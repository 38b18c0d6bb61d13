"""Business logic services."""

from .access_policy import AccessPolicy, AdminPolicy, OwnerPolicy, Principal, policy_for
from .auth_service import PasswordHasher, SessionClaims, TokenService
from .email_service import EmailService
from .todo_service import TodoService
from .user_service import UserService

__all__ = [
    "AccessPolicy",
    "AdminPolicy",
    "EmailService",
    "OwnerPolicy",
    "PasswordHasher",
    "Principal",
    "SessionClaims",
    "TodoService",
    "TokenService",
    "UserService",
    "policy_for",
]
