"""Service providers for route handlers.

Each request builds its services around its own database session; the token
and email services are process-wide and read-only after startup.
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from todo_api.database import get_db
from todo_api.services.auth_service import TokenService
from todo_api.services.email_service import EmailService
from todo_api.services.todo_service import TodoService
from todo_api.services.user_service import UserService


@lru_cache
def get_token_service() -> TokenService:
    return TokenService.from_settings()


@lru_cache
def get_email_service() -> EmailService:
    return EmailService.from_settings()


def get_user_service(
    db: Session = Depends(get_db),
    email_service: EmailService = Depends(get_email_service),
) -> UserService:
    return UserService(db, email_service)


def get_todo_service(db: Session = Depends(get_db)) -> TodoService:
    return TodoService(db)
