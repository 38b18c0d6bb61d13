"""Todo CRUD with ownership enforcement."""

import logging

from sqlalchemy.orm import Session

from todo_api.models import Todo
from todo_api.schemas.todo import TodoCreate, TodoUpdate
from todo_api.services.access_policy import Principal
from todo_api.services.exceptions import TodoNotFoundError
from todo_api.services.repositories import TodoRepository

logger = logging.getLogger(__name__)


class TodoService:
    """Business rules for todos.

    Every single-item operation fetches the todo first (404 if absent) and
    then asks the principal's policy (403 if not owner and not admin).
    """

    def __init__(self, db: Session) -> None:
        self._todos = TodoRepository(db)

    def _get_authorized(self, todo_id: int, principal: Principal) -> Todo:
        todo = self._todos.find_by_id(todo_id)
        if todo is None:
            raise TodoNotFoundError()
        principal.policy.authorize(todo)
        return todo

    def create(self, data: TodoCreate, principal: Principal) -> Todo:
        todo = Todo(title=data.title, completed=data.completed, user_id=principal.user_id)
        return self._todos.create(todo)

    def list(self, principal: Principal) -> list[Todo]:
        owner_id = principal.policy.owner_filter
        if owner_id is None:
            return self._todos.list_all()
        return self._todos.list_by_user(owner_id)

    def get(self, todo_id: int, principal: Principal) -> Todo:
        return self._get_authorized(todo_id, principal)

    def update(self, todo_id: int, data: TodoUpdate, principal: Principal) -> Todo:
        todo = self._get_authorized(todo_id, principal)
        return self._todos.update(todo, title=data.title, completed=data.completed)

    def delete(self, todo_id: int, principal: Principal) -> None:
        todo = self._get_authorized(todo_id, principal)
        self._todos.delete(todo)
        logger.info(f"Todo {todo_id} deleted by user {principal.user_id}")
