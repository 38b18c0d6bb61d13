"""Todo data access layer."""

from sqlalchemy import func
from sqlalchemy.orm import Session

from todo_api.models import Todo


class TodoRepository:
    """Todo data access. Ownership checks live in the service layer."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def create(self, todo: Todo) -> Todo:
        self._db.add(todo)
        self._db.commit()
        self._db.refresh(todo)
        return todo

    def find_by_id(self, todo_id: int) -> Todo | None:
        """Find todo by primary key."""
        return self._db.query(Todo).filter(Todo.id == todo_id).first()

    def list_all(self) -> list[Todo]:
        """All todos, newest first."""
        return self._db.query(Todo).order_by(Todo.created_at.desc(), Todo.id.desc()).all()

    def list_by_user(self, user_id: int) -> list[Todo]:
        """Todos owned by a user, newest first."""
        return (
            self._db.query(Todo)
            .filter(Todo.user_id == user_id)
            .order_by(Todo.created_at.desc(), Todo.id.desc())
            .all()
        )

    def update(self, todo: Todo, title: str, completed: bool) -> Todo:
        """Update title and completion; ``user_id`` is never touched.

        ``updated_at`` is refreshed even when the values are unchanged.
        """
        todo.title = title
        todo.completed = completed
        todo.updated_at = func.now()
        self._db.commit()
        self._db.refresh(todo)
        return todo

    def delete(self, todo: Todo) -> None:
        self._db.delete(todo)
        self._db.commit()
