"""Todos API router."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status

from todo_api.dependencies.auth import get_current_principal
from todo_api.dependencies.services import get_todo_service
from todo_api.schemas.common import ERROR_RESPONSES
from todo_api.schemas.todo import Todo as TodoSchema
from todo_api.schemas.todo import TodoCreate, TodoUpdate
from todo_api.services.access_policy import Principal
from todo_api.services.todo_service import TodoService

# Bounded to the INTEGER column range
TodoId = Annotated[int, Path(ge=1, le=2**31 - 1)]

router = APIRouter(prefix="/todos", tags=["todos"], responses={401: ERROR_RESPONSES[401]})


@router.get("", response_model=list[TodoSchema])
def list_todos(
    todo_service: TodoService = Depends(get_todo_service),
    principal: Principal = Depends(get_current_principal),
):
    """
    Get the caller's todos, or every todo for admins.
    """
    return todo_service.list(principal)


@router.get(
    "/{todo_id}",
    response_model=TodoSchema,
    responses={k: ERROR_RESPONSES[k] for k in (400, 403, 404)},
)
def get_todo(
    todo_id: TodoId,
    todo_service: TodoService = Depends(get_todo_service),
    principal: Principal = Depends(get_current_principal),
):
    """Get a single todo."""
    return todo_service.get(todo_id, principal)


@router.post(
    "",
    response_model=TodoSchema,
    status_code=status.HTTP_201_CREATED,
    responses={400: ERROR_RESPONSES[400]},
)
def create_todo(
    data: TodoCreate,
    todo_service: TodoService = Depends(get_todo_service),
    principal: Principal = Depends(get_current_principal),
):
    """Create a todo owned by the caller."""
    return todo_service.create(data, principal)


@router.put(
    "/{todo_id}",
    response_model=TodoSchema,
    responses={k: ERROR_RESPONSES[k] for k in (400, 403, 404)},
)
def update_todo(
    todo_id: TodoId,
    data: TodoUpdate,
    todo_service: TodoService = Depends(get_todo_service),
    principal: Principal = Depends(get_current_principal),
):
    """Update title and completion. The owner never changes."""
    return todo_service.update(todo_id, data, principal)


@router.delete(
    "/{todo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={k: ERROR_RESPONSES[k] for k in (400, 403, 404)},
)
def delete_todo(
    todo_id: TodoId,
    todo_service: TodoService = Depends(get_todo_service),
    principal: Principal = Depends(get_current_principal),
):
    """Delete a todo."""
    todo_service.delete(todo_id, principal)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
