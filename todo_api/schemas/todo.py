"""Pydantic schemas for Todo model."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class TodoBase(BaseModel):
    """Base Todo schema with common fields."""

    title: str = Field(..., min_length=1, max_length=255)
    completed: bool = False


class TodoCreate(TodoBase):
    """Schema for creating a new Todo."""

    pass


class TodoUpdate(TodoBase):
    """Schema for updating a Todo.

    Unknown fields such as ``user_id`` are ignored, so ownership cannot be
    reassigned through this payload.
    """

    pass


class Todo(TodoBase):
    """Schema for Todo responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    created_at: datetime
    updated_at: datetime
