"""
Todo API - Todo Schemas
=========================

What:  The Todo entity and its two input payloads.
How:   Payloads are strict: JSON types must match exactly. Length
       constraints are declared on the fields and enforced by the
       validated request gate (`todo_api.validation`).

    Todo        {id, text, completed}    → response body, repository value
    CreateTodo  {text}                   → POST /todos
    UpdateTodo  {id, text, completed}    → PATCH /todos/{id}, all optional
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from todo_api.schemas.common import TEXT_MAX_LENGTH


class Todo(BaseModel):
    """A stored todo. `id` is always assigned by the repository."""
    id: int = Field(description="Store-assigned identifier")
    text: str = Field(description="What needs doing")
    completed: bool = Field(default=False, description="Whether the todo is done")

    model_config = ConfigDict(from_attributes=True)


class CreateTodo(BaseModel):
    """Payload for creating a todo."""
    text: str = Field(min_length=1, max_length=TEXT_MAX_LENGTH)

    model_config = ConfigDict(strict=True)


class UpdateTodo(BaseModel):
    """
    Payload for updating a todo.

    Omitted (or null) fields keep their stored value. `id` is accepted for
    clients that send the whole entity back, but the path id decides which
    todo is updated.
    """
    id: Optional[int] = None
    text: Optional[str] = Field(default=None, min_length=1, max_length=TEXT_MAX_LENGTH)
    completed: Optional[bool] = None

    model_config = ConfigDict(strict=True)

    def changes(self) -> dict:
        """Column values to write: only fields the client actually set."""
        return self.model_dump(exclude_none=True, exclude={"id"})
