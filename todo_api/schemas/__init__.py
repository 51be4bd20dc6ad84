"""Pydantic entity, payload and error schemas shared by every layer."""

from todo_api.schemas.common import TEXT_MAX_LENGTH, ErrorResponse
from todo_api.schemas.label import CreateLabel, Label
from todo_api.schemas.todo import CreateTodo, Todo, UpdateTodo

__all__ = [
    "TEXT_MAX_LENGTH",
    "ErrorResponse",
    "CreateLabel",
    "Label",
    "CreateTodo",
    "Todo",
    "UpdateTodo",
]
