"""ORM models. Importing this package registers every table on `Base.metadata`."""

from todo_api.models.label import LabelRecord
from todo_api.models.todo import TodoRecord

__all__ = ["LabelRecord", "TodoRecord"]
