"""
Todo API - Repositories Package
=================================

Interfaces:
    - TodoRepository, LabelRepository (base.py)

Implementations:
    - DatabaseTodoRepository, DatabaseLabelRepository (database.py)
    - InMemoryTodoRepository, InMemoryLabelRepository (memory.py)
"""

from todo_api.repositories.base import LabelRepository, TodoRepository
from todo_api.repositories.database import DatabaseLabelRepository, DatabaseTodoRepository
from todo_api.repositories.memory import InMemoryLabelRepository, InMemoryTodoRepository

__all__ = [
    "LabelRepository",
    "TodoRepository",
    "DatabaseLabelRepository",
    "DatabaseTodoRepository",
    "InMemoryLabelRepository",
    "InMemoryTodoRepository",
]
