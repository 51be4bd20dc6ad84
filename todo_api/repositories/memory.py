"""
Todo API - In-Memory Repositories
===================================

What:  Process-local implementations of the repository interfaces.
How:   A dict from id to entity plus a next-id counter, guarded by a single
       lock that every operation holds for its whole duration. Ids are
       1, 2, 3, ... in creation order and never reused after a delete.
Who:   The test suite, and `REPOSITORY_BACKEND=memory` for local runs.

Thread Safety:
    Operations never await while holding the lock, so a plain
    threading.Lock serializes them whether handlers run on the event loop
    or in a worker thread. Entities are copied on the way in and out; the
    dict itself never leaves the repository.
"""

import threading
from typing import Dict, List

from todo_api.exceptions import NotFoundError
from todo_api.repositories.base import LabelRepository, TodoRepository
from todo_api.schemas.label import CreateLabel, Label
from todo_api.schemas.todo import CreateTodo, Todo, UpdateTodo


class InMemoryTodoRepository(TodoRepository):
    """Todo store backed by a dict."""

    def __init__(self):
        self._lock = threading.Lock()
        self._todos: Dict[int, Todo] = {}
        self._next_id = 1

    async def create(self, payload: CreateTodo) -> Todo:
        with self._lock:
            todo = Todo(id=self._next_id, text=payload.text, completed=False)
            self._todos[todo.id] = todo
            self._next_id += 1
            return todo.model_copy()

    async def find(self, todo_id: int) -> Todo:
        with self._lock:
            todo = self._todos.get(todo_id)
            if todo is None:
                raise NotFoundError(resource="todo", resource_id=todo_id)
            return todo.model_copy()

    async def all(self) -> List[Todo]:
        with self._lock:
            return [self._todos[todo_id].model_copy() for todo_id in sorted(self._todos)]

    async def update(self, todo_id: int, payload: UpdateTodo) -> Todo:
        with self._lock:
            todo = self._todos.get(todo_id)
            if todo is None:
                raise NotFoundError(resource="todo", resource_id=todo_id)
            updated = todo.model_copy(update=payload.changes())
            self._todos[todo_id] = updated
            return updated.model_copy()

    async def delete(self, todo_id: int) -> None:
        with self._lock:
            if self._todos.pop(todo_id, None) is None:
                raise NotFoundError(resource="todo", resource_id=todo_id)


class InMemoryLabelRepository(LabelRepository):
    """Label store backed by a dict."""

    def __init__(self):
        self._lock = threading.Lock()
        self._labels: Dict[int, Label] = {}
        self._next_id = 1

    async def create(self, payload: CreateLabel) -> Label:
        with self._lock:
            label = Label(id=self._next_id, name=payload.name)
            self._labels[label.id] = label
            self._next_id += 1
            return label.model_copy()

    async def find(self, label_id: int) -> Label:
        with self._lock:
            label = self._labels.get(label_id)
            if label is None:
                raise NotFoundError(resource="label", resource_id=label_id)
            return label.model_copy()

    async def all(self) -> List[Label]:
        with self._lock:
            return [self._labels[label_id].model_copy() for label_id in sorted(self._labels)]

    async def delete(self, label_id: int) -> None:
        with self._lock:
            if self._labels.pop(label_id, None) is None:
                raise NotFoundError(resource="label", resource_id=label_id)
