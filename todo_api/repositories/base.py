"""
Todo API - Repository Interfaces
==================================

What:  Abstract base classes every storage backend implements.
How:   Route handlers depend on `TodoRepository` / `LabelRepository` only.
       The concrete class is chosen once when the app is wired:

           DatabaseTodoRepository   → PostgreSQL (or any async SQLAlchemy URL)
           InMemoryTodoRepository   → process-local dict, used by tests

       Both variants must be indistinguishable from a handler's point of view:
       same return values, same ordering, same exceptions.

Error contract (all variants):
    NotFoundError:    find/update/delete of an id that does not exist
    RepositoryError:  the backend could not complete the operation
    An empty store is not an error: all() returns [].
"""

from abc import ABC, abstractmethod
from typing import List

from todo_api.schemas.label import CreateLabel, Label
from todo_api.schemas.todo import CreateTodo, Todo, UpdateTodo


class TodoRepository(ABC):
    """Storage contract for todos."""

    @abstractmethod
    async def create(self, payload: CreateTodo) -> Todo:
        """
        Store a new todo and return it with its assigned id.

        New todos always start with `completed=False`.

        Raises:
            RepositoryError: The backend could not complete the write.
        """
        ...

    @abstractmethod
    async def find(self, todo_id: int) -> Todo:
        """
        Return the todo with `todo_id`.

        Raises:
            NotFoundError: No todo has that id.
        """
        ...

    @abstractmethod
    async def all(self) -> List[Todo]:
        """Return every todo, ordered by id ascending."""
        ...

    @abstractmethod
    async def update(self, todo_id: int, payload: UpdateTodo) -> Todo:
        """
        Apply the fields set in `payload` to the todo and return the result.

        Raises:
            NotFoundError: No todo has that id.
        """
        ...

    @abstractmethod
    async def delete(self, todo_id: int) -> None:
        """
        Remove the todo.

        Raises:
            NotFoundError: No todo has that id (including one already deleted).
        """
        ...


class LabelRepository(ABC):
    """Storage contract for labels. Labels have no update operation."""

    @abstractmethod
    async def create(self, payload: CreateLabel) -> Label:
        ...

    @abstractmethod
    async def find(self, label_id: int) -> Label:
        ...

    @abstractmethod
    async def all(self) -> List[Label]:
        ...

    @abstractmethod
    async def delete(self, label_id: int) -> None:
        ...
