"""
Todo API - Repository Context & Dependencies
==============================================

What:  The object that carries the chosen repositories into the app, and the
       FastAPI dependencies that hand them to route handlers.
How:   `create_app()` stores a `Repositories` instance on `app.state`.
       Handlers declare `Depends(get_todo_repository)` and receive whichever
       implementation was wired, typed as the abstract interface.
When:  Built once per process (or once per test) and shared by every request.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from todo_api.config import Settings
from todo_api.database import Database
from todo_api.repositories.base import LabelRepository, TodoRepository
from todo_api.repositories.database import DatabaseLabelRepository, DatabaseTodoRepository
from todo_api.repositories.memory import InMemoryLabelRepository, InMemoryTodoRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Repositories:
    """
    The storage backends used by one application instance.

    Attributes:
        todos:     Backend for /todos
        labels:    Backend for /labels
        database:  The shared Database, when the backends use one. The app
                   lifespan checks it on startup and disposes it on shutdown.
    """
    todos: TodoRepository
    labels: LabelRepository
    database: Optional[Database] = None

    @classmethod
    def in_memory(cls) -> "Repositories":
        return cls(todos=InMemoryTodoRepository(), labels=InMemoryLabelRepository())

    @classmethod
    def for_database(cls, database: Database) -> "Repositories":
        return cls(
            todos=DatabaseTodoRepository(database),
            labels=DatabaseLabelRepository(database),
            database=database,
        )


def build_repositories(settings: Settings) -> Repositories:
    """Select the backend named by `settings.repository_backend`."""
    if settings.repository_backend == "memory":
        logger.info("Using in-memory repositories (data is lost on restart)")
        return Repositories.in_memory()

    logger.info("Using database repositories")
    return Repositories.for_database(Database.from_settings(settings))


# ── Dependencies ──────────────────────────────────────────────────────────

def get_repositories(request: Request) -> Repositories:
    return request.app.state.repositories


def get_todo_repository(request: Request) -> TodoRepository:
    return get_repositories(request).todos


def get_label_repository(request: Request) -> LabelRepository:
    return get_repositories(request).labels
