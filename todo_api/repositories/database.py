"""
Todo API - Database Repositories
==================================

What:  Repository implementations backed by the async SQLAlchemy pool.
How:   Every operation opens one session from the shared session factory,
       runs exactly one statement and commits:

           create  → INSERT ... RETURNING id, ...
           find    → SELECT ... WHERE id = :id
           all     → SELECT ... ORDER BY id
           update  → UPDATE ... WHERE id = :id RETURNING ...
           delete  → DELETE ... WHERE id = :id RETURNING id

       A missing row (no RETURNING row / no SELECT row) is NotFoundError.
       Driver and connection failures, and ids the driver cannot bind, are
       logged and re-raised as RepositoryError. No transaction spans more
       than one operation.
Who:   Wired by `build_repositories()` when REPOSITORY_BACKEND=database.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, List

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from todo_api.database import Database
from todo_api.exceptions import NotFoundError, RepositoryError
from todo_api.models.label import LabelRecord
from todo_api.models.todo import TodoRecord
from todo_api.repositories.base import LabelRepository, TodoRepository
from todo_api.schemas.label import CreateLabel, Label
from todo_api.schemas.todo import CreateTodo, Todo, UpdateTodo

logger = logging.getLogger(__name__)

_TODO_COLUMNS = (TodoRecord.id, TodoRecord.text, TodoRecord.completed)
_LABEL_COLUMNS = (LabelRecord.id, LabelRecord.name)


class _DatabaseRepository:
    """Session handling and error translation shared by the database repositories."""

    resource = "resource"

    def __init__(self, database: Database):
        self._database = database

    @asynccontextmanager
    async def _transaction(self) -> AsyncIterator[AsyncSession]:
        """
        Yield a session inside a transaction that commits on exit.

        SQLAlchemy and socket errors become RepositoryError, as do ids the
        driver cannot bind (OverflowError from SQLite on ids past int64).
        Anything else (NotFoundError included) propagates unchanged after
        the rollback.
        """
        try:
            async with self._database.session_factory.begin() as session:
                yield session
        except (SQLAlchemyError, OSError, OverflowError) as exc:
            logger.error(
                "%s store operation failed: %s",
                self.resource,
                str(exc),
                exc_info=True,
            )
            raise RepositoryError(
                resource=self.resource,
                context={"original_error": type(exc).__name__},
            ) from exc


class DatabaseTodoRepository(_DatabaseRepository, TodoRepository):
    """Todos stored in the `todos` table."""

    resource = "todo"

    async def create(self, payload: CreateTodo) -> Todo:
        stmt = (
            insert(TodoRecord)
            .values(text=payload.text, completed=False)
            .returning(*_TODO_COLUMNS)
        )
        async with self._transaction() as session:
            row = (await session.execute(stmt)).one()
        todo = Todo(**row._mapping)
        logger.info("Todo created: id=%d", todo.id)
        return todo

    async def find(self, todo_id: int) -> Todo:
        stmt = select(*_TODO_COLUMNS).where(TodoRecord.id == todo_id)
        async with self._transaction() as session:
            row = (await session.execute(stmt)).one_or_none()
        if row is None:
            raise NotFoundError(resource="todo", resource_id=todo_id)
        return Todo(**row._mapping)

    async def all(self) -> List[Todo]:
        stmt = select(*_TODO_COLUMNS).order_by(TodoRecord.id.asc())
        async with self._transaction() as session:
            rows = (await session.execute(stmt)).all()
        return [Todo(**row._mapping) for row in rows]

    async def update(self, todo_id: int, payload: UpdateTodo) -> Todo:
        changes = payload.changes()
        if changes:
            stmt = (
                update(TodoRecord)
                .where(TodoRecord.id == todo_id)
                .values(**changes)
                .returning(*_TODO_COLUMNS)
                .execution_options(synchronize_session=False)
            )
        else:
            # Nothing to write: report the stored row as-is
            stmt = select(*_TODO_COLUMNS).where(TodoRecord.id == todo_id)

        async with self._transaction() as session:
            row = (await session.execute(stmt)).one_or_none()
        if row is None:
            raise NotFoundError(resource="todo", resource_id=todo_id)
        logger.info("Todo updated: id=%d fields=%s", todo_id, sorted(changes))
        return Todo(**row._mapping)

    async def delete(self, todo_id: int) -> None:
        stmt = (
            delete(TodoRecord)
            .where(TodoRecord.id == todo_id)
            .returning(TodoRecord.id)
            .execution_options(synchronize_session=False)
        )
        async with self._transaction() as session:
            deleted_id = (await session.execute(stmt)).scalar_one_or_none()
        if deleted_id is None:
            raise NotFoundError(resource="todo", resource_id=todo_id)
        logger.info("Todo deleted: id=%d", todo_id)


class DatabaseLabelRepository(_DatabaseRepository, LabelRepository):
    """Labels stored in the `labels` table."""

    resource = "label"

    async def create(self, payload: CreateLabel) -> Label:
        stmt = insert(LabelRecord).values(name=payload.name).returning(*_LABEL_COLUMNS)
        async with self._transaction() as session:
            row = (await session.execute(stmt)).one()
        label = Label(**row._mapping)
        logger.info("Label created: id=%d", label.id)
        return label

    async def find(self, label_id: int) -> Label:
        stmt = select(*_LABEL_COLUMNS).where(LabelRecord.id == label_id)
        async with self._transaction() as session:
            row = (await session.execute(stmt)).one_or_none()
        if row is None:
            raise NotFoundError(resource="label", resource_id=label_id)
        return Label(**row._mapping)

    async def all(self) -> List[Label]:
        stmt = select(*_LABEL_COLUMNS).order_by(LabelRecord.id.asc())
        async with self._transaction() as session:
            rows = (await session.execute(stmt)).all()
        return [Label(**row._mapping) for row in rows]

    async def delete(self, label_id: int) -> None:
        stmt = (
            delete(LabelRecord)
            .where(LabelRecord.id == label_id)
            .returning(LabelRecord.id)
            .execution_options(synchronize_session=False)
        )
        async with self._transaction() as session:
            deleted_id = (await session.execute(stmt)).scalar_one_or_none()
        if deleted_id is None:
            raise NotFoundError(resource="label", resource_id=label_id)
        logger.info("Label deleted: id=%d", label_id)
