"""
Todo API - Todo SQLAlchemy Model
==================================

What:  ORM model for the `todos` table.
Who:   Used by DatabaseTodoRepository to build its statements.

Table:
    id:         SERIAL primary key, assigned by the database
    text:       TEXT NOT NULL (length is bounded by the request gate)
    completed:  BOOLEAN NOT NULL DEFAULT false
"""

from sqlalchemy import Boolean, Integer, Text, false
from sqlalchemy.orm import Mapped, mapped_column

from todo_api.database import Base


class TodoRecord(Base):
    """A todo row. Converted to the `Todo` schema before leaving the repository."""

    __tablename__ = "todos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    text: Mapped[str] = mapped_column(Text, nullable=False)

    completed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )

    def __repr__(self) -> str:
        return f"<TodoRecord(id={self.id}, completed={self.completed})>"
