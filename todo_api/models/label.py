"""
Todo API - Label SQLAlchemy Model
===================================

What:  ORM model for the `labels` table.
Who:   Used by DatabaseLabelRepository.
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from todo_api.database import Base


class LabelRecord(Base):
    """A label row. Labels are created, listed and deleted; never updated."""

    __tablename__ = "labels"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<LabelRecord(id={self.id}, name='{self.name}')>"
