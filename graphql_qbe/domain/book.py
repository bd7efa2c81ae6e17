"""SQLAlchemy ORM model for Books and the fields they can be matched on.

BOOK_SCHEMA is the static list of (field, type, comparison) triples the
query-by-example engine reads; keep it in step with the mapped columns.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from graphql_qbe.db.base import Base
from graphql_qbe.qbe.example import ExampleSchema, FieldSpec, MatchMode


class Book(Base):
    __tablename__ = "books"
    # AUTOINCREMENT keeps SQLite from reusing ids of removed rows
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, index=True)
    author: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, index=True)
    published_year: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    def __repr__(self) -> str:
        return (
            f"Book(id={self.id!r}, title={self.title!r}, "
            f"author={self.author!r}, published_year={self.published_year!r})"
        )


BOOK_SCHEMA = ExampleSchema(
    FieldSpec("id", int),
    FieldSpec("title", str, MatchMode.CONTAINING, ignore_case=True),
    FieldSpec("author", str, MatchMode.CONTAINING, ignore_case=True),
    FieldSpec("published_year", int),
)
