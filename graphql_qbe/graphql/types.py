"""
GraphQL types for books and example-based filtering.

Input fields default to ``strawberry.UNSET`` so a field the client leaves
out is distinguishable from one it sends, which is what the example matcher
relies on.
"""

from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any, Optional

import strawberry

from graphql_qbe.core.config import settings
from graphql_qbe.core.exceptions import ValidationError
from graphql_qbe.domain.book import Book
from graphql_qbe.qbe.query import Direction, PageRequest, Sort

strawberry.enum(Direction, name="Direction", description="Sort direction")


@strawberry.enum(description="Book fields that results can be sorted by")
class BookField(Enum):
    ID = "id"
    TITLE = "title"
    AUTHOR = "author"
    PUBLISHED_YEAR = "published_year"


@strawberry.type(name="Book")
class BookType:
    """
    GraphQL type representing a book.

    Maps to the Book SQLAlchemy model.
    """

    id: int
    title: Optional[str] = None
    author: Optional[str] = None
    published_year: Optional[int] = None

    @classmethod
    def from_model(cls, book: Book) -> BookType:
        return cls(
            id=book.id,
            title=book.title,
            author=book.author,
            published_year=book.published_year,
        )


@strawberry.input(description="A partially filled book; only the fields you send are matched")
class BookExampleInput:
    id: Optional[int] = strawberry.UNSET
    title: Optional[str] = strawberry.UNSET
    author: Optional[str] = strawberry.UNSET
    published_year: Optional[int] = strawberry.UNSET

    def to_values(self) -> dict[str, Any]:
        """Only the fields that were sent; explicit nulls are kept as None."""
        values = {}
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            if value is not strawberry.UNSET:
                values[f.name] = value
        return values


@strawberry.input
class PageInput:
    offset: int = 0
    limit: Optional[int] = None

    def to_page_request(self) -> PageRequest:
        if self.limit is not None and self.limit > settings.max_page_size:
            raise ValidationError(f"limit must be <= {settings.max_page_size}")
        return PageRequest(offset=self.offset, limit=self.limit)


@strawberry.input
class SortInput:
    field: BookField
    direction: Direction = Direction.ASC

    def to_sort(self) -> Sort:
        return Sort(self.field.value, Direction(self.direction))
