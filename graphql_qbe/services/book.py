"""Book service — read and match books, plus the insert used for seeding.

Rule: No FastAPI / no GraphQL here. Callers pass plain values; this layer
builds the Example, delegates all DB work to the repository and raises
AppException subclasses.
"""

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from graphql_qbe.core.exceptions import NotFoundError
from graphql_qbe.domain.book import BOOK_SCHEMA, Book
from graphql_qbe.qbe.example import Example, ExampleMatcher
from graphql_qbe.qbe.query import PageRequest, Sort
from graphql_qbe.repositories.book import BookRepository
from graphql_qbe.schemas.book import BookCreate

logger = logging.getLogger(__name__)


class BookService:
    def __init__(self, session: AsyncSession):
        self._repo = BookRepository(session)

    @staticmethod
    def example(values: Mapping[str, Any] | None, match_any: bool = False) -> Example:
        """Validate a sparse field mapping against the Book schema."""
        matcher = ExampleMatcher(match_any=match_any)
        return Example.of(BOOK_SCHEMA, values, matcher)

    async def get_all(
        self, page: PageRequest | None = None, sort: Sort | None = None
    ) -> list[Book]:
        books = await self._repo.list(page=page, sort=sort)
        logger.debug("Listed %d book(s)", len(books))
        return books

    async def count_all(self) -> int:
        return await self._repo.count()

    async def get_by_id(self, book_id: int) -> Book:
        book = await self._repo.get_by_id(book_id)
        if book is None:
            raise NotFoundError("Book", book_id)
        return book

    async def match_by_example(
        self,
        values: Mapping[str, Any] | None,
        page: PageRequest | None = None,
        sort: Sort | None = None,
        match_any: bool = False,
    ) -> list[Book]:
        example = self.example(values, match_any)
        books = await self._repo.find_all_by_example(example, page=page, sort=sort)
        logger.debug("%r matched %d book(s)", example, len(books))
        return books

    async def count_by_example(
        self, values: Mapping[str, Any] | None, match_any: bool = False
    ) -> int:
        return await self._repo.count_by_example(self.example(values, match_any))

    async def exists_by_example(
        self, values: Mapping[str, Any] | None, match_any: bool = False
    ) -> bool:
        return await self._repo.exists_by_example(self.example(values, match_any))

    async def find_one_by_example(
        self, values: Mapping[str, Any] | None, match_any: bool = False
    ) -> Book | None:
        """The single book matching the example, or None; NonUniqueResultError if several do."""
        return await self._repo.find_one_by_example(self.example(values, match_any))

    async def add_book(self, data: BookCreate) -> Book:
        book = await self._repo.create(**data.model_dump())
        logger.info("Added book id=%s title=%r", book.id, book.title)
        return book
