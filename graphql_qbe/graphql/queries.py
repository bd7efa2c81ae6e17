"""
GraphQL query resolvers.

Each resolver takes the request's session lock, builds a BookService on the
request session and maps application errors to GraphQL errors carrying
`extensions.code`.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Optional

import strawberry
from strawberry.types import Info

from graphql_qbe.graphql.errors import graphql_errors
from graphql_qbe.graphql.types import BookExampleInput, BookType, PageInput, SortInput
from graphql_qbe.services.book import BookService


@asynccontextmanager
async def _service(info: Info) -> AsyncIterator[BookService]:
    async with info.context["session_lock"]:
        with graphql_errors():
            yield BookService(info.context["session"])


@strawberry.type
class Query:
    @strawberry.field(description="All books, in id order unless a sort is given")
    async def books(
        self,
        info: Info,
        page: Optional[PageInput] = None,
        sort: Optional[SortInput] = None,
    ) -> list[BookType]:
        async with _service(info) as service:
            books = await service.get_all(
                page.to_page_request() if page else None,
                sort.to_sort() if sort else None,
            )
        return [BookType.from_model(b) for b in books]

    @strawberry.field(description="A single book; NOT_FOUND error when the id does not exist")
    async def book_by_id(self, info: Info, id: int) -> BookType:
        async with _service(info) as service:
            book = await service.get_by_id(id)
        return BookType.from_model(book)

    @strawberry.field(description="Books matching every field sent in the example (any field with matchAny)")
    async def books_by_example(
        self,
        info: Info,
        example: BookExampleInput,
        page: Optional[PageInput] = None,
        sort: Optional[SortInput] = None,
        match_any: bool = False,
    ) -> list[BookType]:
        async with _service(info) as service:
            books = await service.match_by_example(
                example.to_values(),
                page=page.to_page_request() if page else None,
                sort=sort.to_sort() if sort else None,
                match_any=match_any,
            )
        return [BookType.from_model(b) for b in books]

    @strawberry.field(
        description="The one book matching the example, or null; NON_UNIQUE_RESULT error when several match"
    )
    async def book_by_example(
        self, info: Info, example: BookExampleInput, match_any: bool = False
    ) -> Optional[BookType]:
        async with _service(info) as service:
            book = await service.find_one_by_example(example.to_values(), match_any)
        return BookType.from_model(book) if book is not None else None

    @strawberry.field(description="Number of books matching the example")
    async def count_books_by_example(
        self, info: Info, example: BookExampleInput, match_any: bool = False
    ) -> int:
        async with _service(info) as service:
            return await service.count_by_example(example.to_values(), match_any)

    @strawberry.field(description="Whether at least one book matches the example")
    async def book_exists_by_example(
        self, info: Info, example: BookExampleInput, match_any: bool = False
    ) -> bool:
        async with _service(info) as service:
            return await service.exists_by_example(example.to_values(), match_any)
