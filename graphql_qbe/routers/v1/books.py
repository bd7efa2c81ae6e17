"""Book read-only REST router, mirroring the GraphQL queries.

Pattern:
  1. Declare a router with prefix and tags
  2. Inject DB session via Depends
  3. Instantiate the service with the session
  4. Call service methods and wrap result in response envelope
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from graphql_qbe.core.pagination import PaginationParams
from graphql_qbe.core.response import DataResponse, ListResponse, paginated
from graphql_qbe.db.base import get_db
from graphql_qbe.schemas.book import BookOut
from graphql_qbe.services.book import BookService

router = APIRouter(prefix="/books", tags=["Books"])


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

@router.get("", response_model=ListResponse[BookOut])
async def list_books(
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
):
    """List all books (paginated), in id order unless ?sort= is given."""
    svc = BookService(session)
    items = await svc.get_all(pagination.page_request(), pagination.sort_spec())
    total = await svc.count_all()
    return paginated([BookOut.model_validate(b) for b in items], total, pagination)


@router.post("/search", response_model=ListResponse[BookOut])
async def search_books(
    example: dict[str, Any] | None = Body(
        default=None,
        description="Sparse book example, e.g. {\"author\": \"Craig Walls\"}",
    ),
    match_any: bool = Query(default=False, alias="matchAny"),
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
):
    """Match books by example. Keys that are left out do not constrain the result."""
    svc = BookService(session)
    items = await svc.match_by_example(
        example,
        page=pagination.page_request(),
        sort=pagination.sort_spec(),
        match_any=match_any,
    )
    total = await svc.count_by_example(example, match_any=match_any)
    return paginated([BookOut.model_validate(b) for b in items], total, pagination)


@router.get("/{book_id}", response_model=DataResponse[BookOut])
async def get_book(
    book_id: int,
    session: AsyncSession = Depends(get_db),
):
    book = await BookService(session).get_by_id(book_id)
    return {"data": BookOut.model_validate(book)}
