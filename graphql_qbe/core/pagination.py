"""Pagination helpers for list endpoints."""


from fastapi import Query
from pydantic import BaseModel

from graphql_qbe.core.config import settings
from graphql_qbe.qbe.query import Direction, PageRequest, Sort


class PaginationParams:
    """FastAPI dependency for `?page=1&limit=20&sort=title&order=asc`.

    Without `sort` results come back in primary-key order.
    """

    def __init__(
        self,
        page: int = Query(default=1, ge=1, description="Page number (1-based)"),
        limit: int = Query(
            default=settings.default_page_size,
            ge=1,
            le=settings.max_page_size,
            description="Items per page",
        ),
        sort: str | None = Query(default=None, description="Sort field"),
        order: str = Query(default="asc", pattern="^(asc|desc)$", description="Sort order"),
    ):
        self.page = page
        self.limit = limit
        self.sort = sort
        self.order = order

    def page_request(self) -> PageRequest:
        return PageRequest.of_page(self.page, self.limit)

    def sort_spec(self) -> Sort | None:
        if not self.sort:
            return None
        return Sort(self.sort, Direction(self.order))


class PageMeta(BaseModel):
    total: int
    page: int
    limit: int
    pages: int

    model_config = {"populate_by_name": True}
