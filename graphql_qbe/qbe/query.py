"""Paging, ordering and the example-match executor helpers."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar

from sqlalchemy import Select

from graphql_qbe.core.exceptions import InvalidExampleError, ValidationError
from graphql_qbe.qbe.example import Example, ExampleSchema
from graphql_qbe.qbe.predicates import build_predicates, combine, fits_integer_column, matches_all

T = TypeVar("T")


class Direction(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class Sort:
    field: str
    direction: Direction = Direction.ASC

    def resolve(self, schema: ExampleSchema) -> Sort:
        """Return the sort with ``field`` normalised to the schema's attribute name."""
        if self.field not in schema:
            raise InvalidExampleError(f"Cannot sort by unknown field '{self.field}'")
        return Sort(schema.get(self.field).name, Direction(self.direction))


@dataclass(frozen=True)
class PageRequest:
    offset: int = 0
    limit: int | None = None

    def __post_init__(self) -> None:
        if self.offset < 0:
            raise ValidationError("offset must be >= 0")
        if not fits_integer_column(self.offset):
            raise ValidationError("offset is out of range")
        if self.limit is not None and self.limit < 1:
            raise ValidationError("limit must be >= 1")

    @classmethod
    def of_page(cls, page: int, limit: int) -> PageRequest:
        """1-based page number to offset/limit."""
        return cls(offset=(page - 1) * limit, limit=limit)


def where_example(stmt: Select, model: type, example: Example) -> Select:
    clause = combine(build_predicates(example), model, example.matcher.match_any)
    if clause is not None:
        stmt = stmt.where(clause)
    return stmt


def order_and_page(
    stmt: Select,
    model: type,
    schema: ExampleSchema,
    sort: Sort | None = None,
    page: PageRequest | None = None,
    pk: str = "id",
) -> Select:
    """Apply ordering (primary key last, as a tie-breaker) and paging."""
    order = []
    if sort is not None:
        sort = sort.resolve(schema)
        col = getattr(model, sort.field)
        order.append(col.desc() if sort.direction is Direction.DESC else col.asc())
    if sort is None or sort.field != pk:
        order.append(getattr(model, pk).asc())
    stmt = stmt.order_by(*order)

    if page is not None:
        if page.offset:
            stmt = stmt.offset(page.offset)
        if page.limit is not None:
            stmt = stmt.limit(page.limit)
    return stmt


def filter_by_example(
    records: Iterable[T],
    example: Example,
    sort: Sort | None = None,
    page: PageRequest | None = None,
) -> list[T]:
    """Run an example against an in-memory collection.

    Input order is kept unless a sort is given. ``None`` values sort first
    ascending and last descending.
    """
    predicates = build_predicates(example)
    found = [r for r in records if matches_all(predicates, r, example.matcher.match_any)]

    if sort is not None:
        sort = sort.resolve(example.schema)

        def key(record: Any) -> tuple[bool, Any]:
            value = getattr(record, sort.field)
            return (value is not None, value)

        found.sort(key=key, reverse=sort.direction is Direction.DESC)

    if page is not None:
        end = None if page.limit is None else page.offset + page.limit
        found = found[page.offset:end]
    return found
