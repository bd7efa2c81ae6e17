"""Generic async repository with pagination and query-by-example reads."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from graphql_qbe.core.exceptions import NonUniqueResultError
from graphql_qbe.db.base import Base, store_errors
from graphql_qbe.qbe.example import Example, ExampleSchema
from graphql_qbe.qbe.predicates import fits_integer_column
from graphql_qbe.qbe.query import PageRequest, Sort, order_and_page, where_example

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """Generic read/insert repository.

    Every listing is ordered by primary key ascending unless a sort is given,
    in which case the primary key is still used as the tie-breaker. Update and
    delete are intentionally never exposed.
    """

    model: type[ModelT]
    schema: ExampleSchema

    def __init__(self, session: AsyncSession):
        self._session = session

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def get_by_id(self, entity_id: Any) -> ModelT | None:
        if not fits_integer_column(entity_id):
            return None
        with store_errors():
            return await self._session.get(self.model, entity_id)

    async def list(
        self,
        *,
        page: PageRequest | None = None,
        sort: Sort | None = None,
    ) -> list[ModelT]:
        q = order_and_page(select(self.model), self.model, self.schema, sort, page)
        with store_errors():
            items = (await self._session.execute(q)).scalars().all()
        return list(items)

    async def count(self) -> int:
        with store_errors():
            return (await self._session.execute(select(func.count()).select_from(self.model))).scalar_one()

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    async def create(self, **kwargs: Any) -> ModelT:
        kwargs.pop("id", None)
        instance = self.model(**kwargs)
        with store_errors():
            self._session.add(instance)
            await self._session.flush()  # populate id
            await self._session.refresh(instance)
        return instance


class QueryByExampleRepository(BaseRepository[ModelT]):
    """Adds example-based reads on top of BaseRepository."""

    async def find_all_by_example(
        self,
        example: Example,
        *,
        page: PageRequest | None = None,
        sort: Sort | None = None,
    ) -> list[ModelT]:
        """Return matching rows; an example with no present fields matches all."""
        q = where_example(select(self.model), self.model, example)
        q = order_and_page(q, self.model, self.schema, sort, page)
        with store_errors():
            items = (await self._session.execute(q)).scalars().all()
        return list(items)

    async def count_by_example(self, example: Example) -> int:
        q = where_example(select(self.model), self.model, example)
        count_q = select(func.count()).select_from(q.subquery())
        with store_errors():
            return (await self._session.execute(count_q)).scalar_one()

    async def exists_by_example(self, example: Example) -> bool:
        q = where_example(select(self.model), self.model, example)
        with store_errors():
            return bool((await self._session.execute(select(q.exists()))).scalar())

    async def find_one_by_example(self, example: Example) -> ModelT | None:
        """Return the single matching row, or ``None`` when nothing matches.

        Raises NonUniqueResultError when more than one row matches.
        """
        q = order_and_page(
            where_example(select(self.model), self.model, example),
            self.model,
            self.schema,
            page=PageRequest(limit=2),
        )
        with store_errors():
            items = (await self._session.execute(q)).scalars().all()
        if len(items) > 1:
            raise NonUniqueResultError(f"More than one {self.model.__name__} matches the example")
        return items[0] if items else None
