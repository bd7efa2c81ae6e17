"""
Pytest configuration for the GraphQL QBE API.

Provides fixtures for:
- An in-memory SQLite engine shared by the test session and the app
- Seeded book data
- An httpx client bound to the ASGI app with `get_db` overridden
"""

from __future__ import annotations

import os

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("SEED_DEMO_DATA", "false")

from collections.abc import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from graphql_qbe.db.base import (
    build_engine,
    build_session_factory,
    get_db,
    init_models,
    session_scope,
)
from graphql_qbe.domain.book import Book
from graphql_qbe.main import create_app
from graphql_qbe.schemas.book import BookCreate
from graphql_qbe.services.book import BookService

CRAIG_WALLS = BookCreate(title="Spring in Action", author="Craig Walls", published_year=2022)
JANE_AUSTEN = BookCreate(title="Pride and Prejudice", author="Jane Austen", published_year=1813)

LIBRARY = [
    CRAIG_WALLS,
    JANE_AUSTEN,
    BookCreate(title="Emma", author="Jane Austen", published_year=1815),
    BookCreate(title="Fluent Python", author="Luciano Ramalho", published_year=2022),
    BookCreate(title="100% Pure Python", author="A_B Writer", published_year=1999),
    BookCreate(title="100 Pure Recipes", author="AxB Writer", published_year=None),
    BookCreate(title="", author=None, published_year=2001),
    BookCreate(title=None, author="Anonymous", published_year=None),
    BookCreate(title="Thérèse Raquin", author="Émile Zola", published_year=1867),
]


@pytest.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    eng = build_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    await init_models(eng)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return build_session_factory(engine)


@pytest.fixture
async def session(session_factory: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncSession]:
    async with session_factory() as s:
        yield s


async def _insert(session: AsyncSession, rows: list[BookCreate]) -> list[Book]:
    svc = BookService(session)
    books = [await svc.add_book(row) for row in rows]
    await session.commit()
    return books


@pytest.fixture
async def two_books(session: AsyncSession) -> list[Book]:
    """Craig Walls (id 1) and Jane Austen (id 2)."""
    return await _insert(session, [CRAIG_WALLS, JANE_AUSTEN])


@pytest.fixture
async def library(session: AsyncSession) -> list[Book]:
    return await _insert(session, LIBRARY)


@pytest.fixture
async def client(session_factory: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncClient]:
    app = create_app()

    async def override_get_db() -> AsyncIterator[AsyncSession]:
        async with session_scope(session_factory) as s:
            yield s

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
