"""Demo data loaded into an empty books table at startup."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from graphql_qbe.db.base import session_scope
from graphql_qbe.schemas.book import BookCreate
from graphql_qbe.services.book import BookService

logger = logging.getLogger(__name__)

DEMO_BOOKS = [
    BookCreate(title="Spring in Action", author="Craig Walls", published_year=2022),
    BookCreate(title="Pride and Prejudice", author="Jane Austen", published_year=1813),
    BookCreate(title="Emma", author="Jane Austen", published_year=1815),
    BookCreate(title="Effective Java", author="Joshua Bloch", published_year=2018),
    BookCreate(title="Fluent Python", author="Luciano Ramalho", published_year=2022),
]


async def seed_books(session: AsyncSession) -> int:
    """Insert DEMO_BOOKS if the table is empty; return how many were added."""
    svc = BookService(session)
    if await svc.count_all():
        logger.debug("Books table already populated, skipping seed")
        return 0
    for data in DEMO_BOOKS:
        await svc.add_book(data)
    logger.info("Seeded %d demo book(s)", len(DEMO_BOOKS))
    return len(DEMO_BOOKS)


async def run_seed(session_factory: async_sessionmaker[AsyncSession]) -> int:
    async with session_scope(session_factory) as session:
        return await seed_books(session)
