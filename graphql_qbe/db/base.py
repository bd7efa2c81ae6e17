"""Async SQLAlchemy engine, session factory, declarative Base, and FastAPI dependency."""


from collections.abc import AsyncGenerator, AsyncIterator, Iterator
from contextlib import asynccontextmanager, contextmanager
from typing import Any

from sqlalchemy import event
from sqlalchemy.exc import DisconnectionError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from graphql_qbe.core.config import settings
from graphql_qbe.core.exceptions import StoreUnavailableError


def _casefold(value: str | None) -> str | None:
    return None if value is None else value.casefold()


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------
def build_engine(url: str, **kwargs: Any) -> AsyncEngine:
    """Create an async engine; SQLite connections get case-sensitive LIKE
    and a Unicode-aware ``casefold()`` SQL function."""
    kwargs.setdefault("pool_pre_ping", True)

    # SQLite (local dev) doesn't support connection pooling parameters
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})

    new_engine = create_async_engine(url, **kwargs)

    if url.startswith("sqlite"):
        # SQLite's LIKE and lower() only fold ASCII; ignore-case matching
        # goes through casefold() instead.
        @event.listens_for(new_engine.sync_engine, "connect")
        def _sqlite_pragmas(dbapi_connection, connection_record):
            dbapi_connection.create_function("casefold", 1, _casefold)
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA case_sensitive_like = ON")
            cursor.close()

    return new_engine


engine = build_engine(settings.database_url)

# ---------------------------------------------------------------------------
# Session factory
# ---------------------------------------------------------------------------
def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )


async_session_factory = build_session_factory(engine)

# ---------------------------------------------------------------------------
# Declarative Base
# ---------------------------------------------------------------------------
class Base(DeclarativeBase):
    """All ORM models inherit from this base."""


async def init_models(bind: AsyncEngine) -> None:
    """Create all tables that do not exist yet."""
    import graphql_qbe.domain  # noqa: F401  (register models on Base.metadata)

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------
@contextmanager
def store_errors() -> Iterator[None]:
    """Translate connectivity failures into StoreUnavailableError."""
    try:
        yield
    except (OperationalError, InterfaceError, DisconnectionError) as exc:
        cause = getattr(exc, "orig", None) or exc
        raise StoreUnavailableError(f"Backing store is unavailable: {cause}") from exc


@asynccontextmanager
async def session_scope(
    factory: async_sessionmaker[AsyncSession] | None = None,
) -> AsyncIterator[AsyncSession]:
    """Open a session; commit when the block succeeds, roll back otherwise."""
    async with (factory or async_session_factory)() as session:
        try:
            yield session
            with store_errors():
                await session.commit()
        except Exception:
            await session.rollback()
            raise

# ---------------------------------------------------------------------------
# FastAPI dependency
# ---------------------------------------------------------------------------
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async database session; roll back on error."""
    async with session_scope() as session:
        yield session
