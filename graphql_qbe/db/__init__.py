"""Database package — async SQLAlchemy engine, session factory, Base."""
from graphql_qbe.db.base import (
    Base,
    async_session_factory,
    engine,
    get_db,
    init_models,
    session_scope,
    store_errors,
)

__all__ = [
    "Base",
    "async_session_factory",
    "engine",
    "get_db",
    "init_models",
    "session_scope",
    "store_errors",
]
