"""Per-request GraphQL context: the request-scoped database session."""

import asyncio

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from graphql_qbe.db.base import get_db


async def get_context(session: AsyncSession = Depends(get_db)) -> dict:
    # Strawberry merges this with its default request/response context.
    # Sibling root fields resolve concurrently; the lock keeps them from
    # using the session at the same time.
    return {"session": session, "session_lock": asyncio.Lock()}
