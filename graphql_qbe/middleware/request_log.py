"""Request logging middleware — one log line per request with status and timing."""


import logging
import time
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("graphql_qbe.requests")


class RequestLogMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status code and duration of every request.

    GraphQL traffic all goes through /graphql, so an `operationName` passed in
    the query string is added to the line.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start = time.monotonic()
        try:
            response = await call_next(request)
        except Exception:
            duration_ms = round((time.monotonic() - start) * 1000)
            logger.exception("%s %s → 500 (%dms)", request.method, request.url.path, duration_ms)
            raise
        duration_ms = round((time.monotonic() - start) * 1000)

        operation = request.query_params.get("operationName")
        suffix = f" [{operation}]" if operation else ""
        logger.info(
            "%s %s%s → %d (%dms)",
            request.method, request.url.path, suffix, response.status_code, duration_ms,
        )
        return response
