"""Map application exceptions onto GraphQL errors with an `extensions.code`."""

from collections.abc import Iterator
from contextlib import contextmanager

from graphql import GraphQLError

from graphql_qbe.core.exceptions import AppException


@contextmanager
def graphql_errors() -> Iterator[None]:
    try:
        yield
    except AppException as exc:
        raise GraphQLError(exc.message, extensions={"code": exc.code}) from exc
