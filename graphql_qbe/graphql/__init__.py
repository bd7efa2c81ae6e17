"""
GraphQL Package

Read-only GraphQL API over books using Strawberry GraphQL.

Example Query:
    query {
        booksByExample(example: {author: "Craig Walls"}) {
            id
            title
            publishedYear
        }
    }
"""

import strawberry
from strawberry.fastapi import GraphQLRouter

from graphql_qbe.core.config import settings
from graphql_qbe.graphql.context import get_context
from graphql_qbe.graphql.queries import Query

# No Mutation type: books are only inserted by the seeder
schema = strawberry.Schema(query=Query)


def create_graphql_router() -> GraphQLRouter:
    """
    Create the GraphQL router for FastAPI.

    Returns:
        GraphQLRouter configured with schema and context
    """
    return GraphQLRouter(
        schema,
        context_getter=get_context,
        graphql_ide="graphiql" if settings.is_development else None,
    )


__all__ = ["schema", "create_graphql_router"]
