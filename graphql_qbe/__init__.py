"""GraphQL API over books with query-by-example filtering."""

__version__ = "1.0.0"
