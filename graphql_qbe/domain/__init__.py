"""Domain package — all ORM models are imported here so metadata.create_all sees them.

Folder intent:
  book.py  — Book entity plus its static query-by-example schema
"""

from graphql_qbe.domain.book import BOOK_SCHEMA, Book

__all__ = [
    "BOOK_SCHEMA",
    "Book",
]
