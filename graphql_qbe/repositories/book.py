"""Book repository.

All example-matching comes from QueryByExampleRepository; BOOK_SCHEMA decides
which columns can be matched and how.
"""


from graphql_qbe.domain.book import BOOK_SCHEMA, Book
from graphql_qbe.repositories.base import QueryByExampleRepository


class BookRepository(QueryByExampleRepository[Book]):
    model = Book
    schema = BOOK_SCHEMA
