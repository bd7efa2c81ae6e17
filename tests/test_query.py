"""Test paging/sort value objects and the in-memory executor."""
import pytest

from graphql_qbe.core.exceptions import InvalidExampleError, ValidationError
from graphql_qbe.domain.book import BOOK_SCHEMA, Book
from graphql_qbe.qbe import Direction, Example, PageRequest, Sort, filter_by_example

BOOKS = [
    Book(id=3, title="Emma", author="Jane Austen", published_year=1815),
    Book(id=1, title="Spring in Action", author="Craig Walls", published_year=2022),
    Book(id=2, title="Pride and Prejudice", author="Jane Austen", published_year=1813),
    Book(id=4, title="Untitled", author=None, published_year=None),
]


def _ids(books):
    return [b.id for b in books]


def test_page_request_rejects_bad_values():
    with pytest.raises(ValidationError):
        PageRequest(offset=-1)
    with pytest.raises(ValidationError):
        PageRequest(limit=0)


def test_page_request_of_page():
    assert PageRequest.of_page(3, 10) == PageRequest(offset=20, limit=10)


def test_sort_resolves_alias():
    assert Sort("publishedYear", Direction.DESC).resolve(BOOK_SCHEMA) == Sort(
        "published_year", Direction.DESC
    )


def test_sort_by_unknown_field_is_rejected():
    with pytest.raises(InvalidExampleError):
        Sort("isbn").resolve(BOOK_SCHEMA)


def test_empty_example_keeps_input_order():
    assert _ids(filter_by_example(BOOKS, Example.of(BOOK_SCHEMA))) == [3, 1, 2, 4]


def test_filter_and_sort():
    example = Example.of(BOOK_SCHEMA, {"author": "austen"})
    assert _ids(filter_by_example(BOOKS, example, Sort("published_year"))) == [2, 3]
    assert _ids(filter_by_example(BOOKS, example, Sort("publishedYear", Direction.DESC))) == [3, 2]


def test_none_sorts_first_ascending():
    result = filter_by_example(BOOKS, Example.of(BOOK_SCHEMA), Sort("published_year"))
    assert _ids(result) == [4, 2, 3, 1]


def test_paging():
    example = Example.of(BOOK_SCHEMA)
    assert _ids(filter_by_example(BOOKS, example, page=PageRequest(offset=1, limit=2))) == [1, 2]
    assert _ids(filter_by_example(BOOKS, example, page=PageRequest(offset=3))) == [4]
