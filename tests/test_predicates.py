"""Test predicate building and in-memory evaluation."""
from sqlalchemy import false
from sqlalchemy.dialects import postgresql, sqlite

from graphql_qbe.domain.book import BOOK_SCHEMA, Book
from graphql_qbe.qbe import (
    Example,
    ExampleMatcher,
    MatchMode,
    NullHandler,
    Predicate,
    build_predicates,
    combine,
    matches_all,
)

WALLS = Book(id=1, title="Spring in Action", author="Craig Walls", published_year=2022)
AUSTEN = Book(id=2, title="Pride and Prejudice", author="Jane Austen", published_year=1813)
NAMELESS = Book(id=3, title=None, author=None, published_year=None)


def _sql(clause) -> str:
    return str(clause.compile(dialect=sqlite.dialect()))


def test_absent_fields_produce_no_predicates():
    assert build_predicates(Example.of(BOOK_SCHEMA)) == []


def test_one_predicate_per_present_field():
    example = Example.of(BOOK_SCHEMA, {"author": "Walls", "published_year": 2022})
    predicates = build_predicates(example)
    assert predicates == [
        Predicate("author", "Walls", MatchMode.CONTAINING, ignore_case=True),
        Predicate("published_year", 2022, MatchMode.EXACT, ignore_case=False),
    ]


def test_combine_without_predicates_is_none():
    assert combine([], Book) is None


def test_combine_uses_and_by_default_and_or_for_match_any():
    predicates = build_predicates(Example.of(BOOK_SCHEMA, {"id": 1, "published_year": 1813}))
    assert " AND " in _sql(combine(predicates, Book))
    assert " OR " in _sql(combine(predicates, Book, match_any=True))


def test_text_clause_is_case_insensitive_like():
    clause = Predicate("author", "walls", MatchMode.CONTAINING, ignore_case=True).to_clause(Book)
    sql = _sql(clause)
    assert "casefold(books.author)" in sql
    assert "LIKE" in sql


def test_casefold_renders_lower_outside_sqlite():
    clause = Predicate("author", "walls", MatchMode.EXACT, ignore_case=True).to_clause(Book)
    assert "lower(books.author)" in str(clause.compile(dialect=postgresql.dialect()))


def test_integer_beyond_64_bits_never_matches():
    p = Predicate("id", 2**64)
    assert p.to_clause(Book).compare(false())
    assert not p.matches(WALLS)


def test_none_value_renders_is_null():
    assert "IS NULL" in _sql(Predicate("author", None).to_clause(Book))


def test_containing_ignore_case_matches_in_memory():
    p = Predicate("author", "walls", MatchMode.CONTAINING, ignore_case=True)
    assert p.matches(WALLS)
    assert not p.matches(AUSTEN)
    assert not p.matches(NAMELESS)


def test_case_sensitive_modes_in_memory():
    assert Predicate("title", "Spring", MatchMode.STARTING).matches(WALLS)
    assert not Predicate("title", "spring", MatchMode.STARTING).matches(WALLS)
    assert Predicate("title", "Action", MatchMode.ENDING).matches(WALLS)
    assert Predicate("title", "Spring in Action", MatchMode.EXACT).matches(WALLS)
    assert not Predicate("title", "Spring", MatchMode.EXACT).matches(WALLS)


def test_exact_ignore_case_in_memory():
    assert Predicate("author", "JANE AUSTEN", MatchMode.EXACT, ignore_case=True).matches(AUSTEN)


def test_empty_string_contains_every_non_null_value():
    p = Predicate("title", "", MatchMode.CONTAINING, ignore_case=True)
    assert p.matches(WALLS)
    assert p.matches(AUSTEN)
    assert not p.matches(NAMELESS)


def test_null_predicate_in_memory():
    example = Example.of(
        BOOK_SCHEMA, {"author": None}, ExampleMatcher().with_null_handler(NullHandler.INCLUDE)
    )
    predicates = build_predicates(example)
    assert [b.id for b in (WALLS, AUSTEN, NAMELESS) if matches_all(predicates, b)] == [3]


def test_matches_all_and_any():
    predicates = build_predicates(Example.of(BOOK_SCHEMA, {"author": "Walls", "published_year": 1813}))
    assert not matches_all(predicates, WALLS)
    assert matches_all(predicates, WALLS, match_any=True)
    assert matches_all(predicates, AUSTEN, match_any=True)
    assert not matches_all(predicates, NAMELESS, match_any=True)
    assert matches_all([], NAMELESS)


def test_ignore_case_folds_non_ascii_text():
    zola = Book(id=4, title="Thérèse Raquin", author="Émile Zola", published_year=1867)
    assert Predicate("author", "émile", MatchMode.CONTAINING, ignore_case=True).matches(zola)
    assert Predicate("title", "THÉRÈSE RAQUIN", MatchMode.EXACT, ignore_case=True).matches(zola)
    assert not Predicate("author", "émile", MatchMode.CONTAINING).matches(zola)
