"""Query-by-Example engine: example objects, predicate builder, executor helpers."""
from graphql_qbe.qbe.example import (
    ABSENT,
    Example,
    ExampleMatcher,
    ExampleSchema,
    FieldProbe,
    FieldSpec,
    MatchMode,
    NullHandler,
)
from graphql_qbe.qbe.predicates import Predicate, build_predicates, combine, matches_all
from graphql_qbe.qbe.query import (
    Direction,
    PageRequest,
    Sort,
    filter_by_example,
    order_and_page,
    where_example,
)

__all__ = [
    "ABSENT",
    "Direction",
    "Example",
    "ExampleMatcher",
    "ExampleSchema",
    "FieldProbe",
    "FieldSpec",
    "MatchMode",
    "NullHandler",
    "PageRequest",
    "Predicate",
    "Sort",
    "build_predicates",
    "combine",
    "filter_by_example",
    "matches_all",
    "order_and_page",
    "where_example",
]
