"""Turn an :class:`Example` into field predicates.

Each present field yields one :class:`Predicate`. A predicate renders itself
either as a SQLAlchemy clause (for the database executor) or evaluates
directly against an object (for in-memory matching); both follow the same
rules. Case-insensitive comparison uses Unicode case folding on both sides.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlalchemy import String, and_, false, or_
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.elements import ColumnElement
from sqlalchemy.sql.functions import FunctionElement

from graphql_qbe.qbe.example import Example, MatchMode

# Signed 64-bit: the widest INTEGER the supported stores hold
SQL_INTEGER_RANGE = range(-(2**63), 2**63)


def fits_integer_column(value: Any) -> bool:
    if isinstance(value, int) and not isinstance(value, bool):
        return value in SQL_INTEGER_RANGE
    return True


class casefold(FunctionElement):
    """``casefold(expr)``: registered per connection on SQLite, ``lower`` elsewhere."""

    type = String()
    name = "casefold"
    inherit_cache = True


@compiles(casefold)
def _casefold_default(element, compiler, **kw):
    return "lower(%s)" % compiler.process(element.clauses, **kw)


@compiles(casefold, "sqlite")
def _casefold_sqlite(element, compiler, **kw):
    return "casefold(%s)" % compiler.process(element.clauses, **kw)


@dataclass(frozen=True)
class Predicate:
    field: str
    value: Any
    match: MatchMode = MatchMode.EXACT
    ignore_case: bool = False

    def to_clause(self, model: type) -> ColumnElement[bool]:
        column = getattr(model, self.field)
        if self.value is None:
            return column.is_(None)
        if not fits_integer_column(self.value):
            # no stored row can hold it
            return false()

        value = self.value
        if self.ignore_case:
            column, value = casefold(column), value.casefold()

        if self.match is MatchMode.EXACT:
            return column == value
        if self.match is MatchMode.CONTAINING:
            return column.contains(value, autoescape=True)
        if self.match is MatchMode.STARTING:
            return column.startswith(value, autoescape=True)
        return column.endswith(value, autoescape=True)

    def matches(self, obj: Any) -> bool:
        actual = getattr(obj, self.field)
        if self.value is None:
            return actual is None
        if actual is None:
            return False

        expected = self.value
        if self.ignore_case:
            actual, expected = actual.casefold(), expected.casefold()

        if self.match is MatchMode.EXACT:
            return actual == expected
        if self.match is MatchMode.CONTAINING:
            return expected in actual
        if self.match is MatchMode.STARTING:
            return actual.startswith(expected)
        return actual.endswith(expected)


def build_predicates(example: Example) -> list[Predicate]:
    """One predicate per present field, in schema order."""
    return [
        Predicate(
            field=probe.name,
            value=probe.value,
            match=probe.match,
            ignore_case=probe.ignore_case,
        )
        for probe in example.present_fields()
    ]


def combine(
    predicates: list[Predicate], model: type, match_any: bool = False
) -> ColumnElement[bool] | None:
    """AND (or OR) the predicates together; ``None`` means "match everything"."""
    if not predicates:
        return None
    clauses = [p.to_clause(model) for p in predicates]
    return or_(*clauses) if match_any else and_(*clauses)


def matches_all(predicates: list[Predicate], obj: Any, match_any: bool = False) -> bool:
    if not predicates:
        return True
    results = (p.matches(obj) for p in predicates)
    return any(results) if match_any else all(results)
