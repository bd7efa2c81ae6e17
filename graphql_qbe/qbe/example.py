"""Example objects for Query-by-Example matching.

An :class:`Example` is a sparse, record-shaped set of field values. Every field
declared in the :class:`ExampleSchema` is either *present* (with a value, which
may be ``""`` or ``0``) or *absent* (the :data:`ABSENT` sentinel). Only present
fields constrain a query.

How each field is compared is declared statically on the schema and can be
adjusted through an immutable :class:`ExampleMatcher`::

    example = Example.of(BOOK_SCHEMA, {"author": "walls"})
    strict = ExampleMatcher().with_matcher("author", MatchMode.EXACT, ignore_case=False)
    Example.of(BOOK_SCHEMA, {"author": "Craig Walls"}, strict)
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from pydantic.alias_generators import to_camel

from graphql_qbe.core.exceptions import InvalidExampleError


class _Absent:
    """Marker for a field that carries no constraint."""

    _instance: _Absent | None = None

    def __new__(cls) -> _Absent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT: Any = _Absent()


class MatchMode(str, Enum):
    EXACT = "exact"
    CONTAINING = "containing"
    STARTING = "starting"
    ENDING = "ending"


class NullHandler(str, Enum):
    IGNORE = "ignore"  # explicit None behaves like an absent field
    INCLUDE = "include"  # explicit None matches NULL columns


@dataclass(frozen=True)
class FieldSpec:
    """One statically declared, matchable field of a record type."""

    name: str
    type: type
    match: MatchMode = MatchMode.EXACT
    ignore_case: bool = False
    alias: str = ""

    def __post_init__(self) -> None:
        if not self.alias:
            object.__setattr__(self, "alias", to_camel(self.name))
        if not self.is_text and (self.match is not MatchMode.EXACT or self.ignore_case):
            raise ValueError(f"Field '{self.name}' is not text and only supports exact matching")

    @property
    def is_text(self) -> bool:
        return self.type is str

    def accepts(self, value: Any) -> bool:
        # bool is an int subclass but never a valid integer filter
        if isinstance(value, bool) and self.type is not bool:
            return False
        return isinstance(value, self.type)


class ExampleSchema:
    """Ordered, static description of the fields an example may populate."""

    def __init__(self, *fields: FieldSpec):
        self._fields = tuple(fields)
        self._lookup: dict[str, FieldSpec] = {}
        for spec in self._fields:
            self._lookup[spec.name] = spec
            self._lookup[spec.alias] = spec

    def __iter__(self) -> Iterator[FieldSpec]:
        return iter(self._fields)

    def __contains__(self, name: object) -> bool:
        return name in self._lookup

    def get(self, name: str) -> FieldSpec:
        try:
            return self._lookup[name]
        except KeyError:
            raise InvalidExampleError(f"Unknown field '{name}'") from None


@dataclass(frozen=True)
class FieldOverride:
    match: MatchMode
    ignore_case: bool


@dataclass(frozen=True)
class ExampleMatcher:
    """Matching policy applied to an example.

    Defaults: every present field must match (AND), explicit ``None`` values
    are ignored, and per-field comparison comes from the schema.
    """

    match_any: bool = False
    null_handler: NullHandler = NullHandler.IGNORE
    overrides: tuple[tuple[str, FieldOverride], ...] = ()
    ignored: frozenset[str] = frozenset()

    def matching_any(self) -> ExampleMatcher:
        return replace(self, match_any=True)

    def matching_all(self) -> ExampleMatcher:
        return replace(self, match_any=False)

    def with_null_handler(self, handler: NullHandler) -> ExampleMatcher:
        return replace(self, null_handler=handler)

    def with_matcher(self, name: str, match: MatchMode, ignore_case: bool = False) -> ExampleMatcher:
        overrides = tuple(item for item in self.overrides if item[0] != name)
        return replace(self, overrides=overrides + ((name, FieldOverride(match, ignore_case)),))

    def override_for(self, *names: str) -> FieldOverride | None:
        """The override registered under the first of ``names`` that has one."""
        lookup = dict(self.overrides)
        for name in names:
            if name in lookup:
                return lookup[name]
        return None

    def with_ignored(self, *names: str) -> ExampleMatcher:
        return replace(self, ignored=self.ignored | frozenset(names))


@dataclass(frozen=True)
class FieldProbe:
    """Answer to "is this field present, and how is it compared?"."""

    name: str
    present: bool
    value: Any
    match: MatchMode
    ignore_case: bool


class Example:
    """A validated, sparse example of a record."""

    def __init__(self, schema: ExampleSchema, values: dict[str, Any], matcher: ExampleMatcher):
        self.schema = schema
        self.matcher = matcher
        self._values = values

    @classmethod
    def of(
        cls,
        schema: ExampleSchema,
        values: Mapping[str, Any] | None = None,
        matcher: ExampleMatcher | None = None,
    ) -> Example:
        """Build an example from a sparse mapping; missing keys are absent.

        Keys may be field names or their camelCase aliases. Values equal to
        :data:`ABSENT` are dropped. Raises :class:`InvalidExampleError` on
        unknown fields or values of the wrong type.
        """
        matcher = matcher or ExampleMatcher()
        resolved: dict[str, Any] = {}
        for key, value in (values or {}).items():
            spec = schema.get(key)
            if value is ABSENT:
                continue
            if spec.name in resolved:
                raise InvalidExampleError(f"Field '{spec.name}' given more than once")
            if value is not None and not spec.accepts(value):
                raise InvalidExampleError(
                    f"Field '{spec.alias}' expects {spec.type.__name__}, "
                    f"got {type(value).__name__}"
                )
            resolved[spec.name] = value

        for name, override in matcher.overrides:
            spec = schema.get(name)
            if not spec.is_text and (override.match is not MatchMode.EXACT or override.ignore_case):
                raise InvalidExampleError(
                    f"Field '{spec.alias}' only supports exact matching"
                )
        for name in matcher.ignored:
            schema.get(name)

        return cls(schema, resolved, matcher)

    def _override_for(self, spec: FieldSpec) -> FieldOverride | None:
        return self.matcher.override_for(spec.name, spec.alias)

    def _is_ignored(self, spec: FieldSpec) -> bool:
        return spec.name in self.matcher.ignored or spec.alias in self.matcher.ignored

    def probe(self, name: str) -> FieldProbe:
        spec = self.schema.get(name)
        value = self._values.get(spec.name, ABSENT)
        present = value is not ABSENT and not self._is_ignored(spec)
        if value is None and self.matcher.null_handler is NullHandler.IGNORE:
            present = False
        override = self._override_for(spec)
        return FieldProbe(
            name=spec.name,
            present=present,
            value=value if present else ABSENT,
            match=override.match if override else spec.match,
            ignore_case=override.ignore_case if override else spec.ignore_case,
        )

    def present_fields(self) -> Iterator[FieldProbe]:
        for spec in self.schema:
            probe = self.probe(spec.name)
            if probe.present:
                yield probe

    @property
    def is_empty(self) -> bool:
        return next(self.present_fields(), None) is None

    def __repr__(self) -> str:
        return f"Example({self._values!r}, match_any={self.matcher.match_any})"
