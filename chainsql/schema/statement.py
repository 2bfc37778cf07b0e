"""Pydantic models for the statement under construction.

A :class:`QuerySpec` is the whole state of a :class:`~chainsql.compile.builder.QueryBuilder`.
It is frozen: every builder step validates its arguments first and then
produces a new spec via ``model_copy``, so a rejected step never leaves a
half-applied change behind.  Beginning a new statement replaces the QuerySpec
wholesale.
"""
from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class StatementKind(str, Enum):
    """The category of statement being built."""

    SELECT = "select"
    UPDATE = "update"
    DELETE = "delete"


#: Statement kinds that admit a WHERE clause.
WHERE_KINDS: frozenset[StatementKind] = frozenset(
    {StatementKind.SELECT, StatementKind.UPDATE, StatementKind.DELETE}
)

#: Statement kinds that admit a row limit.
LIMIT_KINDS: frozenset[StatementKind] = frozenset({StatementKind.SELECT})


class Predicate(BaseModel):
    """A single ``field operator 'value'`` filter condition.

    Attributes:
        field: Column the condition applies to.
        operator: Comparison operator, normalised to upper case.
        value: Right-hand value; rendered single-quoted.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    field: str
    operator: str = "="
    value: str


class Assignment(BaseModel):
    """A ``column = 'value'`` pair in an UPDATE's SET list."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    column: str
    value: str


class RowLimit(BaseModel):
    """The ``(start, offset)`` pair passed to ``limit()``."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    start: int = Field(ge=0)
    offset: int = Field(ge=0)


class QuerySpec(BaseModel):
    """The statement being built, tagged by its :class:`StatementKind`.

    Attributes:
        kind: Statement kind, fixed by the step that began the statement.
        table: Target table.
        fields: Projected fields (SELECT only).
        assignments: SET pairs in insertion order (UPDATE only).
        predicates: WHERE conditions in insertion order, joined with AND.
        row_limit: Row limit (SELECT only).
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: StatementKind
    table: str
    fields: tuple[str, ...] = ()
    assignments: tuple[Assignment, ...] = ()
    predicates: tuple[Predicate, ...] = ()
    row_limit: RowLimit | None = None

    def with_predicate(self, predicate: Predicate) -> QuerySpec:
        """Return a copy with ``predicate`` appended."""
        return self.model_copy(update={"predicates": (*self.predicates, predicate)})

    def with_limit(self, row_limit: RowLimit) -> QuerySpec:
        """Return a copy with ``row_limit`` set, replacing any previous one."""
        return self.model_copy(update={"row_limit": row_limit})
