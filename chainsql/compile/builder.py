"""The fluent, restartable statement builder.

``QueryBuilder`` owns the statement state (a frozen
:class:`~chainsql.schema.statement.QuerySpec`) and drives the step
algorithm.  Step legality is delegated to the composed
:class:`~chainsql.validate.step_validator.StepValidator`; dialect-specific
rendering is delegated to the injected :class:`~chainsql.compile.base.SQLDialect`
through the clause builders.

Sub-builder hierarchy
---------------------
QueryBuilder
  ├── StepValidator       (validate/step_validator.py)
  ├── HeadClauseBuilder   (clause_builders.py)
  ├── WhereClauseBuilder  (clause_builders.py)
  └── LimitClauseBuilder  (clause_builders.py)

State machine
-------------
``Uninitiated`` until ``select()``, ``update()`` or ``delete()`` is called;
afterwards ``Initiated(kind)``.  ``where()`` / ``limit()`` keep the kind, a
new initiating step replaces the QuerySpec wholesale, and ``render()`` does not
change state.  One builder instance must only be used by one caller at a
time.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from chainsql.compile.base import SQLDialect
from chainsql.compile.clause_builders import (
    HeadClauseBuilder,
    LimitClauseBuilder,
    WhereClauseBuilder,
)
from chainsql.compile.context import BuildContext
from chainsql.errors import ProfileConfigError
from chainsql.schema.profile import BuilderProfile
from chainsql.schema.statement import QuerySpec, StatementKind
from chainsql.validate.step_validator import StepValidator

logger = logging.getLogger(__name__)


class QueryBuilder:
    """Assembles a SQL statement through chained calls.

    Example::

        sql = (
            QueryBuilder(MySQLDialect())
            .select("users", ["name", "email"])
            .where("age", "18", ">")
            .limit(10, 20)
            .render()
        )
        # SELECT name, email FROM users WHERE age > '18' LIMIT 10, 20;

    Args:
        dialect: Dialect-specific rendering rules; fixed for the lifetime of
            the builder.
        profile: Operator allowlist and optional schema snapshot.  Defaults
            to ``BuilderProfile(target=dialect.dialect_name)``.

    Raises:
        ProfileConfigError: If ``profile.target`` is not the dialect's name.
    """

    def __init__(
        self,
        dialect: SQLDialect,
        profile: BuilderProfile | None = None,
    ) -> None:
        if profile is None:
            profile = BuilderProfile(target=dialect.dialect_name)
        elif profile.target != dialect.dialect_name:
            raise ProfileConfigError(
                f"Profile target '{profile.target}' does not match the dialect "
                f"'{dialect.dialect_name}'.",
                missing=["target"],
                reason="A builder renders for exactly one dialect.",
            )
        self._ctx = BuildContext(dialect=dialect, profile=profile)
        self._validator = StepValidator(self._ctx)
        self._head = HeadClauseBuilder(self._ctx)
        self._where = WhereClauseBuilder(self._ctx)
        self._limit = LimitClauseBuilder(self._ctx)
        self._spec: QuerySpec | None = None

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def dialect(self) -> SQLDialect:
        return self._ctx.dialect

    @property
    def profile(self) -> BuilderProfile:
        return self._ctx.profile

    @property
    def spec(self) -> QuerySpec | None:
        """The statement being built, or ``None`` before any was begun."""
        return self._spec

    @property
    def kind(self) -> StatementKind | None:
        return self._spec.kind if self._spec is not None else None

    # ------------------------------------------------------------------
    # Statement-initiating steps
    # ------------------------------------------------------------------

    def select(self, table: str, fields: Sequence[str]) -> QueryBuilder:
        """Begin a ``SELECT fields FROM table`` statement.

        Discards any statement built so far.

        Raises:
            InvalidArgumentError: If ``table`` or ``fields`` is empty.
        """
        projected = self._validator.validate_select(table, fields)
        self._begin(QuerySpec(kind=StatementKind.SELECT, table=table, fields=projected))
        return self

    def update(self, table: str, values: Mapping[str, Any]) -> QueryBuilder:
        """Begin an ``UPDATE table SET …`` statement.

        Args:
            table: Table to update.
            values: Column → new value, rendered in insertion order.

        Raises:
            InvalidArgumentError: If ``table`` or ``values`` is empty.
        """
        assignments = self._validator.validate_update(table, values)
        self._begin(
            QuerySpec(kind=StatementKind.UPDATE, table=table, assignments=assignments)
        )
        return self

    def delete(self, table: str) -> QueryBuilder:
        """Begin a ``DELETE FROM table`` statement."""
        self._validator.validate_delete(table)
        self._begin(QuerySpec(kind=StatementKind.DELETE, table=table))
        return self

    def reset(self) -> QueryBuilder:
        """Discard the current statement and return to the uninitiated state."""
        self._spec = None
        return self

    # ------------------------------------------------------------------
    # Clause steps
    # ------------------------------------------------------------------

    def where(self, field: str, value: Any, operator: str = "=") -> QueryBuilder:
        """Add a ``field operator 'value'`` condition, ANDed with earlier ones.

        Non-string values are converted with ``str()``.  The value is quoted
        but not escaped.

        Raises:
            InvalidStepOrderError: If no statement was begun.
            InvalidArgumentError: If the operator is not allowed by the profile.
        """
        predicate = self._validator.validate_where(self._spec, field, value, operator)
        self._spec = self._spec.with_predicate(predicate)
        logger.debug("Added predicate %s %s %r", predicate.field, predicate.operator, predicate.value)
        return self

    def limit(self, start: int, offset: int) -> QueryBuilder:
        """Set the row limit, replacing any earlier one.

        Raises:
            InvalidStepOrderError: Unless a SELECT statement is being built.
            InvalidArgumentError: If ``start`` or ``offset`` is negative.
        """
        row_limit = self._validator.validate_limit(self._spec, start, offset)
        self._spec = self._spec.with_limit(row_limit)
        logger.debug("Set row limit start=%d offset=%d", start, offset)
        return self

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self) -> str:
        """Return the statement text for the current spec.

        Pure: the builder keeps its state, so ``render()`` may be called
        again, or the statement extended further.

        Raises:
            InvalidStepOrderError: If no statement was begun.
        """
        spec = self._validator.require_kind("render", self._spec)
        sql = f"{self._head.build(spec)}{self._where.build(spec)}{self._limit.build(spec)};"
        logger.debug("Rendered %s statement: %s", self._ctx.dialect.dialect_name, sql)
        return sql

    def __repr__(self) -> str:
        state = self._spec.kind.value if self._spec is not None else "uninitiated"
        return f"QueryBuilder(dialect={self._ctx.dialect.dialect_name!r}, state={state!r})"

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _begin(self, spec: QuerySpec) -> None:
        self._spec = spec
        logger.debug("Began %s on %s", spec.kind.value.upper(), spec.table)
