"""Builder step validator.

``StepValidator`` is the state-and-argument check shared by every dialect.
``QueryBuilder`` calls it at the start of each step, before any state is
touched, and uses the values it returns to build the next
:class:`~chainsql.schema.statement.QuerySpec`.  A rejected step therefore
leaves the builder exactly as it was.

Checks, in order
----------------
1. Step order   – a statement was begun and its kind admits the clause.
2. Arguments    – non-empty names, operator allowlist, non-negative limits.
3. Schema       – table / column existence when the profile has a snapshot.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from chainsql.compile.context import BuildContext
from chainsql.errors import (
    InvalidArgumentError,
    InvalidStepOrderError,
    UnknownColumnError,
    UnknownTableError,
)
from chainsql.schema.profile import normalize_operator
from chainsql.schema.statement import (
    LIMIT_KINDS,
    WHERE_KINDS,
    Assignment,
    Predicate,
    QuerySpec,
    RowLimit,
    StatementKind,
)

logger = logging.getLogger(__name__)


class StepValidator:
    """Validates builder steps against the current spec and the profile.

    Args:
        ctx: Build context (dialect + profile).
    """

    def __init__(self, ctx: BuildContext) -> None:
        self._ctx = ctx

    # ------------------------------------------------------------------
    # Statement-initiating steps
    # ------------------------------------------------------------------

    def validate_select(self, table: str, fields: Sequence[str]) -> tuple[str, ...]:
        """Check a ``select()`` call and return the projected fields as a tuple.

        Raises:
            InvalidArgumentError: Empty table, empty projection, or a bare
                string passed as ``fields``.
            UnknownTableError: Table missing from the snapshot.
            UnknownColumnError: Field missing from the snapshot table.
        """
        self._check_name("select", "table", table)
        if isinstance(fields, str) or not isinstance(fields, Sequence):
            raise InvalidArgumentError(
                "select",
                "fields",
                "fields must be a sequence of column names, not "
                f"{type(fields).__name__}.",
            )
        if not fields:
            raise InvalidArgumentError(
                "select", "fields", "select() requires at least one field."
            )
        for field in fields:
            self._check_name("select", "fields", field)
        self._check_table("select", table)
        for field in fields:
            self._check_column("select", "fields", table, field)
        return tuple(fields)

    def validate_update(
        self, table: str, values: Mapping[str, Any]
    ) -> tuple[Assignment, ...]:
        """Check an ``update()`` call and return its SET assignments.

        Raises:
            InvalidArgumentError: Empty table, or ``values`` not a non-empty
                mapping of column names to non-null values.
            UnknownTableError: Table missing from the snapshot.
            UnknownColumnError: Column missing from the snapshot table.
        """
        self._check_name("update", "table", table)
        if not isinstance(values, Mapping) or not values:
            raise InvalidArgumentError(
                "update", "values", "update() requires a non-empty mapping of column values."
            )
        for column, value in values.items():
            self._check_name("update", "values", column)
            self._check_value("update", "values", value)
        self._check_table("update", table)
        for column in values:
            self._check_column("update", "values", table, column)
        return tuple(Assignment(column=c, value=str(v)) for c, v in values.items())

    def validate_delete(self, table: str) -> None:
        """Check a ``delete()`` call."""
        self._check_name("delete", "table", table)
        self._check_table("delete", table)

    # ------------------------------------------------------------------
    # Clause steps
    # ------------------------------------------------------------------

    def validate_where(
        self,
        spec: QuerySpec | None,
        field: str,
        value: Any,
        operator: str,
    ) -> Predicate:
        """Check a ``where()`` call and return the predicate to append.

        Raises:
            InvalidStepOrderError: No statement begun, or the kind does not
                admit WHERE.
            InvalidArgumentError: Empty field, null value, or an operator
                outside the profile allowlist.
            UnknownColumnError: Field missing from the snapshot table.
        """
        spec = self.require_kind("where", spec, WHERE_KINDS)
        self._check_name("where", "field", field)
        self._check_value("where", "value", value)
        if not isinstance(operator, str) or not self._ctx.profile.allows_operator(operator):
            raise InvalidArgumentError(
                "where",
                "operator",
                f"Operator {operator!r} is not allowed.",
                details={
                    "operator": operator,
                    "allowed_operators": list(self._ctx.profile.operators),
                },
            )
        self._check_column("where", "field", spec.table, field)
        return Predicate(field=field, operator=normalize_operator(operator), value=str(value))

    def validate_limit(self, spec: QuerySpec | None, start: Any, offset: Any) -> RowLimit:
        """Check a ``limit()`` call and return the row limit to set.

        Raises:
            InvalidStepOrderError: Unless a SELECT is being built.
            InvalidArgumentError: ``start`` or ``offset`` not a
                non-negative integer.
        """
        self.require_kind("limit", spec, LIMIT_KINDS)
        for name, number in (("start", start), ("offset", offset)):
            # bool is an int subclass; limit(True, 1) is a caller bug.
            if isinstance(number, bool) or not isinstance(number, int):
                raise InvalidArgumentError(
                    "limit", name, f"{name} must be an integer, got {type(number).__name__}."
                )
            if number < 0:
                raise InvalidArgumentError(
                    "limit", name, f"{name} must be >= 0, got {number}."
                )
        return RowLimit(start=start, offset=offset)

    def require_kind(
        self,
        step: str,
        spec: QuerySpec | None,
        allowed: frozenset[StatementKind] | None = None,
    ) -> QuerySpec:
        """Return ``spec`` if ``step`` is legal for it, else raise.

        Args:
            step: Name of the step being attempted.
            spec: The current spec, ``None`` before any statement was begun.
            allowed: Statement kinds that admit ``step``; ``None`` admits all.

        Raises:
            InvalidStepOrderError: If ``spec`` is ``None`` or its kind is not
                in ``allowed``.
        """
        if spec is None:
            logger.debug("Rejected %s(): no statement begun", step)
            raise InvalidStepOrderError(step, "uninitiated")
        if allowed is not None and spec.kind not in allowed:
            logger.debug("Rejected %s(): not allowed on %s", step, spec.kind.value)
            raise InvalidStepOrderError(step, spec.kind.value)
        return spec

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _check_name(step: str, argument: str, name: Any) -> None:
        if not isinstance(name, str) or not name.strip():
            raise InvalidArgumentError(
                step, argument, f"{argument} must be a non-empty string, got {name!r}."
            )

    @staticmethod
    def _check_value(step: str, argument: str, value: Any) -> None:
        if value is None:
            raise InvalidArgumentError(
                step, argument, f"{argument} must not be None; NULL comparisons are not supported."
            )

    def _check_table(self, step: str, table: str) -> None:
        snapshot = self._ctx.profile.snapshot
        if snapshot is not None and snapshot.get_table(table) is None:
            raise UnknownTableError(step, table, snapshot.table_names)

    def _check_column(self, step: str, argument: str, table: str, column: str) -> None:
        snapshot = self._ctx.profile.snapshot
        if snapshot is not None and snapshot.get_column(table, column) is None:
            raise UnknownColumnError(
                step, argument, table, column, snapshot.get_column_names(table)
            )
