"""Clause-level SQL builders.

Each class renders exactly one fragment of a :class:`QuerySpec`.  Only
``LimitClauseBuilder`` output varies by dialect in practice; value and
identifier rendering go through the dialect hooks as well so a dialect can
override them.

Classes
-------
HeadClauseBuilder  : ``SELECT … FROM …`` / ``UPDATE … SET …`` / ``DELETE FROM …``
WhereClauseBuilder : `` WHERE <p1> AND <p2> …``
LimitClauseBuilder : the dialect's row-limit fragment
"""
from __future__ import annotations

from chainsql.compile.context import BuildContext
from chainsql.schema.statement import Predicate, QuerySpec, StatementKind


class HeadClauseBuilder:
    """Builds the statement-specific head."""

    def __init__(self, ctx: BuildContext) -> None:
        self._ctx = ctx

    def build(self, spec: QuerySpec) -> str:
        quote = self._ctx.dialect.quote_identifier
        table = quote(spec.table)
        if spec.kind is StatementKind.SELECT:
            fields = ", ".join(quote(f) for f in spec.fields)
            return f"SELECT {fields} FROM {table}"
        if spec.kind is StatementKind.UPDATE:
            quote_value = self._ctx.dialect.quote_value
            sets = ", ".join(
                f"{quote(a.column)} = {quote_value(a.value)}" for a in spec.assignments
            )
            return f"UPDATE {table} SET {sets}"
        return f"DELETE FROM {table}"


class WhereClauseBuilder:
    """Builds the `` WHERE …`` fragment; empty when there are no predicates."""

    def __init__(self, ctx: BuildContext) -> None:
        self._ctx = ctx

    def build(self, spec: QuerySpec) -> str:
        if not spec.predicates:
            return ""
        return " WHERE " + " AND ".join(self._build_predicate(p) for p in spec.predicates)

    def _build_predicate(self, predicate: Predicate) -> str:
        dialect = self._ctx.dialect
        field = dialect.quote_identifier(predicate.field)
        return f"{field} {predicate.operator} {dialect.quote_value(predicate.value)}"


class LimitClauseBuilder:
    """Builds the row-limit fragment; empty when no limit was set."""

    def __init__(self, ctx: BuildContext) -> None:
        self._ctx = ctx

    def build(self, spec: QuerySpec) -> str:
        if spec.row_limit is None:
            return ""
        return self._ctx.dialect.limit_fragment(spec.row_limit)
