"""PostgreSQL dialect."""

from __future__ import annotations

from chainsql.compile.base import SQLDialect
from chainsql.schema.statement import RowLimit


class PostgresDialect(SQLDialect):
    """Renders PostgreSQL-flavoured statements.

    Row limiting uses ``LIMIT start OFFSET<offset>``.  The missing space
    before the offset value is kept so output matches the reference
    rendering byte for byte; PostgreSQL's lexer accepts it.
    """

    @property
    def dialect_name(self) -> str:
        return "postgres"

    def limit_fragment(self, row_limit: RowLimit) -> str:
        return f" LIMIT {row_limit.start} OFFSET{row_limit.offset}"
