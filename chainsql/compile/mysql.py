"""MySQL dialect."""

from __future__ import annotations

from chainsql.compile.base import SQLDialect
from chainsql.schema.statement import RowLimit


class MySQLDialect(SQLDialect):
    """Renders MySQL-flavoured statements.

    Row limiting uses the comma form ``LIMIT start, offset``.
    """

    @property
    def dialect_name(self) -> str:
        return "mysql"

    def limit_fragment(self, row_limit: RowLimit) -> str:
        return f" LIMIT {row_limit.start}, {row_limit.offset}"
