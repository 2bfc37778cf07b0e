"""SQLite dialect."""
from __future__ import annotations

from chainsql.compile.base import SQLDialect
from chainsql.schema.statement import RowLimit


class SQLiteDialect(SQLDialect):
    """Renders SQLite-flavoured statements.

    SQLite accepts both limit forms; the keyword form
    ``LIMIT start OFFSET offset`` is emitted.
    """

    @property
    def dialect_name(self) -> str:
        return "sqlite"

    def limit_fragment(self, row_limit: RowLimit) -> str:
        return f" LIMIT {row_limit.start} OFFSET {row_limit.offset}"
