"""chainSQL compilation layer: QuerySpec → dialect-specific SQL."""
from chainsql.compile.base import SQLDialect
from chainsql.compile.builder import QueryBuilder
from chainsql.compile.mysql import MySQLDialect
from chainsql.compile.postgres import PostgresDialect
from chainsql.compile.sqlite import SQLiteDialect

__all__ = [
    "SQLDialect",
    "QueryBuilder",
    "MySQLDialect",
    "PostgresDialect",
    "SQLiteDialect",
]
