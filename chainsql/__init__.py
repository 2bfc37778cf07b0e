"""chainSQL – a fluent, dialect-aware SQL statement builder.

Public API
----------
``query_builder``
    Return a :class:`QueryBuilder` for a registered dialect target.

Re-exported types
-----------------
``QueryBuilder``, ``QuerySpec``, ``BuilderProfile``, ``SchemaSnapshot``,
the built-in dialects, and all error classes.

Extensibility
-------------
New dialects can be registered via::

    from chainsql.compile.registry import DialectFactory

    @DialectFactory.register("mssql")
    class SQLServerDialect(SQLDialect):
        ...

After registration, ``query_builder("mssql")`` picks it up automatically.

Security
--------
Predicate and SET values are wrapped in single quotes without escaping and
identifiers are emitted as given.  Do not build statements from untrusted
input; pass such values to the database driver as bound parameters.
"""

from __future__ import annotations

from chainsql.compile.base import SQLDialect
from chainsql.compile.builder import QueryBuilder
from chainsql.compile.mysql import MySQLDialect
from chainsql.compile.postgres import PostgresDialect
from chainsql.compile.registry import DialectFactory
from chainsql.compile.sqlite import SQLiteDialect
from chainsql.errors import (
    ChainSQLError,
    InvalidArgumentError,
    InvalidStepOrderError,
    ProfileConfigError,
    StepError,
    UnknownColumnError,
    UnknownDialectError,
    UnknownTableError,
)
from chainsql.schema.converters import schema_from_metadata, schema_from_sqlalchemy
from chainsql.schema.profile import BuilderProfile, BuilderProfileBuilder
from chainsql.schema.snapshot import ColumnInfo, SchemaSnapshot, TableInfo
from chainsql.schema.statement import (
    Assignment,
    Predicate,
    QuerySpec,
    RowLimit,
    StatementKind,
)

# ---------------------------------------------------------------------------
# Register built-in dialects with DialectFactory
# ---------------------------------------------------------------------------

DialectFactory.register_class("mysql", MySQLDialect)
DialectFactory.register_class("postgres", PostgresDialect)
DialectFactory.register_class("sqlite", SQLiteDialect)

__all__ = [
    "query_builder",
    # Builder
    "QueryBuilder",
    "QuerySpec",
    "StatementKind",
    "Predicate",
    "Assignment",
    "RowLimit",
    # Dialects
    "SQLDialect",
    "DialectFactory",
    "MySQLDialect",
    "PostgresDialect",
    "SQLiteDialect",
    # Configuration
    "BuilderProfile",
    "BuilderProfileBuilder",
    "SchemaSnapshot",
    "TableInfo",
    "ColumnInfo",
    "schema_from_sqlalchemy",
    "schema_from_metadata",
    # Errors
    "ChainSQLError",
    "StepError",
    "InvalidStepOrderError",
    "InvalidArgumentError",
    "UnknownTableError",
    "UnknownColumnError",
    "ProfileConfigError",
    "UnknownDialectError",
]


def query_builder(
    target: str | None = None,
    profile: BuilderProfile | None = None,
) -> QueryBuilder:
    """Return a fresh :class:`QueryBuilder` for a registered dialect.

    This is the main entry point::

        sql = (
            chainsql.query_builder("postgres")
            .select("users", ["name", "email"])
            .where("age", "18", ">")
            .limit(10, 20)
            .render()
        )

    Args:
        target: Dialect name.  Defaults to ``profile.target`` when a profile
            is given, otherwise ``'mysql'``.
        profile: Optional profile (operator allowlist, schema snapshot).

    Returns:
        A builder in the uninitiated state.

    Raises:
        UnknownDialectError: If no dialect is registered for ``target``.
        ProfileConfigError: If ``target`` and ``profile.target`` disagree.
    """
    if profile is None:
        profile = BuilderProfile(target=target if target is not None else "mysql")
    elif target is not None and target != profile.target:
        raise ProfileConfigError(
            f"Target '{target}' does not match the profile target '{profile.target}'.",
            missing=["target"],
            reason="A builder renders for exactly one dialect.",
        )
    dialect = DialectFactory.create(profile.target)
    return QueryBuilder(dialect, profile)
