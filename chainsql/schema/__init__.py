"""chainSQL schema models: QuerySpec, SchemaSnapshot, BuilderProfile."""
from chainsql.schema.profile import BuilderProfile, BuilderProfileBuilder
from chainsql.schema.snapshot import ColumnInfo, SchemaSnapshot, TableInfo
from chainsql.schema.statement import (
    Assignment,
    Predicate,
    QuerySpec,
    RowLimit,
    StatementKind,
)

__all__ = [
    "BuilderProfile",
    "BuilderProfileBuilder",
    "ColumnInfo",
    "SchemaSnapshot",
    "TableInfo",
    "Assignment",
    "Predicate",
    "QuerySpec",
    "RowLimit",
    "StatementKind",
]
