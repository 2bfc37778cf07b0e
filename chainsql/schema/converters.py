"""Utilities for building a SchemaSnapshot from external sources.

SQLAlchemy converter
--------------------
:func:`schema_from_sqlalchemy` reflects a live database engine and returns a
:class:`~chainsql.schema.snapshot.SchemaSnapshot`.  chainSQL itself never
executes statements; the engine is only used for reflection.

Install the optional dependency before using this module::

    pip install "chainsql[sqlalchemy]"

Example::

    from sqlalchemy import create_engine
    from chainsql.schema.converters import schema_from_sqlalchemy

    engine = create_engine("sqlite:///mydb.db")
    snapshot = schema_from_sqlalchemy(engine)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from chainsql.schema.snapshot import ColumnInfo, SchemaSnapshot, TableInfo

if TYPE_CHECKING:
    from sqlalchemy import Engine, MetaData

logger = logging.getLogger(__name__)


def schema_from_sqlalchemy(
    engine: Engine,
    *,
    include_tables: list[str] | None = None,
    schema: str | None = None,
) -> SchemaSnapshot:
    """Build a :class:`SchemaSnapshot` by reflecting a SQLAlchemy engine.

    Args:
        engine: A :class:`sqlalchemy.engine.Engine` instance.
        include_tables: Optional allowlist of table names to reflect.
            When ``None`` all tables in the schema are reflected.
        schema: Optional database schema name (e.g. ``"public"`` for
            PostgreSQL).  Passed directly to
            :meth:`sqlalchemy.schema.MetaData.reflect`.

    Returns:
        A fully populated :class:`SchemaSnapshot`.

    Raises:
        ImportError: If ``sqlalchemy`` is not installed.
    """
    try:
        from sqlalchemy import MetaData as _MetaData
    except ImportError as exc:
        raise ImportError(
            "SQLAlchemy is required for schema_from_sqlalchemy(). "
            'Install it with: pip install "chainsql[sqlalchemy]"'
        ) from exc

    metadata = _MetaData()
    with engine.connect() as conn:
        metadata.reflect(bind=conn, only=include_tables, schema=schema)

    snapshot = schema_from_metadata(metadata)
    logger.debug("Reflected %d table(s) from %s", len(snapshot.tables), engine.url)
    return snapshot


def schema_from_metadata(metadata: MetaData) -> SchemaSnapshot:
    """Convert a :class:`~sqlalchemy.schema.MetaData` into a :class:`SchemaSnapshot`.

    Works for reflected metadata as well as metadata declared in code, so
    an application's ORM models can serve as the allowlist directly.
    """
    tables = [
        TableInfo(
            name=table.name,
            columns=[
                ColumnInfo(
                    name=col.name,
                    type=str(col.type),
                    # Unset nullability (None) counts as nullable.
                    nullable=col.nullable is not False,
                )
                for col in table.columns
            ],
        )
        for table in metadata.sorted_tables
    ]
    return SchemaSnapshot(tables=tables)
