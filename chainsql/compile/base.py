"""Dialect abstraction: the SQLDialect ABC.

``QueryBuilder`` holds the statement state and the step validation; it
composes one ``SQLDialect`` and calls it only for the renderings that differ
between SQL dialects.  Each concrete dialect is a flat subclass of this ABC
supplying its own hooks, so adding a dialect never touches the builder.
"""
from __future__ import annotations

from abc import ABC, abstractmethod

from chainsql.schema.statement import RowLimit


class SQLDialect(ABC):
    """Abstract base for dialect-specific rendering rules.

    ``limit_fragment`` is the one hook every dialect must supply.  Value and
    identifier rendering have shared defaults a dialect may override.

    Values are wrapped in single quotes **without escaping**, and identifiers
    are emitted as given.  Statements built from untrusted input are open to
    SQL injection; bind such values through the database driver instead.
    """

    @property
    @abstractmethod
    def dialect_name(self) -> str:
        """Return the canonical dialect name (e.g. ``'mysql'``)."""

    @abstractmethod
    def limit_fragment(self, row_limit: RowLimit) -> str:
        """Return the row-limiting fragment, including its leading space.

        Args:
            row_limit: The ``(start, offset)`` pair given to ``limit()``.

        Returns:
            Dialect-specific fragment such as ``' LIMIT 10, 20'``.
        """

    def quote_value(self, value: str) -> str:
        """Return ``value`` as a single-quoted SQL literal (unescaped)."""
        return f"'{value}'"

    def quote_identifier(self, name: str) -> str:
        """Return ``name`` as it should appear in the statement."""
        return name

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
