"""Dialect registry.

``DialectFactory`` maps target names to :class:`~chainsql.compile.base.SQLDialect`
implementations.  Register a dialect once; ``chainsql.query_builder`` and
``BuilderProfileBuilder`` look it up by name, so callers never change when a
dialect is added.

Usage::

    from chainsql.compile.registry import DialectFactory

    @DialectFactory.register("mssql")
    class SQLServerDialect(SQLDialect):
        ...
"""

from __future__ import annotations

from collections.abc import Callable
from typing import ClassVar

from chainsql.compile.base import SQLDialect
from chainsql.errors import UnknownDialectError


class DialectFactory:
    """Registry mapping dialect target names to :class:`SQLDialect` classes.

    Example::

        @DialectFactory.register("mssql")
        class SQLServerDialect(SQLDialect):
            ...

        dialect = DialectFactory.create("mssql")
    """

    _dialects: ClassVar[dict[str, type[SQLDialect]]] = {}

    @classmethod
    def register(cls, name: str) -> Callable[[type[SQLDialect]], type[SQLDialect]]:
        """Decorator that registers a dialect class under ``name``.

        Args:
            name: The dialect target name (e.g. ``"postgres"``).

        Returns:
            A decorator that registers and returns the dialect class.
        """

        def decorator(dialect_cls: type[SQLDialect]) -> type[SQLDialect]:
            cls._dialects[name] = dialect_cls
            return dialect_cls

        return decorator

    @classmethod
    def register_class(cls, name: str, dialect_cls: type[SQLDialect]) -> None:
        """Register a dialect class without using the decorator form."""
        cls._dialects[name] = dialect_cls

    @classmethod
    def unregister(cls, name: str) -> None:
        """Remove ``name`` from the registry if present."""
        cls._dialects.pop(name, None)

    @classmethod
    def create(cls, name: str) -> SQLDialect:
        """Instantiate the dialect registered for ``name``.

        Raises:
            UnknownDialectError: If no dialect is registered for ``name``.
        """
        dialect_cls = cls._dialects.get(name)
        if dialect_cls is None:
            raise UnknownDialectError(name, sorted(cls._dialects))
        return dialect_cls()

    @classmethod
    def registered_targets(cls) -> list[str]:
        """Return the sorted list of registered dialect target names."""
        return sorted(cls._dialects)
