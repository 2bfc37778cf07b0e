"""Build context value object.

Packages the ``(dialect, profile)`` pair shared by ``QueryBuilder``, the
clause builders and the step validator into a single cohesive object.
"""
from __future__ import annotations

from dataclasses import dataclass

from chainsql.compile.base import SQLDialect
from chainsql.schema.profile import BuilderProfile


@dataclass(frozen=True)
class BuildContext:
    """Immutable context fixed when a builder is constructed.

    Attributes:
        dialect: Dialect-specific rendering rules.
        profile: Operator allowlist and optional schema snapshot.
    """

    dialect: SQLDialect
    profile: BuilderProfile
