"""Pydantic models for the BuilderProfile configuration.

A ``BuilderProfile`` fixes the dialect a builder renders for, the predicate
operators it accepts, and optionally a schema allowlist.  Create one through
the fluent builder::

    from chainsql import BuilderProfile

    profile = (
        BuilderProfile.builder(target="postgres")
        .operators(["=", "<", ">"])
        .schema(snapshot)
        .build()
    )
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator

from chainsql.errors import ProfileConfigError
from chainsql.schema.snapshot import SchemaSnapshot

#: Operators accepted by ``where()`` unless the profile narrows them.
DEFAULT_OPERATORS: tuple[str, ...] = (
    "=", "!=", "<>", "<", "<=", ">", ">=", "LIKE", "NOT LIKE",
)


def normalize_operator(operator: str) -> str:
    """Collapse whitespace and upper-case ``operator`` (``'not  like'`` -> ``'NOT LIKE'``)."""
    return " ".join(operator.split()).upper()


class BuilderProfile(BaseModel):
    """Configuration shared by every builder created from it.

    Always created via :meth:`builder` in application code; the default
    instance is used when no profile is passed.

    Attributes:
        target: Registered dialect name (``'mysql'``, ``'postgres'``, ...).
        operators: Allowlisted predicate operators, normalised.
        snapshot: Optional table / column allowlist.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    target: str = "mysql"
    operators: tuple[str, ...] = DEFAULT_OPERATORS
    snapshot: SchemaSnapshot | None = None

    @field_validator("operators")
    @classmethod
    def _normalize_operators(cls, operators: tuple[str, ...]) -> tuple[str, ...]:
        normalized = tuple(dict.fromkeys(normalize_operator(op) for op in operators))
        if not normalized or not all(normalized):
            raise ValueError("operators must contain at least one non-empty operator")
        return normalized

    @classmethod
    def builder(cls, target: str = "mysql") -> BuilderProfileBuilder:
        """Return a :class:`BuilderProfileBuilder` for ``target``.

        Args:
            target: Dialect name registered with
                :class:`~chainsql.compile.registry.DialectFactory`.
        """
        return BuilderProfileBuilder(target=target)

    def allows_operator(self, operator: str) -> bool:
        return normalize_operator(operator) in self.operators


class BuilderProfileBuilder:
    """Fluent builder for :class:`BuilderProfile`.

    Always obtained via :meth:`BuilderProfile.builder`.
    """

    def __init__(self, target: str) -> None:
        self._target = target
        self._operators: list[str] = list(DEFAULT_OPERATORS)
        self._snapshot: SchemaSnapshot | None = None

    def operators(self, operators: list[str]) -> BuilderProfileBuilder:
        """Replace the operator allowlist."""
        self._operators = list(operators)
        return self

    def schema(self, snapshot: SchemaSnapshot) -> BuilderProfileBuilder:
        """Restrict tables and columns to those in ``snapshot``."""
        self._snapshot = snapshot
        return self

    def build(self) -> BuilderProfile:
        """Validate the configuration and return the :class:`BuilderProfile`.

        Raises:
            ProfileConfigError: If the target is unregistered or the operator
                allowlist is empty.
        """
        self._validate()
        return BuilderProfile(
            target=self._target,
            operators=tuple(self._operators),
            snapshot=self._snapshot,
        )

    def _validate(self) -> None:
        # Imported here: the registry module imports the dialects, which are
        # independent of profile configuration.
        from chainsql.compile.registry import DialectFactory

        if not self._target:
            raise ProfileConfigError(
                "No dialect target specified.",
                missing=["target"],
                reason="A builder must render for exactly one dialect.",
            )
        if self._target not in DialectFactory.registered_targets():
            raise ProfileConfigError(
                f"Dialect target '{self._target}' is not registered. "
                f"Registered targets: {DialectFactory.registered_targets()}.",
                missing=["target"],
                reason="The dialect must be registered with DialectFactory.",
            )
        if not self._operators or not all(normalize_operator(op) for op in self._operators):
            raise ProfileConfigError(
                "The operator allowlist must contain at least one non-empty operator.",
                missing=["operators"],
                reason="A profile with no operators rejects every where() step.",
            )
