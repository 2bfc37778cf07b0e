"""Custom exception hierarchy for chainSQL.

All public errors inherit from ChainSQLError so callers can catch the base
class for any chainSQL-specific failure.
"""
from __future__ import annotations

from typing import Any


class ChainSQLError(Exception):
    """Base exception for all chainSQL errors."""


class StepError(ChainSQLError):
    """Raised when a builder step is rejected.

    The builder's statement is left exactly as it was before the step.

    Args:
        message: Human-readable description.
        code: Machine-readable error code (e.g. INVALID_STEP_ORDER).
        step: Name of the builder step that was rejected.
        details: Extra diagnostic context.
    """

    def __init__(
        self,
        message: str,
        code: str,
        step: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.step = step
        self.details: dict[str, Any] = details or {}

    def to_error_response(self) -> dict[str, Any]:
        """Returns a structured error response for the caller."""
        return {
            "error": self.code,
            "message": str(self),
            "details": {"step": self.step, **self.details},
        }


class InvalidStepOrderError(StepError):
    """Raised when a step is not legal for the statement being built.

    Covers clause steps invoked before any statement was begun and clauses
    the current statement kind does not admit (e.g. LIMIT on an UPDATE).

    Args:
        step: The step that was attempted (``'where'``, ``'limit'``, ...).
        state: The builder state at the time (``'uninitiated'`` or the
            statement kind, e.g. ``'update'``).
    """

    def __init__(self, step: str, state: str) -> None:
        if state == "uninitiated":
            message = (
                f"Cannot call {step}() before a statement was begun; "
                "call select(), update() or delete() first."
            )
        else:
            message = f"{step}() is not allowed on a {state.upper()} statement."
        super().__init__(
            message,
            code="INVALID_STEP_ORDER",
            step=step,
            details={"state": state},
        )
        self.state = state


class InvalidArgumentError(StepError):
    """Raised when a step receives an out-of-domain argument.

    Args:
        step: The step that received the argument.
        argument: Name of the offending argument.
        message: Human-readable description.
        details: Extra diagnostic context.
    """

    def __init__(
        self,
        step: str,
        argument: str,
        message: str,
        details: dict[str, Any] | None = None,
        code: str = "INVALID_ARGUMENT",
    ) -> None:
        super().__init__(
            message,
            code=code,
            step=step,
            details={"argument": argument, **(details or {})},
        )
        self.argument = argument


class UnknownTableError(InvalidArgumentError):
    """Raised when a table is not present in the profile's schema snapshot."""

    def __init__(self, step: str, table: str, allowed_tables: list[str]) -> None:
        super().__init__(
            step,
            "table",
            f"Table '{table}' does not exist in the schema snapshot.",
            details={"table": table, "allowed_tables": allowed_tables},
            code="UNKNOWN_TABLE",
        )


class UnknownColumnError(InvalidArgumentError):
    """Raised when a column is not present on a snapshot table."""

    def __init__(
        self,
        step: str,
        argument: str,
        table: str,
        column: str,
        allowed_columns: list[str],
    ) -> None:
        super().__init__(
            step,
            argument,
            f"Column '{column}' does not exist on table '{table}'.",
            details={
                "table": table,
                "column": column,
                "allowed_columns": allowed_columns,
            },
            code="UNKNOWN_COLUMN",
        )


class ProfileConfigError(ChainSQLError):
    """Raised when a BuilderProfile is misconfigured.

    Detected at :meth:`BuilderProfileBuilder.build` time, before any
    statement is built.

    Args:
        message: Human-readable description.
        missing: Settings that must be supplied.
        reason: Why the setting is required.
    """

    def __init__(
        self,
        message: str,
        missing: list[str] | None = None,
        reason: str | None = None,
    ) -> None:
        super().__init__(message)
        self.missing = missing or []
        self.reason = reason or ""


class UnknownDialectError(ProfileConfigError):
    """Raised when no dialect is registered under the requested target."""

    def __init__(self, target: str, registered: list[str]) -> None:
        super().__init__(
            f"Unsupported dialect target: '{target}'. Registered targets: {registered}.",
            missing=["target"],
            reason="The dialect must be registered with DialectFactory.",
        )
        self.target = target
        self.registered = registered
