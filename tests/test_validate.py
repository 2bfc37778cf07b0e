"""Unit tests for builder step validation and the statement state machine."""
from __future__ import annotations

import pytest

from chainsql.compile.builder import QueryBuilder
from chainsql.compile.registry import DialectFactory
from chainsql.errors import (
    ChainSQLError,
    InvalidArgumentError,
    InvalidStepOrderError,
    UnknownColumnError,
    UnknownTableError,
)
from chainsql.schema.profile import BuilderProfile
from chainsql.schema.statement import StatementKind
from tests.fixtures import USER_FIELDS

# ---------------------------------------------------------------------------
# Step order
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("step", "call"),
    [
        ("where", lambda b: b.where("age", "18", ">")),
        ("limit", lambda b: b.limit(10, 20)),
        ("render", lambda b: b.render()),
    ],
)
def test_steps_before_begin_raise(any_builder: QueryBuilder, step, call):
    with pytest.raises(InvalidStepOrderError) as exc_info:
        call(any_builder)
    err = exc_info.value
    assert err.step == step
    assert err.state == "uninitiated"
    assert err.code == "INVALID_STEP_ORDER"


def test_failed_limit_leaves_builder_uninitiated(mysql: QueryBuilder):
    with pytest.raises(InvalidStepOrderError):
        mysql.limit(10, 20)
    assert mysql.spec is None
    assert mysql.kind is None
    sql = mysql.select("users", USER_FIELDS).render()
    assert sql == "SELECT name, email, password FROM users;"


def test_limit_after_update_raises(any_builder: QueryBuilder):
    any_builder.update("users", {"active": 0})
    with pytest.raises(InvalidStepOrderError) as exc_info:
        any_builder.limit(1, 1)
    assert exc_info.value.state == "update"
    assert "UPDATE" in str(exc_info.value)


def test_limit_after_delete_raises(any_builder: QueryBuilder):
    any_builder.delete("sessions")
    with pytest.raises(InvalidStepOrderError) as exc_info:
        any_builder.limit(1, 1)
    assert exc_info.value.state == "delete"


def test_limit_after_select_succeeds(any_builder: QueryBuilder):
    assert any_builder.select("users", ["name"]).limit(1, 1) is any_builder
    assert any_builder.spec.row_limit is not None


def test_where_allowed_on_every_kind(mysql: QueryBuilder):
    mysql.select("users", ["name"]).where("id", "1")
    mysql.update("users", {"name": "x"}).where("id", "1")
    mysql.delete("users").where("id", "1")
    assert mysql.render() == "DELETE FROM users WHERE id = '1';"


def test_steps_return_builder_for_chaining(mysql: QueryBuilder):
    assert mysql.select("users", ["name"]) is mysql
    assert mysql.where("age", "1") is mysql
    assert mysql.limit(0, 1) is mysql
    assert mysql.reset() is mysql


# ---------------------------------------------------------------------------
# Restart semantics
# ---------------------------------------------------------------------------


def test_second_select_discards_previous_state(postgres: QueryBuilder):
    postgres.select("users", USER_FIELDS).where("age", "18", ">").limit(10, 20)
    sql = postgres.select("sessions", ["id"]).render()
    assert sql == "SELECT id FROM sessions;"


def test_restart_with_different_kind(mysql: QueryBuilder):
    mysql.select("users", ["name"]).where("age", "18", ">").limit(1, 2)
    mysql.delete("users")
    assert mysql.kind is StatementKind.DELETE
    assert mysql.render() == "DELETE FROM users;"
    with pytest.raises(InvalidStepOrderError):
        mysql.limit(1, 2)


def test_reset_returns_to_uninitiated(mysql: QueryBuilder):
    mysql.select("users", ["name"]).reset()
    with pytest.raises(InvalidStepOrderError):
        mysql.render()


# ---------------------------------------------------------------------------
# Arguments and atomicity
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("table", "fields", "argument"),
    [
        ("", ["name"], "table"),
        ("   ", ["name"], "table"),
        ("users", [], "fields"),
        ("users", "name", "fields"),
        ("users", ["name", ""], "fields"),
    ],
)
def test_select_rejects_bad_arguments(mysql: QueryBuilder, table, fields, argument):
    with pytest.raises(InvalidArgumentError) as exc_info:
        mysql.select(table, fields)
    assert exc_info.value.argument == argument
    assert exc_info.value.step == "select"


def test_select_accepts_tuple_fields(mysql: QueryBuilder):
    assert mysql.select("users", ("name", "email")).render() == "SELECT name, email FROM users;"


@pytest.mark.parametrize(
    ("start", "offset", "argument"),
    [(-1, 0, "start"), (0, -5, "offset"), (1.5, 2, "start"), (True, 2, "start"), (0, "2", "offset")],
)
def test_limit_rejects_bad_arguments(mysql: QueryBuilder, start, offset, argument):
    mysql.select("users", ["name"])
    with pytest.raises(InvalidArgumentError) as exc_info:
        mysql.limit(start, offset)
    assert exc_info.value.argument == argument


def test_rejected_limit_keeps_previous_limit(mysql: QueryBuilder):
    mysql.select("users", ["name"]).limit(1, 2)
    before = mysql.spec
    with pytest.raises(InvalidArgumentError):
        mysql.limit(-1, 2)
    assert mysql.spec is before
    assert mysql.render() == "SELECT name FROM users LIMIT 1, 2;"


def test_rejected_where_keeps_predicates(mysql: QueryBuilder):
    mysql.select("users", ["name"]).where("age", "18", ">")
    with pytest.raises(InvalidArgumentError):
        mysql.where("age", "30", "<=>")
    assert mysql.render() == "SELECT name FROM users WHERE age > '18';"


def test_rejected_select_keeps_current_statement(mysql: QueryBuilder):
    mysql.select("users", ["name"]).where("age", "18", ">")
    with pytest.raises(InvalidArgumentError):
        mysql.select("users", [])
    assert mysql.render() == "SELECT name FROM users WHERE age > '18';"


def test_where_rejects_none_value(mysql: QueryBuilder):
    mysql.select("users", ["name"])
    with pytest.raises(InvalidArgumentError) as exc_info:
        mysql.where("age", None)
    assert exc_info.value.argument == "value"


def test_where_rejects_empty_field(mysql: QueryBuilder):
    mysql.select("users", ["name"])
    with pytest.raises(InvalidArgumentError) as exc_info:
        mysql.where("", "1")
    assert exc_info.value.argument == "field"


@pytest.mark.parametrize("values", [{}, ["name"], {"": "x"}, {"name": None}])
def test_update_rejects_bad_values(mysql: QueryBuilder, values):
    with pytest.raises(InvalidArgumentError):
        mysql.update("users", values)


def test_delete_rejects_empty_table(mysql: QueryBuilder):
    with pytest.raises(InvalidArgumentError):
        mysql.delete("")


def test_operator_allowlist_from_profile():
    profile = BuilderProfile.builder("mysql").operators(["=", "like"]).build()
    builder = QueryBuilder(profile=profile, dialect=DialectFactory.create("mysql"))
    builder.select("users", ["name"]).where("name", "a%", "LIKE")
    with pytest.raises(InvalidArgumentError) as exc_info:
        builder.where("age", "18", ">")
    assert exc_info.value.details["allowed_operators"] == ["=", "LIKE"]


def test_errors_share_base_class(mysql: QueryBuilder):
    with pytest.raises(ChainSQLError):
        mysql.limit(1, 1)
    with pytest.raises(ChainSQLError):
        mysql.select("", ["x"])


def test_error_response_shape(mysql: QueryBuilder):
    mysql.delete("users")
    with pytest.raises(InvalidStepOrderError) as exc_info:
        mysql.limit(1, 1)
    assert exc_info.value.to_error_response() == {
        "error": "INVALID_STEP_ORDER",
        "message": str(exc_info.value),
        "details": {"step": "limit", "state": "delete"},
    }


# ---------------------------------------------------------------------------
# Schema snapshot
# ---------------------------------------------------------------------------


def test_snapshot_accepts_known_names(schema_profile: BuilderProfile):
    builder = QueryBuilder(DialectFactory.create("mysql"), schema_profile)
    sql = builder.select("users", USER_FIELDS).where("age", "18", ">").render()
    assert sql == "SELECT name, email, password FROM users WHERE age > '18';"


def test_snapshot_rejects_unknown_table(schema_profile: BuilderProfile):
    builder = QueryBuilder(DialectFactory.create("mysql"), schema_profile)
    with pytest.raises(UnknownTableError) as exc_info:
        builder.delete("ghosts")
    assert exc_info.value.code == "UNKNOWN_TABLE"
    assert exc_info.value.details["allowed_tables"] == ["users", "sessions"]


def test_snapshot_rejects_unknown_select_field(schema_profile: BuilderProfile):
    builder = QueryBuilder(DialectFactory.create("mysql"), schema_profile)
    with pytest.raises(UnknownColumnError) as exc_info:
        builder.select("users", ["name", "ssn"])
    assert exc_info.value.details["column"] == "ssn"
    assert builder.spec is None


def test_snapshot_rejects_unknown_where_field(schema_profile: BuilderProfile):
    builder = QueryBuilder(DialectFactory.create("mysql"), schema_profile)
    builder.select("sessions", ["id"])
    with pytest.raises(UnknownColumnError) as exc_info:
        builder.where("age", "18", ">")
    assert exc_info.value.argument == "field"
    assert isinstance(exc_info.value, InvalidArgumentError)


def test_snapshot_rejects_unknown_update_column(schema_profile: BuilderProfile):
    builder = QueryBuilder(DialectFactory.create("mysql"), schema_profile)
    with pytest.raises(UnknownColumnError):
        builder.update("users", {"nickname": "x"})