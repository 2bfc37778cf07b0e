"""Unit tests for BuilderProfile, DialectFactory and query_builder()."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

import chainsql
from chainsql.compile.base import SQLDialect
from chainsql.compile.mysql import MySQLDialect
from chainsql.compile.builder import QueryBuilder
from chainsql.compile.postgres import PostgresDialect
from chainsql.compile.registry import DialectFactory
from chainsql.errors import ProfileConfigError, UnknownDialectError
from chainsql.schema.profile import DEFAULT_OPERATORS, BuilderProfile
from chainsql.schema.snapshot import SchemaSnapshot
from chainsql.schema.statement import RowLimit


class _FetchFirstDialect(SQLDialect):
    """ANSI ``OFFSET … FETCH`` style limit, used to test registration."""

    @property
    def dialect_name(self) -> str:
        return "ansi"

    def limit_fragment(self, row_limit: RowLimit) -> str:
        return f" OFFSET {row_limit.offset} ROWS FETCH NEXT {row_limit.start} ROWS ONLY"


@pytest.fixture
def ansi_registered():
    DialectFactory.register_class("ansi", _FetchFirstDialect)
    yield
    DialectFactory.unregister("ansi")


# ---------------------------------------------------------------------------
# DialectFactory
# ---------------------------------------------------------------------------


def test_builtin_targets_registered():
    assert {"mysql", "postgres", "sqlite"} <= set(DialectFactory.registered_targets())


def test_create_returns_fresh_instances():
    first = DialectFactory.create("mysql")
    assert isinstance(first, MySQLDialect)
    assert DialectFactory.create("mysql") is not first


def test_create_unknown_target_raises():
    with pytest.raises(UnknownDialectError) as exc_info:
        DialectFactory.create("oracle")
    assert exc_info.value.target == "oracle"
    assert "mysql" in exc_info.value.registered
    assert isinstance(exc_info.value, ProfileConfigError)


def test_decorator_registration():
    @DialectFactory.register("decorated")
    class _Decorated(_FetchFirstDialect):
        pass

    try:
        assert isinstance(DialectFactory.create("decorated"), _Decorated)
    finally:
        DialectFactory.unregister("decorated")
    assert "decorated" not in DialectFactory.registered_targets()


def test_new_dialect_needs_no_caller_change(ansi_registered):
    def client_code(builder: chainsql.QueryBuilder) -> str:
        return (
            builder.select("users", ["name", "email", "password"])
            .where("age", 18, ">")
            .where("age", 30, "<")
            .limit(10, 20)
            .render()
        )

    assert client_code(chainsql.query_builder("ansi")) == (
        "SELECT name, email, password FROM users WHERE age > '18' AND age < '30'"
        " OFFSET 20 ROWS FETCH NEXT 10 ROWS ONLY;"
    )


# ---------------------------------------------------------------------------
# query_builder()
# ---------------------------------------------------------------------------


def test_query_builder_defaults_to_mysql():
    builder = chainsql.query_builder()
    assert builder.dialect.dialect_name == "mysql"
    assert builder.spec is None


def test_query_builder_uses_profile_target():
    profile = BuilderProfile.builder("postgres").build()
    builder = chainsql.query_builder(profile=profile)
    assert isinstance(builder.dialect, PostgresDialect)
    assert builder.profile is profile


def test_query_builder_target_profile_mismatch():
    profile = BuilderProfile.builder("postgres").build()
    with pytest.raises(ProfileConfigError):
        chainsql.query_builder("mysql", profile=profile)


def test_query_builder_unknown_target():
    with pytest.raises(UnknownDialectError):
        chainsql.query_builder("oracle")


def test_query_builder_empty_target_is_not_defaulted():
    with pytest.raises(UnknownDialectError) as exc_info:
        chainsql.query_builder("")
    assert exc_info.value.target == ""


def test_builder_rejects_profile_for_other_dialect():
    with pytest.raises(ProfileConfigError) as exc_info:
        QueryBuilder(PostgresDialect(), BuilderProfile(target="mysql"))
    assert exc_info.value.missing == ["target"]


def test_builder_accepts_profile_for_its_dialect():
    profile = BuilderProfile(target="postgres")
    builder = QueryBuilder(PostgresDialect(), profile)
    assert builder.profile is profile


def test_dialect_is_fixed_per_builder():
    builder = chainsql.query_builder("postgres")
    with pytest.raises(AttributeError):
        builder.dialect = MySQLDialect()  # type: ignore[misc]


def test_repr_reports_state():
    builder = chainsql.query_builder("sqlite")
    assert repr(builder) == "QueryBuilder(dialect='sqlite', state='uninitiated')"
    builder.delete("users")
    assert repr(builder) == "QueryBuilder(dialect='sqlite', state='delete')"


# ---------------------------------------------------------------------------
# BuilderProfile
# ---------------------------------------------------------------------------


def test_default_profile():
    profile = BuilderProfile()
    assert profile.target == "mysql"
    assert profile.operators == DEFAULT_OPERATORS
    assert profile.snapshot is None


def test_builder_normalises_and_dedupes_operators():
    profile = BuilderProfile.builder("sqlite").operators(["like", "LIKE", " not   like "]).build()
    assert profile.operators == ("LIKE", "NOT LIKE")
    assert profile.allows_operator("Not Like")
    assert not profile.allows_operator("=")


def test_builder_rejects_empty_operators():
    with pytest.raises(ProfileConfigError) as exc_info:
        BuilderProfile.builder("mysql").operators([]).build()
    assert exc_info.value.missing == ["operators"]


def test_builder_rejects_unregistered_target():
    with pytest.raises(ProfileConfigError) as exc_info:
        BuilderProfile.builder("oracle").build()
    assert exc_info.value.missing == ["target"]


def test_builder_attaches_snapshot(snapshot: SchemaSnapshot):
    profile = BuilderProfile.builder("mysql").schema(snapshot).build()
    assert profile.snapshot is not None
    assert profile.snapshot.table_names == ["users", "sessions"]


def test_profile_rejects_unknown_fields():
    with pytest.raises(ValidationError):
        BuilderProfile(target="mysql", max_limit=10)  # type: ignore[call-arg]


def test_direct_profile_normalises_operators():
    profile = BuilderProfile(operators=("like", "LIKE", " not   like "))
    assert profile.operators == ("LIKE", "NOT LIKE")
    sql = (
        QueryBuilder(MySQLDialect(), profile)
        .select("users", ["name"])
        .where("name", "a%", "like")
        .render()
    )
    assert sql == "SELECT name FROM users WHERE name LIKE 'a%';"


@pytest.mark.parametrize("operators", [(), ("  ",)])
def test_direct_profile_rejects_empty_operators(operators):
    with pytest.raises(ValidationError):
        BuilderProfile(operators=operators)
