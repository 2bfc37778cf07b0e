"""Shared pytest fixtures for chainSQL unit tests."""
from __future__ import annotations

import pytest

import chainsql
from chainsql.compile.builder import QueryBuilder
from chainsql.schema.profile import BuilderProfile
from chainsql.schema.snapshot import SchemaSnapshot
from tests.fixtures import load_schema_snapshot


@pytest.fixture(scope="session")
def snapshot() -> SchemaSnapshot:
    """Canonical schema snapshot shared across all tests."""
    return load_schema_snapshot()


@pytest.fixture(scope="session")
def schema_profile(snapshot: SchemaSnapshot) -> BuilderProfile:
    """MySQL profile restricted to the fixture schema."""
    return BuilderProfile.builder("mysql").schema(snapshot).build()


@pytest.fixture
def mysql() -> QueryBuilder:
    return chainsql.query_builder("mysql")


@pytest.fixture
def postgres() -> QueryBuilder:
    return chainsql.query_builder("postgres")


@pytest.fixture(params=["mysql", "postgres", "sqlite"])
def any_builder(request: pytest.FixtureRequest) -> QueryBuilder:
    """A fresh builder for every built-in dialect."""
    return chainsql.query_builder(request.param)
