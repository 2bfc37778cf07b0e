"""Test fixtures: sample SchemaSnapshot JSON."""

from __future__ import annotations

import json
from pathlib import Path

from chainsql.schema.snapshot import SchemaSnapshot

#: Projection used by the canonical users query.
USER_FIELDS = ["name", "email", "password"]

_FIXTURES_DIR = Path(__file__).parent


def load_schema_snapshot() -> SchemaSnapshot:
    """Load the canonical sample SchemaSnapshot from schema.json."""
    data = json.loads((_FIXTURES_DIR / "schema.json").read_text())
    return SchemaSnapshot.model_validate(data)
