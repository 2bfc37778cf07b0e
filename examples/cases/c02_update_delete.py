"""Category 02: UPDATE and DELETE statements.

Both admit WHERE; neither admits LIMIT, so the output is dialect-neutral.
"""
from __future__ import annotations

from examples._case import Case

_ALL = ("mysql", "postgres", "sqlite")

CASES: list[Case] = [
    # ------------------------------------------------------------------
    Case(
        id="c02_01",
        category="update",
        description="Deactivate one user.",
        steps=lambda b: b.update("users", {"active": 0}).where("id", 42),
        expected={t: "UPDATE users SET active = '0' WHERE id = '42';" for t in _ALL},
    ),
    # ------------------------------------------------------------------
    Case(
        id="c02_02",
        category="delete",
        description="Purge stale sessions.",
        notes="A limit() call here raises InvalidStepOrderError.",
        steps=lambda b: b.delete("sessions").where("expires_at", "2024-01-01", "<"),
        expected={t: "DELETE FROM sessions WHERE expires_at < '2024-01-01';" for t in _ALL},
    ),
]
