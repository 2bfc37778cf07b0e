"""Category 01: SELECT statements.

Projection, WHERE filtering and the dialect-specific LIMIT fragment.
"""
from __future__ import annotations

from examples._case import Case

_USERS = ["name", "email", "password"]

CASES: list[Case] = [
    # ------------------------------------------------------------------
    Case(
        id="c01_01",
        category="select",
        description="Users between 18 and 30, rows 10 and 20.",
        notes=(
            "Two predicates on the same column are ANDed in call order. "
            "Only the LIMIT fragment differs between dialects."
        ),
        steps=lambda b: (
            b.select("users", _USERS)
            .where("age", 18, ">")
            .where("age", 30, "<")
            .limit(10, 20)
        ),
        expected={
            "mysql": (
                "SELECT name, email, password FROM users "
                "WHERE age > '18' AND age < '30' LIMIT 10, 20;"
            ),
            "postgres": (
                "SELECT name, email, password FROM users "
                "WHERE age > '18' AND age < '30' LIMIT 10 OFFSET20;"
            ),
            "sqlite": (
                "SELECT name, email, password FROM users "
                "WHERE age > '18' AND age < '30' LIMIT 10 OFFSET 20;"
            ),
        },
    ),
    # ------------------------------------------------------------------
    Case(
        id="c01_02",
        category="select",
        description="First page of users, no filter.",
        notes="No where() call: the WHERE clause is omitted, LIMIT is kept.",
        steps=lambda b: b.select("users", ["name"]).limit(0, 50),
        expected={
            "mysql": "SELECT name FROM users LIMIT 0, 50;",
            "postgres": "SELECT name FROM users LIMIT 0 OFFSET50;",
            "sqlite": "SELECT name FROM users LIMIT 0 OFFSET 50;",
        },
    ),
    # ------------------------------------------------------------------
    Case(
        id="c01_03",
        category="select",
        description="Users whose email matches a domain.",
        notes="Operators are upper-cased; the default operator is '='.",
        steps=lambda b: (
            b.select("users", ["name", "email"])
            .where("email", "%@example.com", "like")
            .where("active", "1")
        ),
        expected={
            target: (
                "SELECT name, email FROM users "
                "WHERE email LIKE '%@example.com' AND active = '1';"
            )
            for target in ("mysql", "postgres", "sqlite")
        },
    ),
]
