"""Case dataclass: describes one example scenario."""
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from chainsql import QueryBuilder


@dataclass
class Case:
    """A single named example scenario.

    Attributes:
        id: Unique identifier, e.g. ``"c01_01"``.
        category: Human-readable category, e.g. ``"select"``.
        description: What the scenario demonstrates.
        steps: Applies the builder steps to a fresh builder.
        expected: Expected rendered SQL per dialect target.
        notes: Free-form explanation of what makes this case interesting.
    """

    id: str
    category: str
    description: str
    steps: Callable[[QueryBuilder], QueryBuilder]
    expected: dict[str, str] = field(default_factory=dict)
    notes: str = ""
