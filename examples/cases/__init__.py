"""Central registry of all example cases.

Import ALL_CASES for the complete flat list, or import individual module
CASES lists for selective use.
"""
from __future__ import annotations

from examples.cases.c01_select import CASES as C01
from examples.cases.c02_update_delete import CASES as C02
from examples._case import Case

ALL_CASES: list[Case] = C01 + C02

__all__ = ["ALL_CASES", "C01", "C02"]
