"""chainSQL examples runner.

Renders every Case for one or more dialect targets and compares the output
with the expected SQL.  Nothing is executed against a database.

Usage
-----
List all cases::

    python examples/runner.py --list

Run a single case (verbose)::

    python examples/runner.py --case c01_01 -v

Run a category against one dialect::

    python examples/runner.py --case c02 --target postgres
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# ---------------------------------------------------------------------------
# Adjust sys.path so the package is importable when run as a script
# ---------------------------------------------------------------------------
_REPO_ROOT = Path(__file__).resolve().parent.parent
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

from examples._case import Case
from examples.cases import ALL_CASES

from chainsql import DialectFactory, query_builder
from chainsql.errors import ChainSQLError

# ---------------------------------------------------------------------------
# ANSI colours
# ---------------------------------------------------------------------------
_RESET  = "\033[0m"
_GREEN  = "\033[32m"
_RED    = "\033[31m"
_YELLOW = "\033[33m"
_CYAN   = "\033[36m"
_BOLD   = "\033[1m"


def _ok(ok: bool) -> str:
    return f"{_GREEN}✓{_RESET}" if ok else f"{_RED}✗{_RESET}"


# ---------------------------------------------------------------------------
# Core logic
# ---------------------------------------------------------------------------

def run_case(case: Case, target: str, verbose: bool) -> bool:
    """Render ``case`` for ``target``; return whether it matched."""
    expected = case.expected.get(target)
    try:
        sql = case.steps(query_builder(target)).render()
    except ChainSQLError as exc:
        print(f"    {_ok(False)} {_BOLD}{case.id}{_RESET} [{target}]  {type(exc).__name__}: {exc}")
        return False

    matched = expected is None or sql == expected
    print(f"    {_ok(matched)} {_BOLD}{case.id}{_RESET} [{target}]  {case.description[:60]}")
    if verbose or not matched:
        print(f"      {_CYAN}rendered:{_RESET} {sql}")
    if not matched:
        print(f"      {_YELLOW}expected:{_RESET} {expected}")
    if verbose and case.notes:
        print(f"      {_YELLOW}note:{_RESET} {case.notes}")
    return matched


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

def _parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Render chainSQL examples for each dialect.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    p.add_argument(
        "--case", metavar="PREFIX",
        help=(
            "Run only cases whose ID starts with PREFIX "
            "(e.g. 'c01', 'c01_01'). Omit for all cases."
        ),
    )
    p.add_argument(
        "--target", action="append", metavar="DIALECT",
        help="Dialect target to render for; repeatable (default: all registered).",
    )
    p.add_argument(
        "--verbose", "-v", action="store_true",
        help="Print rendered SQL and notes for each case.",
    )
    p.add_argument(
        "--debug", action="store_true",
        help="Enable DEBUG logging for the chainsql package.",
    )
    p.add_argument(
        "--list", action="store_true",
        help="Print all case IDs and descriptions, then exit.",
    )
    return p.parse_args()


def _select_cases(prefix: str | None) -> list[Case]:
    if prefix is None:
        return ALL_CASES
    return [c for c in ALL_CASES if c.id.startswith(prefix)]


def main() -> None:
    args = _parse_args()

    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s %(message)s")

    if args.list:
        print(f"\n{'ID':<12} {'CATEGORY':<12} DESCRIPTION")
        print("-" * 70)
        for c in ALL_CASES:
            print(f"{c.id:<12} {c.category:<12} {c.description[:45]}")
        print(f"\nTotal: {len(ALL_CASES)} cases")
        return

    cases = _select_cases(args.case)
    if not cases:
        print(f"No cases match prefix '{args.case}'.", file=sys.stderr)
        sys.exit(1)

    targets = args.target or DialectFactory.registered_targets()
    passed = failed = 0
    for target in targets:
        print(f"\n{_BOLD}Rendering {len(cases)} cases for {target}{_RESET}\n")
        for case in cases:
            if run_case(case, target, args.verbose):
                passed += 1
            else:
                failed += 1

    print(f"\n{'─' * 60}")
    print(f"  {_GREEN}OK: {passed}{_RESET}  {_RED}FAIL: {failed}{_RESET}")
    sys.exit(1 if failed else 0)


if __name__ == "__main__":
    main()
