"""Command line: balance equations given as arguments or read from stdin.

  $ chembalance "H2 + O2 -> H2O" "KOH + H3PO4 -> K3PO4 + H2O"
  2H₂ + O₂ = 2H₂O
  3KOH + H₃PO₄ = K₃PO₄ + 3H₂O
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from .balance import STRATEGIES, BalanceOptions, balance_text
from .errors import BalanceError
from .periodic_table import ElementTable
from .render import render_constituent, render_equation
from .resolve import DEFAULT_SEARCH_LIMIT
from .utils import INTEGRAL_TOL


def _parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="chembalance",
        description="Balance chemical equations with minimal integer coefficients.",
    )
    ap.add_argument("equations", nargs="*", help="equations such as 'H2 + O2 -> H2O' (default: read stdin)")
    ap.add_argument("--strategy", choices=STRATEGIES, default="homogeneous")
    ap.add_argument("--search-limit", type=int, default=DEFAULT_SEARCH_LIMIT,
                    help="largest scale factor tried when clearing fractions")
    ap.add_argument("--tolerance", type=float, default=INTEGRAL_TOL)
    ap.add_argument("--table", default=None, help="element table in Periodic-Table-JSON format")
    ap.add_argument("--ascii", action="store_true", help="print subscripts as plain digits")
    ap.add_argument("--coefficients", action="store_true", help="also print the coefficient list")
    ap.add_argument("--masses", action="store_true", help="also print molar masses per constituent")
    ap.add_argument("-v", "--verbose", action="store_true")
    return ap


def main(argv: Sequence[str] | None = None) -> int:
    ap = _parser()
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        options = BalanceOptions(
            search_limit=args.search_limit,
            tolerance=args.tolerance,
            strategy=args.strategy,
        )
    except ValueError as e:
        ap.error(str(e))
    if args.table:
        try:
            table = ElementTable.from_json(args.table)
        except (OSError, ValueError, KeyError, TypeError) as e:
            ap.error(f"cannot load element table {args.table}: {e!r}")
    else:
        table = ElementTable.default()

    equations = args.equations or [line.strip() for line in sys.stdin]
    status = 0
    for text in equations:
        if not text:
            continue
        try:
            equation = balance_text(text, table, options)
        except BalanceError as e:
            print(f"error ({e.stage}): {text}: {e}", file=sys.stderr)
            status = 1
            continue

        print(render_equation(equation, table, ascii=args.ascii))
        if args.coefficients:
            print("  coefficients: " + " ".join(str(n) for n in equation.coefficients))
        if args.masses:
            for c in equation.constituents:
                label = render_constituent(c, table, ascii=args.ascii)
                print(f"  {label}: {table.molar_mass(c):.3f} g/mol")
    return status


if __name__ == "__main__":
    sys.exit(main())
