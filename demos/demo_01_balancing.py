#!/usr/bin/env python3
"""
Demo 1: Balancing Textbook Equations
====================================

Each equation goes through the whole pipeline:
  text -> tokens -> Equation -> stoichiometry matrix -> Gauss-Jordan -> integers

For every equation we print the stoichiometry matrix (rows = elements,
columns = constituents, products negated), the balanced equation and the
number of degrees of freedom from the exact null space.
"""

import argparse

from chembalance import BalanceOptions, ElementTable, balance_text, independent_balances
from chembalance.errors import BalanceError
from chembalance.lexer import tokenize
from chembalance.parse import parse_equation
from chembalance.render import render_equation
from chembalance.stoichiometry import build_matrix

EQUATIONS = [
    "H2 + O2 -> H2O",
    "KOH + H3PO4 -> K3PO4 + H2O",
    "CaCl2 + Na3PO4 -> Ca3(PO4)2 + NaCl",
    "KMnO4 + HCl -> KCl + MnCl2 + H2O + Cl2",
    "H2 + O2 -> H2O + H2O2",
    "H2 -> H2O",
]


def show_matrix(text, table):
    eq = parse_equation(tokenize(text, table))
    m = build_matrix(eq)
    for e, row in zip(m.elements, m.S):
        symbol = table.lookup(e).symbol
        print(f"  {symbol:>2} | " + " ".join(f"{str(x):>3}" for x in row))


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--strategy", choices=["homogeneous", "anchored"], default="homogeneous")
    ap.add_argument("--ascii", action="store_true")
    args = ap.parse_args()

    table = ElementTable.default()
    options = BalanceOptions(strategy=args.strategy)

    print("=" * 60)
    print(f"Demo 1: Balancing Textbook Equations ({args.strategy})")
    print("=" * 60)

    for text in EQUATIONS:
        print(f"\n{text}")
        try:
            show_matrix(text, table)
            eq = balance_text(text, table, options)
        except BalanceError as e:
            print(f"  ✗ {e.stage}: {e}")
            continue
        dof = len(independent_balances(eq))
        print(f"  ✓ {render_equation(eq, table, ascii=args.ascii)}   (degrees of freedom: {dof})")


if __name__ == "__main__":
    main()
