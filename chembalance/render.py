"""Human-readable equations.

  2H₂ + O₂ = 2H₂O
  3CaCl₂ + 2Na₃PO₄ = Ca₃(PO₄)₂ + 6NaCl

Coefficients of 1 and subscripts of 1 are omitted. With ascii=True subscripts
are printed as plain digits (2H2 + O2 = 2H2O). Both forms lex back to the same
equation.
"""

from __future__ import annotations

from .formula import Component, Constituent, Equation, Group
from .periodic_table import ElementTable

_SUBSCRIPTS = str.maketrans("0123456789", "₀₁₂₃₄₅₆₇₈₉")


def subscript_digits(n: int) -> str:
    """12 -> '₁₂'."""
    return str(n).translate(_SUBSCRIPTS)


def _count(n: int, ascii: bool) -> str:
    if n == 1:
        return ""
    return str(n) if ascii else subscript_digits(n)


def _component(comp: Component, table: ElementTable, ascii: bool) -> str:
    return table.lookup(comp.element).symbol + _count(comp.count, ascii)


def render_constituent(constituent: Constituent, table: ElementTable, *, ascii: bool = False) -> str:
    out = [] if constituent.coefficient == 1 else [str(constituent.coefficient)]
    for comp in constituent.components:
        if isinstance(comp, Group):
            inner = "".join(_component(m, table, ascii) for m in comp.members)
            out.append(f"({inner}){_count(comp.multiplier, ascii)}")
        else:
            out.append(_component(comp, table, ascii))
    return "".join(out)


def render_equation(equation: Equation, table: ElementTable | None = None, *, ascii: bool = False) -> str:
    """Raises ElementNotFound if the table lacks one of the elements."""
    if table is None:
        table = ElementTable.default()
    left = " + ".join(render_constituent(c, table, ascii=ascii) for c in equation.reactants)
    if not equation.products:
        return left
    right = " + ".join(render_constituent(c, table, ascii=ascii) for c in equation.products)
    return f"{left} = {right}"
