"""Balancing pipeline.

  Equation -> build_matrix -> gauss_jordan -> solution_vector
           -> resolve_coefficients -> coefficients written back

Each stage raises its own BalanceError subclass; nothing is retried. The
equation is only touched after every coefficient has been computed and
checked, so a failure never leaves it half-updated.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from fractions import Fraction

import numpy as np

from .eliminate import gauss_jordan, solution_vector
from .errors import CoefficientInvariantError, ResolveError
from .formula import Equation
from .lexer import tokenize
from .nullspace import independent_balances, positive_balance
from .parse import parse_equation
from .periodic_table import ElementTable
from .resolve import DEFAULT_SEARCH_LIMIT, resolve_coefficients
from .stoichiometry import StoichiometryMatrix, build_matrix
from .utils import INTEGRAL_TOL

logger = logging.getLogger(__name__)

STRATEGIES = ("homogeneous", "anchored")


@dataclass(frozen=True)
class BalanceOptions:
    """Tunables of the pipeline.

    search_limit: largest scale factor the resolver tries.
    tolerance:    integrality tolerance for float solutions (Fractions are exact).
    strategy:     "homogeneous" solves S v = 0; "anchored" fixes the last
                  product's coefficient to 1 and solves S' v = b.
    """

    search_limit: int = DEFAULT_SEARCH_LIMIT
    tolerance: float = INTEGRAL_TOL
    strategy: str = "homogeneous"

    def __post_init__(self):
        if self.strategy not in STRATEGIES:
            raise ValueError(f"strategy must be one of {STRATEGIES}, got {self.strategy!r}")
        if self.search_limit < 1:
            raise ValueError(f"search_limit must be >= 1, got {self.search_limit}")
        if self.tolerance < 0:
            raise ValueError(f"tolerance must be >= 0, got {self.tolerance}")


def _conserves_atoms(matrix: StoichiometryMatrix, coefficients: list[int]) -> bool:
    c = np.array(coefficients, dtype=object)
    if matrix.anchored:
        residual = matrix.S.dot(c[:-1]) - matrix.rhs * c[-1]
    else:
        residual = matrix.S.dot(c)
    return all(x == 0 for x in residual)


def solve_coefficients(equation: Equation, options: BalanceOptions | None = None) -> list[int]:
    """Minimal positive integer coefficients for `equation`, reactants then products.

    With several degrees of freedom the free unknowns are first set to 1; if
    that cancels or flips a coefficient, the first strictly positive integer
    combination of independent_balances() is used instead.

    Does not modify the equation.
    """
    options = options or BalanceOptions()
    anchored = options.strategy == "anchored"

    matrix = build_matrix(equation, anchored=anchored)
    echelon = gauss_jordan(matrix.augmented(), augmented=anchored)
    solution = solution_vector(echelon)

    values = list(solution.values)
    if anchored:
        values.append(Fraction(1))

    dof = len(solution.free) + (1 if anchored else 0)
    if dof > 1:
        logger.warning(
            "equation has %d degrees of freedom; returning one of many valid balances", dof
        )

    try:
        coefficients = resolve_coefficients(
            values,
            solution.free,
            search_limit=options.search_limit,
            tolerance=options.tolerance,
        )
    except CoefficientInvariantError:
        # free unknowns all set to 1 can cancel a pivot; look for another combination
        if dof < 2:
            raise
        coefficients = positive_balance(independent_balances(equation), options.search_limit)
        if coefficients is None:
            raise
        logger.debug("using positive combination of the null-space basis: %s", coefficients)
    if not _conserves_atoms(matrix, coefficients):
        raise ResolveError(f"coefficients {coefficients} do not conserve atoms")
    return coefficients


def balance(equation: Equation, options: BalanceOptions | None = None) -> Equation:
    """Balance `equation` in place and return it."""
    coefficients = solve_coefficients(equation, options)
    for constituent, n in zip(equation.constituents, coefficients):
        constituent.coefficient = n
    return equation


def balanced(equation: Equation, options: BalanceOptions | None = None) -> Equation:
    """Return a balanced copy of `equation`; the input is left untouched."""
    return balance(copy.deepcopy(equation), options)


def balance_text(
    text: str,
    table: ElementTable | None = None,
    options: BalanceOptions | None = None,
) -> Equation:
    """Lex, parse and balance an equation string such as 'H2 + O2 -> H2O'."""
    if table is None:
        table = ElementTable.default()
    return balance(parse_equation(tokenize(text, table)), options)
