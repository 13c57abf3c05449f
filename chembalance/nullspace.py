"""Exact null space of a stoichiometry matrix.

Balances of an equation are the vectors v with S v = 0. When the null space
has dimension one the balance is unique up to scaling; a larger dimension
means the equation mixes several independent reactions and any positive
combination of the basis vectors balances it.

We provide:
- rational_nullspace(): rational basis via sympy
- primitive_integer_basis(): scale vectors to integer primitive form
- independent_balances(): the same, starting from an Equation
- positive_balance(): a strictly positive integer combination of a basis

NOTE: This is intended for the small matrices that chemical equations give.
"""

from __future__ import annotations

import itertools
from fractions import Fraction
from typing import Sequence

import numpy as np

from .formula import Equation
from .resolve import DEFAULT_SEARCH_LIMIT
from .stoichiometry import build_matrix
from .utils import lcm_list, primitive


def rational_nullspace(S: np.ndarray) -> list[list[Fraction]]:
    """Rational basis vectors v with S v = 0, as lists of Fractions."""
    import sympy as sp

    cells = [[Fraction(x) for x in row] for row in np.asarray(S, dtype=object)]
    if not cells:
        return []
    M = sp.Matrix([[sp.Rational(f.numerator, f.denominator) for f in row] for row in cells])
    return [[Fraction(int(x.p), int(x.q)) for x in v] for v in M.nullspace()]


def primitive_integer_basis(S: np.ndarray) -> list[list[int]]:
    """Return a primitive integer basis for the null space of S.

    For each rational basis vector:
    - scale by lcm of denominators
    - divide by gcd to get a primitive integer vector
    - make the first nonzero entry positive
    """
    basis: list[list[int]] = []
    for v in rational_nullspace(S):
        L = lcm_list([f.denominator for f in v])
        basis.append(primitive([int(f * L) for f in v]))
    return basis


def independent_balances(equation: Equation) -> list[list[int]]:
    """Primitive integer basis of the balances of `equation`.

    The length of the result is the number of degrees of freedom. Raises
    UnusedElement like build_matrix().
    """
    return primitive_integer_basis(build_matrix(equation).S)


def positive_balance(
    basis: Sequence[Sequence[int]],
    search_limit: int = DEFAULT_SEARCH_LIMIT,
) -> list[int] | None:
    """Smallest-weight integer combination of `basis` with every entry > 0.

    Weights are tried shell by shell, largest |weight| = 1, 2, ..., search_limit.
    Returns the primitive vector, or None when no combination in range works.
    """
    if not basis:
        return None
    n = len(basis[0])
    for m in range(1, search_limit + 1):
        for weights in itertools.product(range(-m, m + 1), repeat=len(basis)):
            if max(abs(w) for w in weights) != m:
                continue
            v = [sum(w * b[j] for w, b in zip(weights, basis)) for j in range(n)]
            if all(x > 0 for x in v):
                return primitive(v)
    return None
