"""Shared integer and rational helpers.

This module provides common functions used across the package:
- Tolerance constant for floating point comparisons
- GCD / LCM over lists
- Integrality tests for Fraction and float entries
- Vector canonicalization (sign normalization, primitive form)
"""

from __future__ import annotations

from functools import reduce
from math import gcd
from numbers import Integral, Rational
from typing import Sequence

# =============================================================================
# Tolerance constant for floating point comparisons
# =============================================================================
INTEGRAL_TOL = 1e-4


# =============================================================================
# Helper functions for integer operations
# =============================================================================
def _lcm(a: int, b: int) -> int:
    return abs(a * b) // gcd(a, b) if a and b else abs(a or b)


def lcm_list(xs: Sequence[int]) -> int:
    """Compute LCM of a list of integers (1 for an empty list)."""
    return reduce(_lcm, xs, 1)


def gcd_list(xs: Sequence[int]) -> int:
    """Compute GCD of the non-zero entries (1 if there are none)."""
    xs = [abs(x) for x in xs if x != 0]
    return reduce(gcd, xs, 0) if xs else 1


def primitive(v: Sequence[int]) -> list[int]:
    """Divide an integer vector by its GCD and make the first nonzero positive."""
    g = gcd_list(v)
    out = [x // g for x in v]
    return canonical_sign(out)


def canonical_sign(v: Sequence) -> list:
    """Flip the sign of the whole vector so its first nonzero entry is positive."""
    out = list(v)
    for x in out:
        if x != 0:
            if x < 0:
                out = [-y for y in out]
            break
    return out


# =============================================================================
# Integrality
# =============================================================================
def is_integral(x, tol: float = INTEGRAL_TOL) -> bool:
    """Exact for ints and Fractions; within `tol` of the nearest integer for floats."""
    if isinstance(x, Integral):
        return True
    if isinstance(x, Rational):
        return x.denominator == 1
    return abs(float(x) - round(float(x))) <= tol


def to_int(x) -> int:
    if isinstance(x, Integral):
        return int(x)
    if isinstance(x, Rational):
        return x.numerator // x.denominator
    return int(round(float(x)))
