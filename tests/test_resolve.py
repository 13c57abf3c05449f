"""Integer coefficient resolver: scalar search, free columns, minimality."""

from __future__ import annotations

from fractions import Fraction

import pytest

from chembalance.errors import (
    ArithmeticOverflow,
    CoefficientInvariantError,
    NoIntegerSolutionFound,
    ResolveError,
)
from chembalance.formula import MAX_COUNT
from chembalance.resolve import resolve_coefficients


def test_free_column_takes_the_scale_factor():
    # H2 + O2 -> H2O: (1, 1/2, free)
    assert resolve_coefficients([Fraction(1), Fraction(1, 2), Fraction(0)], free=[2]) == [2, 1, 2]


def test_integral_solution_needs_no_scaling():
    assert resolve_coefficients([3, 1, 1, 0], free=[3]) == [3, 1, 1, 1]


def test_float_solution_within_tolerance():
    out = resolve_coefficients([1.00002, 0.49999, 0.0], free=[2], tolerance=1e-4)
    assert out == [2, 1, 2]


def test_search_limit_exhausted():
    with pytest.raises(NoIntegerSolutionFound) as exc:
        resolve_coefficients([Fraction(1, 7), Fraction(0)], free=[1], search_limit=5)
    assert exc.value.limit == 5
    assert exc.value.stage == "resolve"
    assert isinstance(exc.value, ResolveError)

    assert resolve_coefficients([Fraction(1, 7), Fraction(0)], free=[1], search_limit=7) == [1, 7]


def test_zero_pivot_is_not_replaced():
    with pytest.raises(CoefficientInvariantError) as exc:
        resolve_coefficients([Fraction(0), Fraction(1)], free=[])
    assert exc.value.index == 0


def test_mixed_signs_are_rejected():
    with pytest.raises(CoefficientInvariantError) as exc:
        resolve_coefficients([Fraction(-1), Fraction(0)], free=[1])
    assert exc.value.index == 1


def test_overall_sign_is_dropped_and_common_factor_removed():
    assert resolve_coefficients([Fraction(-2), Fraction(-4)]) == [1, 2]
    assert resolve_coefficients([4, 6]) == [2, 3]


def test_coefficient_overflow():
    with pytest.raises(ArithmeticOverflow) as exc:
        resolve_coefficients([MAX_COUNT + 1, 1])
    assert exc.value.stage == "resolve"


def test_search_limit_must_be_positive():
    with pytest.raises(ValueError):
        resolve_coefficients([1], search_limit=0)
