"""Gauss-Jordan elimination and particular solutions."""

from __future__ import annotations

from fractions import Fraction

import numpy as np
import pytest

from chembalance.eliminate import gauss_jordan, solution_vector
from chembalance.errors import SingularWithoutSolution, SolveError


def test_water_reduces_to_rref():
    S = np.array([[2, 0, -2], [0, 2, -1]], dtype=object)
    ech = gauss_jordan(S)

    assert ech.pivots == (0, 1)
    assert ech.free == (2,)
    assert ech.rank == 2
    assert ech.R.tolist() == [[1, 0, -1], [0, 1, Fraction(-1, 2)]]

    # input untouched
    assert S.tolist() == [[2, 0, -2], [0, 2, -1]]


def test_solution_sets_free_unknowns_to_one():
    ech = gauss_jordan(np.array([[2, 0, -2], [0, 2, -1]]))
    sol = solution_vector(ech)

    assert sol.values == (1, Fraction(1, 2), 0)
    assert sol.free == (2,)


def test_row_swap_and_zero_rows():
    A = np.array([[0, 2, -2], [0, 1, -1], [3, 0, -3]])
    ech = gauss_jordan(A)

    assert ech.pivots == (0, 1)
    assert ech.R.tolist() == [[1, 0, -1], [0, 1, -1], [0, 0, 0]]
    assert solution_vector(ech).values == (1, 1, 0)


def test_homogeneous_full_rank_has_only_trivial_solution():
    ech = gauss_jordan(np.array([[1, -2], [1, -1]]))
    assert ech.free == ()
    with pytest.raises(SingularWithoutSolution) as exc:
        solution_vector(ech)
    assert exc.value.stage == "eliminate"
    assert isinstance(exc.value, SolveError)


def test_augmented_consistent():
    ech = gauss_jordan(np.array([[2, 0, 2], [0, 2, 1]]), augmented=True)
    sol = solution_vector(ech)

    assert ech.n_unknowns == 2
    assert sol.values == (1, Fraction(1, 2))
    assert sol.free == ()


def test_augmented_inconsistent():
    with pytest.raises(SingularWithoutSolution):
        gauss_jordan(np.array([[1, 1, 1], [2, 2, 3]]), augmented=True)


def test_float_input():
    ech = gauss_jordan(np.array([[2.0, 0.0, -2.0], [0.0, 2.0, -1.0]]))
    sol = solution_vector(ech)
    assert np.allclose([float(x) for x in sol.values], [1.0, 0.5, 0.0])
