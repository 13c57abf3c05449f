"""Stoichiometry matrix: element rows, signed constituent columns."""

from __future__ import annotations

from fractions import Fraction

import numpy as np
import pytest

from chembalance.errors import BuildError, UnusedElement
from chembalance.formula import Component, Constituent, Equation, Group
from chembalance.stoichiometry import StoichiometryMatrix, build_matrix


def water(coefficients=(1, 1, 1)) -> Equation:
    # H2 + O2 -> H2O
    a, b, c = coefficients
    return Equation(
        reactants=[Constituent(a, [Component(1, 2)]), Constituent(b, [Component(8, 2)])],
        products=[Constituent(c, [Component(1, 2), Component(8, 1)])],
    )


def test_water():
    m = build_matrix(water())

    assert m.elements == (1, 8)
    assert m.n_reactants == 2
    assert (m.nE, m.nC) == (2, 3)
    assert not m.anchored
    assert np.array_equal(m.S, np.array([[2, 0, -2], [0, 2, -1]]))
    assert all(isinstance(x, Fraction) for x in m.S.flat)


def test_existing_coefficients_are_ignored():
    assert np.array_equal(build_matrix(water((2, 1, 2))).S, build_matrix(water()).S)


def test_anchored_moves_last_product_to_rhs():
    m = build_matrix(water(), anchored=True)

    assert m.anchored
    assert np.array_equal(m.S, np.array([[2, 0], [0, 2]]))
    assert m.rhs.tolist() == [2, 1]
    assert np.array_equal(m.augmented(), np.array([[2, 0, 2], [0, 2, 1]]))


def test_group_counts_and_row_order():
    # CaCl2 + Na3PO4 -> Ca3(PO4)2 + NaCl
    eq = Equation(
        reactants=[
            Constituent(1, [Component(20), Component(17, 2)]),
            Constituent(1, [Component(11, 3), Component(15), Component(8, 4)]),
        ],
        products=[
            Constituent(1, [Component(20, 3), Group((Component(15), Component(8, 4)), 2)]),
            Constituent(1, [Component(11), Component(17)]),
        ],
    )
    m = build_matrix(eq)

    assert m.elements == (8, 11, 15, 17, 20)
    expected = np.array([
        [0, 4, -8,  0],   # O
        [0, 3,  0, -1],   # Na
        [0, 1, -2,  0],   # P
        [2, 0,  0, -1],   # Cl
        [1, 0, -3,  0],   # Ca
    ])
    assert np.array_equal(m.S, expected)


def test_element_only_in_products():
    # H2 -> H2O
    eq = Equation(
        reactants=[Constituent(1, [Component(1, 2)])],
        products=[Constituent(1, [Component(1, 2), Component(8)])],
    )
    with pytest.raises(UnusedElement) as exc:
        build_matrix(eq)
    assert exc.value.element == 8
    assert exc.value.side == "products"
    assert exc.value.stage == "build"
    assert isinstance(exc.value, BuildError)


def test_element_only_in_reactants():
    # H2 + He -> H2
    eq = Equation(
        reactants=[Constituent(1, [Component(1, 2)]), Constituent(1, [Component(2)])],
        products=[Constituent(1, [Component(1, 2)])],
    )
    with pytest.raises(UnusedElement) as exc:
        build_matrix(eq)
    assert (exc.value.element, exc.value.side) == (2, "reactants")


def test_missing_products():
    eq = Equation(reactants=[Constituent(1, [Component(1, 2)])])
    with pytest.raises(UnusedElement):
        build_matrix(eq)


def test_container_checks_shapes():
    with pytest.raises(ValueError):
        StoichiometryMatrix(S=np.zeros((2, 3)), elements=(1,), n_reactants=1)
    with pytest.raises(ValueError):
        StoichiometryMatrix(S=np.zeros((2, 3)), elements=(1, 8), n_reactants=1, rhs=np.zeros(3))
