"""Equation parser: token stream shapes and parse errors."""

from __future__ import annotations

import pytest

from chembalance.errors import DuplicateArrow, ParseError, UnexpectedEndOfInput, UnexpectedToken
from chembalance.formula import Component, Constituent, Group
from chembalance.parse import parse_equation
from chembalance.tokens import Token, TokenKind

H2 = Token.component(Component(1, 2))
O = Token.component(Component(8, 1))
O2 = Token.component(Component(8, 2))
PLUS = Token.plus()
ARROW = Token.arrow()


def test_water():
    eq = parse_equation([H2, PLUS, O2, ARROW, H2, O])

    assert len(eq.reactants) == 2
    assert len(eq.products) == 1
    assert eq.reactants[0] == Constituent(1, [Component(1, 2)])
    assert eq.reactants[1] == Constituent(1, [Component(8, 2)])
    assert eq.products[0] == Constituent(1, [Component(1, 2), Component(8, 1)])


def test_explicit_coefficients_and_groups():
    group = Group((Component(15), Component(8, 4)), 2)
    tokens = [
        Token.coefficient(2), H2, PLUS, O2, ARROW,
        Token.coefficient(2), H2, O, PLUS, Token.component(group),
    ]
    eq = parse_equation(iter(tokens))

    assert eq.coefficients == [2, 1, 2, 1]
    assert eq.products[1].components == [group]


def test_no_arrow_leaves_products_empty():
    eq = parse_equation([H2, PLUS, O2])
    assert len(eq.reactants) == 2
    assert eq.products == []


def test_duplicate_arrow():
    with pytest.raises(DuplicateArrow):
        parse_equation([H2, ARROW, H2, ARROW, H2])


@pytest.mark.parametrize(
    "tokens",
    [
        [],
        [H2, PLUS],
        [H2, ARROW],
        [H2, ARROW, O2, PLUS],
        [Token.coefficient(3)],
    ],
)
def test_unexpected_end(tokens):
    with pytest.raises(UnexpectedEndOfInput):
        parse_equation(tokens)


def test_unexpected_token_reports_the_token():
    with pytest.raises(UnexpectedToken) as exc:
        parse_equation([Token.coefficient(2), PLUS, H2])
    assert exc.value.token.kind is TokenKind.PLUS

    with pytest.raises(UnexpectedToken):
        parse_equation([PLUS, H2])
    with pytest.raises(UnexpectedToken):
        parse_equation([Token.coefficient(2), Token.coefficient(3), H2])
    with pytest.raises(UnexpectedToken):
        parse_equation([H2, Token.coefficient(2), O2])


def test_parse_errors_are_value_errors():
    with pytest.raises(ValueError) as exc:
        parse_equation([])
    assert isinstance(exc.value, ParseError)
    assert exc.value.stage == "parse"


def test_coefficient_token_rejects_zero():
    with pytest.raises(ValueError):
        Token.coefficient(0)


def test_component_token_rejects_other_values():
    with pytest.raises(ValueError):
        Token.component("H2")
    with pytest.raises(ValueError):
        Token.component(1)


def test_component_token_built_by_hand_is_checked_by_parser():
    bad = Token(TokenKind.COMPONENT, "H2")
    with pytest.raises(UnexpectedToken) as exc:
        parse_equation([bad, ARROW, H2])
    assert exc.value.token == bad
