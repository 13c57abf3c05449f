"""Chemical equation balancing.

Core contract:
- inputs: a token stream (or a plain string via the lexer)
- workflow: parse -> stoichiometry matrix -> Gauss-Jordan -> integer coefficients
- output: the same Equation with minimal positive integer coefficients

Rows of the stoichiometry matrix are elements (ascending atomic number),
columns are constituents (reactants, then products, products negated).
"""

from .balance import BalanceOptions, balance, balance_text, balanced, solve_coefficients
from .errors import (
    ArithmeticOverflow,
    BalanceError,
    CoefficientInvariantError,
    DuplicateArrow,
    ElementNotFound,
    LexError,
    NoIntegerSolutionFound,
    ParseError,
    SingularWithoutSolution,
    UnexpectedEndOfInput,
    UnexpectedToken,
    UnusedElement,
)
from .formula import (
    Component,
    Constituent,
    Equation,
    Group,
    elements_of,
    is_balanced,
    total_element_counts,
)
from .lexer import tokenize
from .nullspace import independent_balances
from .parse import parse_equation
from .periodic_table import Element, ElementTable
from .render import render_equation
from .tokens import Token, TokenKind
