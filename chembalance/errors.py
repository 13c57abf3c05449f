"""Error taxonomy for the balancing pipeline.

Every failure raised by this package derives from BalanceError and records the
pipeline stage it came from:

  lex -> parse -> build -> eliminate -> resolve

Each class also derives from the closest builtin (ValueError, LookupError,
OverflowError, ArithmeticError) so callers that only know the builtins still
catch them.
"""

from __future__ import annotations

from typing import Any


class BalanceError(Exception):
    """Base class. `stage` names the step of the pipeline that failed."""

    stage = "balance"


# =============================================================================
# Raw text -> tokens
# =============================================================================
class LexError(BalanceError, ValueError):
    stage = "lex"


class ElementNotFound(LexError, LookupError):
    def __init__(self, key: Any):
        self.key = key
        super().__init__(f"unknown element: {key!r}")


# =============================================================================
# Tokens -> Equation
# =============================================================================
class ParseError(BalanceError, ValueError):
    stage = "parse"


class UnexpectedToken(ParseError):
    def __init__(self, token: Any):
        self.token = token
        super().__init__(f"unexpected token: {token}")


class DuplicateArrow(ParseError):
    def __init__(self):
        super().__init__("equation contains more than one arrow")


class UnexpectedEndOfInput(ParseError):
    def __init__(self):
        super().__init__("unexpected end of input, expected a constituent")


# =============================================================================
# Equation -> matrix
# =============================================================================
class BuildError(BalanceError, ValueError):
    stage = "build"


class UnusedElement(BuildError):
    def __init__(self, element: int, side: str):
        self.element = element
        self.side = side
        other = "reactants" if side == "products" else "products"
        super().__init__(
            f"element {element} appears in the {side} but not in the {other}"
        )


class ArithmeticOverflow(BalanceError, OverflowError):
    stage = "build"

    def __init__(self, value: int, limit: int, stage: str = "build"):
        self.value = value
        self.limit = limit
        self.stage = stage
        super().__init__(f"count {value} exceeds the representable maximum {limit}")


# =============================================================================
# Elimination
# =============================================================================
class SolveError(BalanceError, ArithmeticError):
    stage = "eliminate"


class SingularWithoutSolution(SolveError):
    pass


# =============================================================================
# Rational solution -> integer coefficients
# =============================================================================
class ResolveError(BalanceError, ArithmeticError):
    stage = "resolve"


class NoIntegerSolutionFound(ResolveError):
    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"no integer scaling found for factors 1..{limit}")


class CoefficientInvariantError(ResolveError):
    """A resolved coefficient is not a positive integer."""

    def __init__(self, index: int, value: Any):
        self.index = index
        self.value = value
        super().__init__(f"coefficient {index} resolved to {value}, expected >= 1")
