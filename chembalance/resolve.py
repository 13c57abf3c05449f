"""Rational solution -> minimal positive integer coefficients.

Given the particular solution from elimination (free unknowns set to 1), try
scale factors k = 1, 2, ..., search_limit and accept the first one that makes
every entry integral. Fractions are tested exactly; floats within `tolerance`
of the nearest integer. Free columns end up with the accepted k itself.

The scaled vector is then divided by the gcd of its entries, so no common
factor remains.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from .errors import ArithmeticOverflow, CoefficientInvariantError, NoIntegerSolutionFound
from .formula import MAX_COUNT
from .utils import INTEGRAL_TOL, canonical_sign, gcd_list, is_integral, to_int

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_LIMIT = 100


def resolve_coefficients(
    values: Sequence,
    free: Iterable[int] = (),
    *,
    search_limit: int = DEFAULT_SEARCH_LIMIT,
    tolerance: float = INTEGRAL_TOL,
) -> list[int]:
    """Scale a rational solution to minimal positive integers.

    Args:
        values: one entry per unknown; entries listed in `free` are ignored
            and stand for the value 1.
        free: indices of the unknowns left free by elimination.
        search_limit: largest scale factor tried.
        tolerance: integrality tolerance for float entries.

    Raises:
        NoIntegerSolutionFound: no k in 1..search_limit works.
        CoefficientInvariantError: an entry resolves to zero or a negative.
        ArithmeticOverflow: a coefficient exceeds MAX_COUNT.
    """
    if search_limit < 1:
        raise ValueError(f"search_limit must be >= 1, got {search_limit}")

    free = set(free)
    w = canonical_sign([1 if i in free else v for i, v in enumerate(values)])

    for k in range(1, search_limit + 1):
        scaled = [k * x for x in w]
        if all(is_integral(x, tolerance) for x in scaled):
            break
    else:
        raise NoIntegerSolutionFound(search_limit)

    coefficients = [to_int(x) for x in scaled]
    for i, c in enumerate(coefficients):
        if c < 1:
            raise CoefficientInvariantError(i, c)
        if c > MAX_COUNT:
            raise ArithmeticOverflow(c, MAX_COUNT, stage="resolve")

    g = gcd_list(coefficients)
    logger.debug("accepted scale factor k=%d, common factor %d", k, g)
    return [c // g for c in coefficients]
