"""Gauss-Jordan elimination over exact rationals.

Input is either a homogeneous matrix S (solve S v = 0) or an augmented matrix
[S | b] (solve S v = b). The reduced row-echelon form tells us which columns
are pivots and which are free; solution_vector() then reads off one particular
solution with every free unknown set to 1.

Entries are Fractions in a numpy object array. Floats are accepted too, in
which case zero tests use PIVOT_TOL instead of exact comparison.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from fractions import Fraction
from numbers import Integral, Rational

import numpy as np

from .errors import SingularWithoutSolution

logger = logging.getLogger(__name__)

PIVOT_TOL = 1e-12


def _to_number(x):
    if isinstance(x, Integral):
        return Fraction(int(x))
    if isinstance(x, Rational):
        return Fraction(int(x.numerator), int(x.denominator))
    return float(x)


def _is_zero(x) -> bool:
    if isinstance(x, float):
        return abs(x) <= PIVOT_TOL
    return x == 0


@dataclass(frozen=True)
class RowEchelon:
    """Reduced row-echelon form.

    R:          (m, n) or (m, n+1) when augmented
    pivots:     pivot column of rows 0..rank-1
    n_unknowns: n
    """

    R: np.ndarray
    pivots: tuple[int, ...]
    n_unknowns: int
    augmented: bool = False

    @property
    def rank(self) -> int:
        return len(self.pivots)

    @property
    def free(self) -> tuple[int, ...]:
        pivots = set(self.pivots)
        return tuple(j for j in range(self.n_unknowns) if j not in pivots)


@dataclass(frozen=True)
class Solution:
    """Particular solution read off a RowEchelon.

    Free unknowns are reported as 0 in `values` and listed in `free`; every
    pivot value was computed with the free unknowns set to 1.
    """

    values: tuple
    free: tuple[int, ...]


def gauss_jordan(A: np.ndarray, *, augmented: bool = False) -> RowEchelon:
    """Reduce A (copied, not mutated) to reduced row-echelon form.

    Pivot search scans columns left to right and takes the first row at or
    below the current pivot row with a nonzero entry.

    Raises:
        SingularWithoutSolution: augmented system with a row 0 = b, b != 0.
    """
    A = np.asarray(A, dtype=object)
    if A.ndim != 2:
        raise ValueError(f"expected a 2-D matrix, got shape {A.shape}")
    m, n = A.shape
    R = np.empty((m, n), dtype=object)
    for i in range(m):
        for j in range(n):
            R[i, j] = _to_number(A[i, j])

    n_unknowns = n - 1 if augmented else n
    pcount = 0
    pivots: list[int] = []

    for j in range(n_unknowns):
        if pcount >= m:
            break

        pidx = -1
        for i in range(pcount, m):
            if not _is_zero(R[i, j]):
                pidx = i
                break
        if pidx < 0:
            continue

        if pidx != pcount:
            R[[pcount, pidx]] = R[[pidx, pcount]]

        R[pcount] = R[pcount] / R[pcount, j]
        for i in range(m):
            if i == pcount or _is_zero(R[i, j]):
                continue
            R[i] = R[i] - R[i, j] * R[pcount]

        pivots.append(j)
        pcount += 1

    if augmented:
        for i in range(pcount, m):
            if not _is_zero(R[i, n - 1]):
                raise SingularWithoutSolution(
                    f"row {i} reduces to 0 = {R[i, n - 1]}; the system is inconsistent"
                )

    logger.debug("eliminated %dx%d matrix: pivots=%s", m, n, pivots)
    return RowEchelon(R=R, pivots=tuple(pivots), n_unknowns=n_unknowns, augmented=augmented)


def solution_vector(echelon: RowEchelon) -> Solution:
    """One solution of the reduced system, free unknowns set to 1.

    Raises:
        SingularWithoutSolution: homogeneous system with no free unknown (only
        the zero vector solves it).
    """
    free = echelon.free
    if not echelon.augmented and not free:
        raise SingularWithoutSolution("the homogeneous system has only the trivial solution")

    R = echelon.R
    values: list = [Fraction(0)] * echelon.n_unknowns
    for row, p in enumerate(echelon.pivots):
        v = R[row, -1] if echelon.augmented else Fraction(0)
        for f in free:
            v = v - R[row, f]
        values[p] = v

    logger.debug("pivot columns %s, free columns %s", echelon.pivots, free)
    return Solution(values=tuple(values), free=free)
