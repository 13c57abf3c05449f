from __future__ import annotations

import logging
from dataclasses import dataclass
from fractions import Fraction

import numpy as np

from .errors import UnusedElement
from .formula import Equation, elements_of

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoichiometryMatrix:
    """Element-by-constituent atom-count matrix of one equation.

    Rows follow `elements` (ascending atomic number), columns follow the
    equation's constituents: reactants first, then products. Reactant entries
    are positive and product entries negated, so a balance is a vector v with

      S v = 0                     (homogeneous)
      S v = rhs                   (anchored: last product fixed to 1)

    Shapes:
      S:   (nE, nC) object array of Fraction
      rhs: (nE,) or None

    In the anchored form the anchor column is not part of S; nC is then one
    less than the number of constituents.
    """

    S: np.ndarray
    elements: tuple[int, ...]
    n_reactants: int
    rhs: np.ndarray | None = None

    def __post_init__(self):
        S = np.asarray(self.S, dtype=object)
        if S.ndim != 2 or S.shape[0] != len(self.elements):
            raise ValueError(f"S has shape {S.shape} but there are {len(self.elements)} elements")
        object.__setattr__(self, "S", S)
        object.__setattr__(self, "elements", tuple(self.elements))
        if self.rhs is not None:
            rhs = np.asarray(self.rhs, dtype=object)
            if rhs.shape != (S.shape[0],):
                raise ValueError(f"rhs has shape {rhs.shape} but S has {S.shape[0]} rows")
            object.__setattr__(self, "rhs", rhs)

    @property
    def nE(self) -> int:
        return int(self.S.shape[0])

    @property
    def nC(self) -> int:
        return int(self.S.shape[1])

    @property
    def anchored(self) -> bool:
        return self.rhs is not None

    def augmented(self) -> np.ndarray:
        """[S | rhs] for the anchored form, a copy of S otherwise."""
        if self.rhs is None:
            return self.S.copy()
        return np.column_stack([self.S, self.rhs])


def _side_counts(side) -> list[dict[int, int]]:
    return [elements_of(c, include_coefficient=False) for c in side]


def _union(counts: list[dict[int, int]]) -> set[int]:
    out: set[int] = set()
    for c in counts:
        out.update(c)
    return out


def build_matrix(equation: Equation, *, anchored: bool = False) -> StoichiometryMatrix:
    """Build the stoichiometry matrix of `equation`.

    Columns use per-unit formula counts; coefficients already present on the
    constituents are ignored, so balancing a balanced equation is a no-op.

    Raises:
        UnusedElement: an element occurs on only one side.
        ArithmeticOverflow: an atom count exceeds MAX_COUNT.
    """
    left = _side_counts(equation.reactants)
    right = _side_counts(equation.products)

    left_elements = _union(left)
    right_elements = _union(right)

    only_right = sorted(right_elements - left_elements)
    if only_right:
        raise UnusedElement(only_right[0], "products")
    only_left = sorted(left_elements - right_elements)
    if only_left:
        raise UnusedElement(only_left[0], "reactants")

    elements = sorted(left_elements)
    row = {e: i for i, e in enumerate(elements)}

    columns: list[dict[int, int]] = []
    for counts in left:
        columns.append(counts)
    for counts in right:
        columns.append({e: -n for e, n in counts.items()})

    full = np.full((len(elements), len(columns)), Fraction(0), dtype=object)
    for j, counts in enumerate(columns):
        for e, n in counts.items():
            full[row[e], j] = Fraction(n)

    if not anchored:
        logger.debug("stoichiometry matrix %s for elements %s", full.shape, elements)
        return StoichiometryMatrix(S=full, elements=elements, n_reactants=len(left))

    # Fix the last product's coefficient to 1 and move its column to the right.
    rhs = -full[:, -1]
    S = full[:, :-1]
    logger.debug("anchored stoichiometry matrix %s for elements %s", S.shape, elements)
    return StoichiometryMatrix(S=S, elements=elements, n_reactants=len(left), rhs=rhs)

