"""Formula model: components, groups, constituents and equations.

An element is referenced by its atomic number only; names, symbols and masses
live in the element table (see periodic_table.py).

  Component   (element, count)            H2      -> Component(1, 2)
  Group       (members, multiplier)       (PO4)2  -> Group((P1, O4), 2)
  Constituent (coefficient, components)   2H2O
  Equation    (reactants, products)

Atom counts are derived on demand and never stored. Every multiplication is
checked against MAX_COUNT (the unsigned 64-bit range) so a wrapped count can
never reach the solver.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Union

from .errors import ArithmeticOverflow

MAX_COUNT = 2**64 - 1


def checked_mul(*factors: int, stage: str = "build") -> int:
    """Multiply positive integers, raising ArithmeticOverflow above MAX_COUNT."""
    out = 1
    for f in factors:
        out *= f
        if out > MAX_COUNT:
            raise ArithmeticOverflow(out, MAX_COUNT, stage=stage)
    return out


def checked_add(a: int, b: int, stage: str = "build") -> int:
    out = a + b
    if out > MAX_COUNT:
        raise ArithmeticOverflow(out, MAX_COUNT, stage=stage)
    return out


def _require_positive(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")


@dataclass(frozen=True)
class Component:
    element: int
    count: int = 1

    def __post_init__(self):
        _require_positive("element", self.element)
        _require_positive("count", self.count)


@dataclass(frozen=True)
class Group:
    """Parenthesised sub-formula, e.g. (PO4)2."""

    members: tuple[Component, ...]
    multiplier: int = 1

    def __post_init__(self):
        members = tuple(self.members)
        if not members:
            raise ValueError("a group needs at least one member")
        for m in members:
            if not isinstance(m, Component):
                raise ValueError(f"group members must be Components, got {m!r}")
        object.__setattr__(self, "members", members)
        _require_positive("multiplier", self.multiplier)


CompositeComponent = Union[Component, Group]


@dataclass
class Constituent:
    """One side-member of an equation, e.g. 2H2O.

    `coefficient` is the only field the balancer ever rewrites.
    """

    coefficient: int = 1
    components: list[CompositeComponent] = field(default_factory=list)

    def __post_init__(self):
        _require_positive("coefficient", self.coefficient)
        self.components = list(self.components)


@dataclass
class Equation:
    reactants: list[Constituent] = field(default_factory=list)
    products: list[Constituent] = field(default_factory=list)

    @property
    def constituents(self) -> list[Constituent]:
        """Reactants followed by products: the matrix column order."""
        return [*self.reactants, *self.products]

    @property
    def coefficients(self) -> list[int]:
        return [c.coefficient for c in self.constituents]

    def elements(self) -> list[int]:
        """Distinct elements of both sides, ascending by atomic number."""
        seen: set[int] = set()
        for c in self.constituents:
            seen.update(elements_of(c, include_coefficient=False))
        return sorted(seen)


def elements_of(
    constituent: Constituent,
    *,
    include_coefficient: bool = True,
) -> dict[int, int]:
    """Atom count per element for one constituent.

    A Component contributes count * coefficient; a Group contributes
    member.count * multiplier * coefficient for each member. With
    include_coefficient=False the coefficient is taken as 1 (formula counts).
    """
    coefficient = constituent.coefficient if include_coefficient else 1
    counts: dict[int, int] = {}
    for comp in constituent.components:
        if isinstance(comp, Group):
            for m in comp.members:
                n = checked_mul(m.count, comp.multiplier, coefficient)
                counts[m.element] = checked_add(counts.get(m.element, 0), n)
        else:
            n = checked_mul(comp.count, coefficient)
            counts[comp.element] = checked_add(counts.get(comp.element, 0), n)
    return counts


def total_element_counts(side: Iterable[Constituent]) -> dict[int, int]:
    """Sum elements_of over one side of an equation."""
    totals: dict[int, int] = {}
    for constituent in side:
        for element, n in elements_of(constituent).items():
            totals[element] = checked_add(totals.get(element, 0), n)
    return totals


def is_balanced(equation: Equation) -> bool:
    """True if every element has the same atom count on both sides."""
    if not equation.reactants or not equation.products:
        return False
    return total_element_counts(equation.reactants) == total_element_counts(equation.products)
