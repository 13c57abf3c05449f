"""Token stream consumed by the equation parser.

The parser never sees characters. A lexer (lexer.py for plain strings, or any
other front end) resolves element symbols, subscripts and groups first and
hands over a flat sequence of:

  COEFFICIENT(int) | COMPONENT(Component | Group) | PLUS | ARROW
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .formula import Component, CompositeComponent, Group


class TokenKind(Enum):
    COEFFICIENT = "coefficient"
    COMPONENT = "component"
    PLUS = "plus"
    ARROW = "arrow"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: Any = None

    @classmethod
    def coefficient(cls, n: int) -> "Token":
        if isinstance(n, bool) or not isinstance(n, int) or n < 1:
            raise ValueError(f"coefficient must be a positive integer, got {n!r}")
        return cls(TokenKind.COEFFICIENT, n)

    @classmethod
    def component(cls, c: CompositeComponent) -> "Token":
        if not isinstance(c, (Component, Group)):
            raise ValueError(f"component must be a Component or Group, got {c!r}")
        return cls(TokenKind.COMPONENT, c)

    @classmethod
    def plus(cls) -> "Token":
        return cls(TokenKind.PLUS)

    @classmethod
    def arrow(cls) -> "Token":
        return cls(TokenKind.ARROW)

    def __str__(self) -> str:
        if self.value is None:
            return self.kind.name
        return f"{self.kind.name}({self.value})"
