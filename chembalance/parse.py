"""Token stream -> Equation.

Grammar:
  equation    := constituent (PLUS constituent)* (ARROW constituent (PLUS constituent)*)?
  constituent := COEFFICIENT? COMPONENT+

Single pass, one token of lookahead, no recovery: a malformed stream raises and
no partial Equation escapes.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from .errors import DuplicateArrow, UnexpectedEndOfInput, UnexpectedToken
from .formula import Component, Constituent, Equation, Group
from .tokens import Token, TokenKind


class _Lookahead:
    def __init__(self, tokens: Iterable[Token]):
        self._it: Iterator[Token] = iter(tokens)
        self._peek: Token | None = None
        self._done = False

    def peek(self) -> Token | None:
        if self._peek is None and not self._done:
            try:
                self._peek = next(self._it)
            except StopIteration:
                self._done = True
        return self._peek

    def next(self) -> Token | None:
        token = self.peek()
        self._peek = None
        return token


def parse_constituent(stream: _Lookahead) -> Constituent:
    """Parse `COEFFICIENT? COMPONENT+`; the coefficient defaults to 1."""
    token = stream.peek()
    if token is None:
        raise UnexpectedEndOfInput()

    coefficient = 1
    if token.kind is TokenKind.COEFFICIENT:
        coefficient = stream.next().value

    components = []
    token = stream.peek()
    while token is not None and token.kind is TokenKind.COMPONENT:
        if not isinstance(token.value, (Component, Group)):
            raise UnexpectedToken(token)
        components.append(stream.next().value)
        token = stream.peek()

    if not components:
        if token is None:
            raise UnexpectedEndOfInput()
        raise UnexpectedToken(token)

    return Constituent(coefficient=coefficient, components=components)


def parse_equation(tokens: Iterable[Token]) -> Equation:
    """Parse a whole equation.

    Raises:
        UnexpectedEndOfInput: empty stream, or a separator with nothing after it.
        UnexpectedToken: anything other than PLUS/ARROW between constituents.
        DuplicateArrow: a second ARROW.
    """
    stream = _Lookahead(tokens)

    reactants = [parse_constituent(stream)]
    products: list[Constituent] = []
    target = reactants

    while True:
        token = stream.next()
        if token is None:
            break
        if token.kind is TokenKind.ARROW:
            if target is products:
                raise DuplicateArrow()
            target = products
        elif token.kind is not TokenKind.PLUS:
            raise UnexpectedToken(token)
        target.append(parse_constituent(stream))

    return Equation(reactants=reactants, products=products)
