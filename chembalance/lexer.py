"""Plain text -> token stream.

Turns strings like

  CaCl2 + Na3PO4 -> Ca3(PO4)2 + NaCl
  3CaCl₂ + 2Na₃PO₄ = Ca₃(PO₄)₂ + 6NaCl

into the tokens parse_equation() consumes. Element symbols are `[A-Z][a-z]*`
and are resolved against the element table here, so `Co` and `CO` never reach
the parser ambiguously. Whitespace is insignificant.

A number directly after an element or a closing parenthesis is a subscript;
a number at the start of a constituent is its coefficient. Unicode subscript
digits are only valid as subscripts. Nested groups are flattened into a
single Group by multiplying the inner multiplier into the members.
"""

from __future__ import annotations

import re

from .errors import ArithmeticOverflow, ElementNotFound, LexError
from .formula import MAX_COUNT, Component, Group, checked_mul
from .periodic_table import ElementTable
from .tokens import Token

_TOKENS = [
    ("ARROW", r"->|=|→|⟶"),
    ("ELEM", r"[A-Z][a-z]*"),
    ("NUM", r"[0-9]+"),
    ("SUB", r"[₀₁₂₃₄₅₆₇₈₉]+"),
    ("LPAREN", r"\("),
    ("RPAREN", r"\)"),
    ("PLUS", r"\+"),
    ("SPACE", r"\s+"),
    ("INVALID", r"."),
]

_MATCHER = re.compile("|".join("(?P<{}>{})".format(*pair) for pair in _TOKENS))

_SUBSCRIPT_DIGITS = str.maketrans("₀₁₂₃₄₅₆₇₈₉", "0123456789")


class _Scanner:
    def __init__(self, text: str):
        self._items: list[tuple[str, str, int]] = []
        for mob in _MATCHER.finditer(text):
            kind = mob.lastgroup
            if kind == "SPACE":
                continue
            if kind == "INVALID":
                raise LexError(f"unexpected character {mob.group()!r} at {mob.start()}")
            self._items.append((kind, mob.group(), mob.start()))
        self._pos = 0

    def peek(self) -> tuple[str, str, int] | None:
        if self._pos < len(self._items):
            return self._items[self._pos]
        return None

    def next(self) -> tuple[str, str, int] | None:
        item = self.peek()
        self._pos += 1
        return item

    def test(self, *kinds: str) -> bool:
        item = self.peek()
        return item is not None and item[0] in kinds


def _positive(value: str, pos: int) -> int:
    n = int(value.translate(_SUBSCRIPT_DIGITS))
    if n == 0:
        raise LexError(f"zero is not a valid count at {pos}")
    if n > MAX_COUNT:
        raise ArithmeticOverflow(n, MAX_COUNT, stage="lex")
    return n


def _subscript(scanner: _Scanner) -> int:
    if scanner.test("NUM", "SUB"):
        _, value, pos = scanner.next()
        return _positive(value, pos)
    return 1


def _element(scanner: _Scanner, table: ElementTable) -> Component:
    _, symbol, _ = scanner.next()
    el = table.by_symbol(symbol)
    if el is None:
        raise ElementNotFound(symbol)
    return Component(el.number, _subscript(scanner))


def _group_members(scanner: _Scanner, table: ElementTable, open_pos: int) -> list[Component]:
    """Members between '(' and ')', nested groups flattened, repeats merged."""
    counts: dict[int, int] = {}
    while True:
        item = scanner.peek()
        if item is None:
            raise LexError(f"unclosed parenthesis at {open_pos}")
        kind, _, pos = item
        if kind == "RPAREN":
            scanner.next()
            break
        if kind == "ELEM":
            comp = _element(scanner, table)
            counts[comp.element] = counts.get(comp.element, 0) + comp.count
        elif kind == "LPAREN":
            scanner.next()
            inner = _group_members(scanner, table, pos)
            n = _subscript(scanner)
            for m in inner:
                counts[m.element] = counts.get(m.element, 0) + checked_mul(m.count, n, stage="lex")
        else:
            raise LexError(f"unexpected {item[1]!r} inside group at {pos}")

    if not counts:
        raise LexError(f"empty group at {open_pos}")
    for e, n in counts.items():
        if n > MAX_COUNT:
            raise ArithmeticOverflow(n, MAX_COUNT, stage="lex")
    return [Component(e, n) for e, n in counts.items()]


def tokenize(text: str, table: ElementTable | None = None) -> list[Token]:
    """Lex an equation string.

    Raises:
        LexError: stray characters, unbalanced parentheses, zero counts,
            misplaced numbers.
        ElementNotFound: an unknown element symbol.
    """
    if table is None:
        table = ElementTable.default()
    scanner = _Scanner(text)
    tokens: list[Token] = []
    constituent_start = True

    while True:
        item = scanner.peek()
        if item is None:
            break
        kind, value, pos = item

        if kind == "NUM" and constituent_start:
            scanner.next()
            tokens.append(Token.coefficient(_positive(value, pos)))
        elif kind == "ELEM":
            tokens.append(Token.component(_element(scanner, table)))
        elif kind == "LPAREN":
            scanner.next()
            members = _group_members(scanner, table, pos)
            tokens.append(Token.component(Group(tuple(members), _subscript(scanner))))
        elif kind == "PLUS":
            scanner.next()
            tokens.append(Token.plus())
            constituent_start = True
            continue
        elif kind == "ARROW":
            scanner.next()
            tokens.append(Token.arrow())
            constituent_start = True
            continue
        elif kind == "RPAREN":
            raise LexError(f"unmatched ')' at {pos}")
        else:
            raise LexError(f"unexpected number {value!r} at {pos}")
        constituent_start = False

    return tokens
