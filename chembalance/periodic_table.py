"""Element table: symbol / name / atomic number lookups.

Data follows the Periodic-Table-JSON schema

  {"elements": [{"name": ..., "symbol": ..., "number": ..., "atomic_mass": ...}, ...]}

and a copy ships in chembalance/data/elements.json. Balancing never consults
the table; only the lexer (symbol -> number) and the renderer (number ->
symbol) do.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import IO, Iterable

from .errors import ElementNotFound
from .formula import Constituent, elements_of


@dataclass(frozen=True)
class Element:
    name: str
    symbol: str
    number: int
    atomic_mass: float


class ElementTable:
    def __init__(self, elements: Iterable[Element]):
        self._by_number: dict[int, Element] = {}
        self._by_symbol: dict[str, Element] = {}
        self._by_name: dict[str, Element] = {}
        for el in elements:
            self._by_number[el.number] = el
            self._by_symbol[el.symbol] = el
            self._by_name[el.name.lower()] = el

    def __len__(self) -> int:
        return len(self._by_number)

    def __iter__(self):
        return iter(sorted(self._by_number.values(), key=lambda el: el.number))

    def by_symbol(self, symbol: str) -> Element | None:
        return self._by_symbol.get(symbol)

    def by_name(self, name: str) -> Element | None:
        """Case-insensitive name lookup."""
        return self._by_name.get(name.lower())

    def by_number(self, number: int) -> Element | None:
        return self._by_number.get(number)

    def lookup(self, key: str | int) -> Element:
        """Look up by atomic number, symbol or name; raise ElementNotFound if absent."""
        if isinstance(key, int):
            el = self.by_number(key)
        else:
            el = self.by_symbol(key) or self.by_name(key)
        if el is None:
            raise ElementNotFound(key)
        return el

    def molar_mass(self, constituent: Constituent) -> float:
        """Mass of the constituent in g/mol, coefficient included."""
        return sum(
            self.lookup(e).atomic_mass * n for e, n in elements_of(constituent).items()
        )

    @classmethod
    def from_json(cls, source: str | Path | IO[str]) -> "ElementTable":
        """Accepts a path or an open text file in the Periodic-Table-JSON schema."""
        if isinstance(source, (str, Path)):
            with open(source, "r", encoding="utf-8") as f:
                data = json.load(f)
        else:
            data = json.load(source)

        elements = []
        for entry in data["elements"]:
            elements.append(
                Element(
                    name=str(entry["name"]),
                    symbol=str(entry["symbol"]),
                    number=int(entry["number"]),
                    atomic_mass=float(entry["atomic_mass"]),
                )
            )
        return cls(elements)

    @classmethod
    def default(cls) -> "ElementTable":
        """The bundled table (loaded once)."""
        return _bundled_table()


@lru_cache(maxsize=1)
def _bundled_table() -> ElementTable:
    data = resources.files("chembalance") / "data" / "elements.json"
    with data.open("r", encoding="utf-8") as f:
        return ElementTable.from_json(f)
