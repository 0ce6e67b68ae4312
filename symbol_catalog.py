"""Named character classes used to build the password symbol pool.

The default catalog is defined by ASCII ordinal ranges so the string
lengths never have to be maintained by hand. Compound sets (``Alpha``,
``alnum`` ...) are concatenations of sets registered before them, keeping
order and any duplicates.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

from common.exceptions import (
    CatalogError,
    DuplicateSymbolSetError,
    InvariantViolation,
    UnknownSymbolSetError,
)

logger = logging.getLogger(__name__)

DEFAULT_SYMBOLS = "asciipns"


@dataclass(frozen=True)
class SymbolSet:
    name: str
    characters: str

    @property
    def length(self) -> int:
        return len(self.characters)


def build_range(first: str, last: str) -> str:
    """Return the characters from first to last (inclusive) by ordinal.

    Raises:
        InvariantViolation: If first sorts after last
    """
    lo, hi = ord(first), ord(last)
    if lo > hi:
        raise InvariantViolation(f"empty character range {first!r}..{last!r}")
    return "".join(chr(code) for code in range(lo, hi + 1))


def union(first: str, second: str) -> str:
    """Concatenate two symbol sequences; no deduplication."""
    return first + second


class SymbolCatalog:
    """Ordered name -> SymbolSet mapping, built once then frozen."""

    def __init__(self) -> None:
        self._sets: Dict[str, SymbolSet] = {}
        self._frozen = False

    def register(self, name: str, characters: str) -> SymbolSet:
        if self._frozen:
            raise CatalogError(f"catalog is frozen, cannot register {name!r}")
        if name in self._sets:
            raise DuplicateSymbolSetError(f"symbol set already registered: {name}")
        symbol_set = SymbolSet(name=name, characters=characters)
        self._sets[name] = symbol_set
        logger.debug("Registered symbol set %s (%d chars)", name, symbol_set.length)
        return symbol_set

    def freeze(self) -> "SymbolCatalog":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def lookup(self, name: str) -> Optional[SymbolSet]:
        return self._sets.get(name)

    def require(self, name: str) -> SymbolSet:
        symbol_set = self._sets.get(name)
        if symbol_set is None:
            raise UnknownSymbolSetError(name)
        return symbol_set

    def names(self) -> List[str]:
        return list(self._sets)

    def describe(self) -> List[Tuple[str, str]]:
        """Return (name, characters) rows in registration order."""
        return [(s.name, s.characters) for s in self._sets.values()]

    def __contains__(self, name: object) -> bool:
        return name in self._sets

    def __iter__(self) -> Iterator[SymbolSet]:
        return iter(self._sets.values())

    def __len__(self) -> int:
        return len(self._sets)


def build_default_catalog() -> SymbolCatalog:
    """Build the predefined symbol sets.

    Order matters: each compound set is derived from sets that are already
    registered.
    """
    catalog = SymbolCatalog()

    catalog.register("asciip", build_range(" ", "~"))
    catalog.register("asciipns", build_range("!", "~"))
    catalog.register("num", build_range("0", "9"))
    catalog.register("ALPHA", build_range("A", "Z"))
    catalog.register("alpha", build_range("a", "z"))

    def compound(name: str, first: str, second: str) -> None:
        catalog.register(
            name,
            union(catalog.require(first).characters, catalog.require(second).characters),
        )

    compound("Alpha", "ALPHA", "alpha")
    compound("ALNUM", "ALPHA", "num")
    compound("alnum", "alpha", "num")
    compound("Alnum", "Alpha", "num")

    punct = build_range("!", "/")
    punct = union(punct, build_range(":", "@"))
    punct = union(punct, build_range("[", "`"))
    punct = union(punct, build_range("{", "~"))
    catalog.register("punct", punct)

    return catalog.freeze()
