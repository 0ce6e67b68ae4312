"""Shared exception classes for pwgen."""

from __future__ import annotations


class PwgenError(Exception):
    """Base exception for all pwgen errors."""

    pass


class ConfigurationError(PwgenError):
    """Invalid user-supplied configuration (options, symbol set names)."""

    pass


class UnknownSymbolSetError(ConfigurationError):
    """Requested symbol set is not in the catalog."""

    def __init__(self, name: str) -> None:
        super().__init__(f"no such symbol set: {name}")
        self.name = name


class ResourceExhaustedError(PwgenError):
    """Memory ran out while building the pool or generating output."""

    pass


class EntropySourceError(PwgenError):
    """The entropy source could not be read and fallback is disabled."""

    pass


class CatalogError(PwgenError):
    """Symbol catalog misuse."""

    pass


class DuplicateSymbolSetError(CatalogError):
    """A symbol set with this name is already registered."""

    pass


class InvariantViolation(PwgenError):
    """A programming error; never handled as user input."""

    pass
