"""Shared pytest fixtures for pwgen tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, List

import pytest

from symbol_catalog import SymbolCatalog, build_default_catalog
from uniform_sampler import SEED_BYTES, SeededGenerator


class ScriptedGenerator:
    """Generator stand-in that replays fixed raw outputs."""

    def __init__(self, outputs: Iterable[int], max_output: int) -> None:
        self.max_output = max_output
        self._outputs: List[int] = list(outputs)
        self.draws = 0

    def draw(self) -> int:
        value = self._outputs[self.draws]
        self.draws += 1
        return value


@pytest.fixture
def catalog() -> SymbolCatalog:
    """Return the default, frozen symbol catalog."""
    return build_default_catalog()


@pytest.fixture
def rng() -> SeededGenerator:
    """Return a generator with a fixed seed."""
    return SeededGenerator(20200101)


@pytest.fixture
def scripted() -> Callable[..., ScriptedGenerator]:
    """Factory for generators with scripted raw outputs."""
    return ScriptedGenerator


@pytest.fixture
def seed_file(tmp_path: Path) -> Callable[[bytes], Path]:
    """Factory writing raw seed bytes to a file.

    Args:
        tmp_path: Pytest temporary directory fixture

    Returns:
        Callable taking the bytes to write and returning the file path
    """
    counter = iter(range(1000))

    def _make(data: bytes = bytes(range(SEED_BYTES))) -> Path:
        path = tmp_path / f"seed{next(counter)}.bin"
        path.write_bytes(data)
        return path

    return _make
