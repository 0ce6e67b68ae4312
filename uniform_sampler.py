"""Uniform random selection of symbols from a pool.

A :class:`SeededGenerator` can only be created from a seed, so every draw
happens after seeding. Indices are drawn with rejection sampling: raw
outputs at or above the largest multiple of ``bound`` that fits in the
generator's span are discarded, which removes the modulo bias a plain
``raw % bound`` would have.
"""

from __future__ import annotations

import logging
import random
import threading
import time
from pathlib import Path
from typing import Iterator, Union

from common.exceptions import EntropySourceError, InvariantViolation

logger = logging.getLogger(__name__)

GENERATOR_BITS = 31
GENERATOR_MAX = (1 << GENERATOR_BITS) - 1
DEFAULT_SEED_FILE = "/dev/urandom"
SEED_BYTES = 32


class SeededGenerator:
    """Pseudo-random source of integers in [0, GENERATOR_MAX]."""

    max_output = GENERATOR_MAX

    def __init__(self, seed: int) -> None:
        self.seed = seed
        self._rng = random.Random(seed)
        self._lock = threading.Lock()

    def draw(self) -> int:
        with self._lock:
            return self._rng.getrandbits(GENERATOR_BITS)


def uniform_index(rng: SeededGenerator, bound: int) -> int:
    """Return an integer in [0, bound), each value equally likely.

    Raises:
        InvariantViolation: If bound is outside [1, rng.max_output + 1]
    """
    span = rng.max_output + 1
    if bound < 1 or bound > span:
        raise InvariantViolation(f"bound {bound} outside [1, {span}]")

    threshold = span - span % bound
    raw = rng.draw()
    while raw >= threshold:
        raw = rng.draw()
    return raw % bound


def fill_random(rng: SeededGenerator, length: int, pool: str) -> str:
    """Build a string of length characters drawn independently from pool.

    Every slot of pool is equally likely, so a character repeated in pool is
    picked proportionally more often.
    """
    if length < 0:
        raise InvariantViolation(f"negative length: {length}")
    if not pool:
        raise InvariantViolation("symbol pool is empty")
    if len(pool) > rng.max_output + 1:
        raise InvariantViolation(
            f"symbol pool of {len(pool)} exceeds generator range {rng.max_output + 1}"
        )

    size = len(pool)
    return "".join(pool[uniform_index(rng, size)] for _ in range(length))


def generate_strings(
    rng: SeededGenerator, pool: str, length: int, count: int
) -> Iterator[str]:
    """Yield count random strings lazily."""
    for _ in range(count):
        yield fill_random(rng, length, pool)


def read_seed(path: Union[str, Path]) -> int:
    """Read up to SEED_BYTES raw bytes from path as a little-endian integer.

    Raises:
        OSError: If the file cannot be opened or read
    """
    with open(path, "rb") as fh:
        data = fh.read(SEED_BYTES)
    if len(data) < SEED_BYTES:
        logger.warning(
            "%s: short read (%d of %d bytes), seed has reduced entropy",
            path,
            len(data),
            SEED_BYTES,
        )
    return int.from_bytes(data, "little")


def seed_generator(
    path: Union[str, Path] = DEFAULT_SEED_FILE, allow_fallback: bool = True
) -> SeededGenerator:
    """Seed a generator from an entropy file, falling back to the clock.

    The fallback is always announced at WARNING level since a clock seed is
    predictable.

    Raises:
        EntropySourceError: If the file is unusable and allow_fallback is False
    """
    try:
        seed = read_seed(path)
    except OSError as ex:
        logger.warning("%s: %s", path, ex.strerror or ex)
        if not allow_fallback:
            raise EntropySourceError(f"cannot read random seed from {path}") from ex
        logger.warning("WARNING: fallback: using system time as random seed")
        logger.warning("WARNING: system time is predictable!")
        seed = time.time_ns()
    else:
        logger.debug("Seeded generator from %s", path)
    return SeededGenerator(seed)
