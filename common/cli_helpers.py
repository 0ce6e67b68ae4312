"""Shared CLI utilities for consistent argument parsing."""

from __future__ import annotations

import argparse
import logging
from typing import Sequence

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def add_log_level_argument(
    parser: argparse.ArgumentParser,
    choices: Sequence[str] = LOG_LEVELS,
    default: str = "INFO",
) -> None:
    """Add standard --log-level argument.

    Args:
        parser: ArgumentParser to add the argument to
        choices: Accepted level names
        default: Level used when the flag is absent
    """
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=list(choices),
        default=default,
        help="Logging verbosity",
    )


def setup_logging(level: str, fmt: str = "%(message)s") -> None:
    """Configure logging on stderr with a consistent format.

    Args:
        level: Logging level (CRITICAL, ERROR, WARNING, INFO, DEBUG)
        fmt: Record format; stderr keeps stdout free for program output
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=fmt,
    )


def non_negative_int(value: str) -> int:
    """argparse type for counts and lengths.

    Raises:
        argparse.ArgumentTypeError: If value is not an integer >= 0
    """
    try:
        number = int(value, 10)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number
