"""Randomized password generator CLI built on named symbol sets.

All characters from non-option arguments are combined into a pool of
symbols from which the random strings are formed. Each symbol has an equal
probability of being picked (counting multiplicity). Predefined symbol sets
can be appended with ``-S``; when nothing is selected the ``asciipns`` set
is used.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable, List, Optional, Sequence

from common.cli_helpers import add_log_level_argument, non_negative_int, setup_logging
from common.exceptions import (
    ConfigurationError,
    EntropySourceError,
    ResourceExhaustedError,
)
from symbol_catalog import DEFAULT_SYMBOLS, SymbolCatalog, build_default_catalog
from uniform_sampler import DEFAULT_SEED_FILE, generate_strings, seed_generator

logger = logging.getLogger(__name__)

PROGRAM_NAME = "pwgen"
__version__ = "0.6.0"

DEFAULT_COUNT = 1
DEFAULT_LENGTH = 8
SYMBOL_SET_HELP = "help"

VERSION_TEXT = (
    f"{PROGRAM_NAME} version {__version__}\n"
    "License GPL-3.0-or-later <http://gnu.org/licenses/gpl.html>\n"
    "This is free software: you are free to change and redistribute it.\n"
    "There is NO WARRANTY, to the extent permitted by law."
)


def format_symbol_sets(catalog: SymbolCatalog) -> str:
    return "\n".join(f"  {name:<10}{chars}" for name, chars in catalog.describe())


def parse_arguments(
    argv: Optional[Sequence[str]] = None, catalog: Optional[SymbolCatalog] = None
) -> argparse.Namespace:
    if catalog is None:
        catalog = build_default_catalog()
    parser = argparse.ArgumentParser(
        prog=PROGRAM_NAME,
        usage="%(prog)s [option ...] [--] [symbols ...]",
        description=(
            "Generate random strings according to directives. If no symbols "
            f"are specified, the program runs as if `-S {DEFAULT_SYMBOLS}` was given."
        ),
        epilog="predefined symbol sets:\n" + format_symbol_sets(catalog),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "symbols",
        nargs="*",
        default=[],
        help="Literal characters appended to the symbol pool",
    )
    parser.add_argument(
        "-S",
        "--symbols",
        dest="symbol_sets",
        action="append",
        default=[],
        metavar="SET",
        help=(
            "Append a predefined symbol set to the pool (repeatable). "
            f"Use `{SYMBOL_SET_HELP}` to list the sets."
        ),
    )
    parser.add_argument(
        "-c",
        "--count",
        type=non_negative_int,
        default=DEFAULT_COUNT,
        metavar="N",
        help=f"Generate N strings (default: {DEFAULT_COUNT})",
    )
    parser.add_argument(
        "-l",
        "--length",
        type=non_negative_int,
        default=DEFAULT_LENGTH,
        metavar="N",
        help=f"Each string will have N characters (default: {DEFAULT_LENGTH})",
    )
    parser.add_argument(
        "-r",
        "--random-seed",
        dest="seed_file",
        default=DEFAULT_SEED_FILE,
        metavar="FILE",
        help=f"Read random seed from FILE (default: {DEFAULT_SEED_FILE})",
    )
    parser.add_argument(
        "--strict-seed",
        action="store_true",
        help="Fail instead of seeding from the system clock when FILE is unreadable",
    )
    parser.add_argument("-v", "--version", action="version", version=VERSION_TEXT)
    # The clock-seed fallback warning must stay visible, so nothing above WARNING.
    add_log_level_argument(parser, choices=("WARNING", "INFO", "DEBUG"), default="WARNING")
    args_list = list(sys.argv[1:] if argv is None else argv)
    # Everything after the first -- is literal; split it off before the
    # intermixed pass, which would otherwise consume the separator.
    trailing: List[str] = []
    if "--" in args_list:
        split = args_list.index("--")
        args_list, trailing = args_list[:split], args_list[split + 1 :]
    args = parser.parse_intermixed_args(args_list)
    args.symbols = list(args.symbols) + trailing
    return args


def assemble_pool(
    catalog: SymbolCatalog, set_names: Iterable[str], literals: Iterable[str]
) -> str:
    """Concatenate the named sets, then the literal arguments, into one pool.

    Falls back to the default set when nothing was selected.

    Raises:
        UnknownSymbolSetError: If a set name is not in the catalog
        ResourceExhaustedError: If memory runs out while growing the pool
    """
    parts: List[str] = []
    try:
        for name in set_names:
            parts.append(catalog.require(name).characters)
        parts.extend(literals)
        pool = "".join(parts)
        if not pool:
            logger.debug("No symbols selected, using %s", DEFAULT_SYMBOLS)
            pool = catalog.require(DEFAULT_SYMBOLS).characters
    except MemoryError as ex:
        raise ResourceExhaustedError("memory allocation failed") from ex

    logger.debug("Active pool has %d symbols: %s", len(pool), pool)
    return pool


def main(argv: Optional[Sequence[str]] = None) -> int:
    catalog = build_default_catalog()
    args = parse_arguments(argv, catalog)

    setup_logging(args.log_level)

    try:
        # -S values are handled in order, so an unknown set before `help` fails.
        for name in args.symbol_sets:
            if name == SYMBOL_SET_HELP:
                print(format_symbol_sets(catalog))
                return 0
            catalog.require(name)
        pool = assemble_pool(catalog, args.symbol_sets, args.symbols)
        rng = seed_generator(args.seed_file, allow_fallback=not args.strict_seed)
        for password in generate_strings(rng, pool, args.length, args.count):
            print(password)
    except ConfigurationError as ex:
        logger.error("%s: %s", PROGRAM_NAME, ex)
        logger.error("Try `%s --help` or `%s --symbols=help`", PROGRAM_NAME, PROGRAM_NAME)
        return 2
    except EntropySourceError as ex:
        logger.error("%s: %s", PROGRAM_NAME, ex)
        return 1
    except (ResourceExhaustedError, MemoryError):
        logger.error("%s: memory allocation failed", PROGRAM_NAME)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
