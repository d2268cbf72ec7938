"""Command-line driver for dfalex.

Scans one file with the arithmetic automaton and prints its tokens.

Usage:
    dfalex FILE [--json] [--verbose]
    python -m dfalex FILE

Default output is a trace of every token as ``name("lexeme")`` followed by
a space, with no trailing newline. ``--json`` prints a JSON array instead.

Exit status:
    0  input scanned to the end
    1  lexical error (message with row and column on stderr)
    2  usage error or unreadable file
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Iterable, Sequence
from typing import TextIO

from dfalex.errors import InvalidLexemeError
from dfalex.scanner import Scanner
from dfalex.serialization import to_json
from dfalex.tokens import Token
from dfalex.utils.logger import get_logger

logger = get_logger(__name__)


def format_token(token: Token) -> str:
    """Render a token in trace format, e.g. ``float("33.2") ``."""
    return f'{token.name}("{token.lexeme}") '


def print_tokens(tokens: Iterable[Token], out: TextIO) -> None:
    """Write tokens in trace format as they are produced."""
    for token in tokens:
        out.write(format_token(token))
    out.flush()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dfalex",
        description="Scan an arithmetic expression file into tokens",
    )
    parser.add_argument("file", help="Input file to scan")
    parser.add_argument("--json", action="store_true", help="Print tokens as a JSON array")
    parser.add_argument("--verbose", action="store_true", help="Log scanner diagnostics to stderr")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    logger.debug("Scanning %s", args.file)
    try:
        scanner = Scanner.open(args.file)
    except OSError as e:
        print(f"{parser.prog}: error: cannot read {args.file}: {e.strerror or e}", file=sys.stderr)
        return 2

    with scanner:
        try:
            if args.json:
                sys.stdout.write(to_json(scanner, indent=2) + "\n")
            else:
                print_tokens(scanner, sys.stdout)
        except InvalidLexemeError as e:
            sys.stdout.flush()
            print(f"{parser.prog}: error: {e}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
