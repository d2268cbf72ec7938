"""
dfalex: a table-driven DFA scanner for arithmetic expressions

Converts a byte stream into classified tokens (numbers, identifiers,
single-character operators) using an explicit deterministic finite automaton,
maximal munch, and one symbol of lookahead. Zero runtime dependencies.

Quick Start:
    >>> from dfalex import tokenize
    >>> [(t.name, t.lexeme) for t in tokenize("33.2 + -\\ntest123")]
    [('float', '33.2'), ('plus', '+'), ('minus', '-'), ('variable', 'test123')]

    >>> # Stream tokens lazily from a file
    >>> from dfalex import scan_file
    >>> for token in scan_file("expr.txt"):
    ...     print(token.name, token.location)

Custom automata:
    >>> from dfalex import AutomatonBuilder, Scanner
    >>> digits = (
    ...     AutomatonBuilder(states=[1, 2], start_state=1)
    ...     .add_transitions(1, "0123456789", 2)
    ...     .add_transitions(2, "0123456789", 2)
    ...     .accept(2, value=1)
    ...     .build()
    ... )
    >>> [t.lexeme for t in Scanner.from_text("2024", digits)]
    ['2024']
"""

from collections.abc import Iterator
from os import PathLike

from dfalex.automaton import (
    BYTE_ALPHABET,
    EOF_SYMBOL,
    ERROR_STATE,
    SKIP_VALUE,
    Automaton,
    AutomatonBuilder,
    TableAutomaton,
)
from dfalex.config import (
    ScanConfig,
    get_scan_config,
    reset_scan_config,
    scan_config_context,
    set_scan_config,
)
from dfalex.errors import (
    AutomatonError,
    DfalexError,
    InvalidLexemeError,
    UnknownCategoryError,
)
from dfalex.grammar import ARITHMETIC, TokenCategory, build_arithmetic_automaton, category_name
from dfalex.location import SourceLocation
from dfalex.profiling import ScanAccumulator, get_scan_accumulator, profiled_scan
from dfalex.scanner import Scanner
from dfalex.serialization import to_dict, to_json
from dfalex.tokens import Token

__version__ = "0.1.0"


def tokenize(
    source: str | bytes,
    automaton: Automaton = ARITHMETIC,
    *,
    source_file: str | None = None,
) -> list[Token]:
    """Scan a whole in-memory source into a list of tokens.

    Args:
        source: Text (encoded with the active ScanConfig encoding) or bytes
        automaton: Automaton to scan with (the arithmetic language by default)
        source_file: Optional source file path for locations and errors

    Returns:
        Every token, in order

    Raises:
        InvalidLexemeError: If the source contains an unrecognizable lexeme
    """
    if isinstance(source, bytes):
        scanner = Scanner.from_bytes(source, automaton, source_file=source_file)
    else:
        scanner = Scanner.from_text(source, automaton, source_file=source_file)
    with scanner:
        return list(scanner)


def scan_file(
    path: str | PathLike[str],
    automaton: Automaton = ARITHMETIC,
) -> Iterator[Token]:
    """Lazily scan a file, closing it once scanning ends.

    The file is closed when the tokens are exhausted, when a lexical error
    propagates, or when the generator is closed early.

    Args:
        path: File to scan
        automaton: Automaton to scan with (the arithmetic language by default)

    Yields:
        Token objects one at a time

    Raises:
        OSError: If the file cannot be opened
        InvalidLexemeError: If the file contains an unrecognizable lexeme
    """
    with Scanner.open(path, automaton) as scanner:
        yield from scanner


__all__ = [
    # Main API
    "tokenize",
    "scan_file",
    "Scanner",
    "Token",
    "SourceLocation",
    # Automata
    "Automaton",
    "AutomatonBuilder",
    "TableAutomaton",
    "BYTE_ALPHABET",
    "EOF_SYMBOL",
    "ERROR_STATE",
    "SKIP_VALUE",
    # Arithmetic language
    "ARITHMETIC",
    "TokenCategory",
    "build_arithmetic_automaton",
    "category_name",
    # Configuration
    "ScanConfig",
    "get_scan_config",
    "set_scan_config",
    "reset_scan_config",
    "scan_config_context",
    # Profiling
    "ScanAccumulator",
    "get_scan_accumulator",
    "profiled_scan",
    # Serialization
    "to_dict",
    "to_json",
    # Errors
    "DfalexError",
    "InvalidLexemeError",
    "AutomatonError",
    "UnknownCategoryError",
    "__version__",
]
