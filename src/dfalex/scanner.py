"""Maximal-munch scanner driven by a deterministic finite automaton.

The scanner reads one byte at a time and runs the automaton until it has no
edge for the current symbol. If the automaton is then in a final state the
lexeme read so far is accepted and the symbol that stopped it is kept as the
pending lookahead for the next token. Otherwise the input is invalid at
that symbol.

One symbol of lookahead is all the scanner ever holds. Automata must be
designed so that a single symbol is enough to decide whether a token ends
(the arithmetic automaton is); no backtracking is performed.

Positions:
The cursor always names the position of the next unconsumed symbol. A
symbol moves the cursor only when it is appended to a lexeme, so the
pending lookahead is counted once, when it is finally consumed.

Thread Safety:
Scanner instances are single-use and not safe for concurrent use. Create
one per stream. The automaton is borrowed read-only and may be shared.

"""

from __future__ import annotations

import io
from collections.abc import Iterator
from os import PathLike
from typing import Protocol

from dfalex.automaton import EOF_SYMBOL, ERROR_STATE, NEWLINE, SKIP_VALUE, Automaton
from dfalex.config import ScanConfig, get_scan_config
from dfalex.errors import InvalidLexemeError
from dfalex.grammar import ARITHMETIC
from dfalex.location import SourceLocation
from dfalex.profiling import get_scan_accumulator
from dfalex.tokens import Token
from dfalex.utils.logger import get_logger

logger = get_logger(__name__)


class ByteStream(Protocol):
    """Binary stream read one byte at a time; ``b""`` means end of stream."""

    def read(self, size: int = -1, /) -> bytes: ...

    def close(self) -> None: ...


class Scanner:
    """Splits a byte stream into tokens with a deterministic finite automaton.

    Usage:
            >>> scanner = Scanner.from_text("33.2 + x1")
            >>> [(t.name, t.lexeme) for t in scanner]
            [('float', '33.2'), ('plus', '+'), ('variable', 'x1')]

    Lifecycle:
        Created bound to one stream and one automaton, mutated token by
        token, discarded once the stream is exhausted or an error is raised.
        Used as a context manager, it closes a stream it owns on exit.

    """

    __slots__ = (
        "_automaton",
        "_stream",
        "_owns_stream",
        "_source_file",
        "_config",
        "_accumulator",
        "_state",
        "_pending",  # Lookahead symbol carried over from the previous token
        "_buffer",  # Bytes of the lexeme in progress
        "_row",
        "_column",
    )

    def __init__(
        self,
        automaton: Automaton,
        stream: ByteStream,
        *,
        source_file: str | None = None,
        config: ScanConfig | None = None,
        owns_stream: bool = False,
    ) -> None:
        """Initialize scanner over a binary stream.

        Args:
            automaton: Automaton to recognize tokens with (borrowed, read-only)
            stream: Binary stream, read one byte at a time
            source_file: Optional source file path for locations and errors
            config: Scan configuration (defaults to the active ScanConfig)
            owns_stream: Close the stream when the scanner is closed
        """
        self._automaton = automaton
        self._stream = stream
        self._owns_stream = owns_stream
        self._source_file = source_file
        self._config = config if config is not None else get_scan_config()
        self._accumulator = get_scan_accumulator()

        self._state: int = automaton.start_state
        self._pending: int | None = None
        self._buffer = bytearray()
        self._row: int = 1
        self._column: int = 1

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        automaton: Automaton = ARITHMETIC,
        *,
        source_file: str | None = None,
        config: ScanConfig | None = None,
    ) -> Scanner:
        """Create a scanner over an in-memory byte string."""
        return cls(
            automaton,
            io.BytesIO(data),
            source_file=source_file,
            config=config,
            owns_stream=True,
        )

    @classmethod
    def from_text(
        cls,
        text: str,
        automaton: Automaton = ARITHMETIC,
        *,
        source_file: str | None = None,
        config: ScanConfig | None = None,
    ) -> Scanner:
        """Create a scanner over text, encoded with the configured encoding."""
        config = config if config is not None else get_scan_config()
        data = text.encode(config.encoding, config.errors)
        return cls.from_bytes(data, automaton, source_file=source_file, config=config)

    @classmethod
    def open(
        cls,
        path: str | PathLike[str],
        automaton: Automaton = ARITHMETIC,
        *,
        config: ScanConfig | None = None,
    ) -> Scanner:
        """Open a file for scanning; the scanner owns and closes the file.

        Raises:
            OSError: If the file cannot be opened
        """
        stream = open(path, "rb")
        return cls(
            automaton,
            stream,
            source_file=str(path),
            config=config,
            owns_stream=True,
        )

    # =========================================================================
    # Public API
    # =========================================================================

    @property
    def position(self) -> SourceLocation:
        """Position of the next unconsumed symbol."""
        return SourceLocation(self._row, self._column, self._source_file)

    def end_of_stream(self) -> bool:
        """True once the lookahead symbol read last was the end of stream."""
        return self._pending == EOF_SYMBOL

    def next_token(self) -> Token | None:
        """Scan the next token.

        Skip-category matches (whitespace) are consumed and discarded, any
        number of them in a row, unless ScanConfig.emit_skipped is set.

        Returns:
            The next token, or None once the stream is exhausted.

        Raises:
            InvalidLexemeError: If no token can be recognized at the cursor
        """
        while not self.end_of_stream():
            start_row = self._row
            start_column = self._column
            self._buffer.clear()

            value = self._match()
            if value is None:
                return None

            if value == SKIP_VALUE:
                if self._accumulator is not None:
                    self._accumulator.skipped += 1
                if not self._config.emit_skipped:
                    continue
            elif self._accumulator is not None:
                self._accumulator.tokens += 1

            return Token(
                category=value,
                lexeme=self._decode(self._config.errors),
                start_row=start_row,
                start_column=start_column,
                source_file=self._source_file,
            )
        return None

    def tokens(self) -> Iterator[Token]:
        """Yield the remaining tokens until the stream is exhausted.

        Yields:
            Token objects one at a time
        """
        while (token := self.next_token()) is not None:
            yield token

    def __iter__(self) -> Iterator[Token]:
        return self.tokens()

    def close(self) -> None:
        """Close the underlying stream if this scanner owns it."""
        if self._owns_stream:
            self._stream.close()

    def __enter__(self) -> Scanner:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    # =========================================================================
    # Recognition
    # =========================================================================

    def _match(self) -> int | None:
        """Run the automaton from the start state over the longest lexeme.

        Returns:
            Acceptance value of the final state reached, or None when the
            stream ended before any symbol of a new token.

        Raises:
            InvalidLexemeError: If the automaton stops in a non-final state
        """
        automaton = self._automaton
        alphabet = automaton.alphabet
        if self._pending is not None:
            symbol = self._pending
            self._pending = None
        else:
            symbol = self._read()
        self._state = automaton.start_state

        while True:
            # A byte outside the alphabet (EOF_SYMBOL included) has no edge
            if symbol in alphabet:
                next_state = automaton.next(self._state, symbol)
            else:
                next_state = ERROR_STATE
            if next_state == ERROR_STATE:
                if not self._buffer:
                    # Nothing consumed: either a clean end or an unrecognized symbol
                    if symbol == EOF_SYMBOL:
                        self._pending = symbol
                        return None
                    raise self._invalid_lexeme()
                if self._state in automaton.final_states:
                    self._pending = symbol
                    return automaton.value(self._state)
                raise self._invalid_lexeme()

            self._buffer.append(symbol)
            self._advance_position(symbol)
            self._state = next_state
            symbol = self._read()

    def _read(self) -> int:
        """Read one symbol from the stream, EOF_SYMBOL at the end."""
        if self._accumulator is not None:
            self._accumulator.symbols_read += 1
        chunk = self._stream.read(1)
        return chunk[0] if chunk else EOF_SYMBOL

    def _advance_position(self, symbol: int) -> None:
        if symbol == NEWLINE:
            self._row += 1
            self._column = 1
        else:
            self._column += 1

    def _decode(self, errors: str) -> str:
        return self._buffer.decode(self._config.encoding, errors)

    def _invalid_lexeme(self) -> InvalidLexemeError:
        if self._accumulator is not None:
            self._accumulator.errors += 1
        error = InvalidLexemeError(
            self._row,
            self._column,
            lexeme=self._decode("replace"),
            source_file=self._source_file,
        )
        logger.debug("Scan failed in state %d: %s", self._state, error)
        return error
