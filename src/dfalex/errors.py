"""Exception classes for dfalex.

Provides standardized exceptions for error handling throughout dfalex.

Errors fall into two families:

- InvalidLexemeError is an input error: the byte stream contains something
  the automaton cannot recognize. Callers decide whether to abort, skip and
  resynchronize, or report and continue.
- AutomatonError and UnknownCategoryError are programming errors: a
  malformed automaton, a state or symbol outside its domain, or a category
  code with no name. They indicate a defect, not bad input.
"""

from __future__ import annotations

from dfalex.location import SourceLocation


class DfalexError(Exception):
    """Base exception for all dfalex errors.

    Subclass this for specific error categories.
    """

    pass


class InvalidLexemeError(DfalexError):
    """No token can be recognized at the current position.

    Raised when the scanner is in a non-final state and the automaton has no
    transition for the current symbol (end of stream included). The position
    is that of the offending symbol, after the partial lexeme was consumed.
    """

    def __init__(
        self,
        row: int,
        column: int,
        lexeme: str = "",
        source_file: str | None = None,
    ) -> None:
        """Initialize lexical error with its location.

        Args:
            row: Row of the offending symbol (1-indexed)
            column: Column of the offending symbol (1-indexed)
            lexeme: Partial lexeme consumed before the failure
            source_file: Path to source file (optional)
        """
        self.row = row
        self.column = column
        self.lexeme = lexeme
        self.source_file = source_file

        message = "Invalid pattern"
        if lexeme:
            message += f" after {lexeme!r}"
        super().__init__(f"{self.location} {message}")

    @property
    def location(self) -> SourceLocation:
        """Location of the offending symbol."""
        return SourceLocation(self.row, self.column, self.source_file)


class AutomatonError(DfalexError):
    """Malformed automaton or a query outside its domain.

    Raised by AutomatonBuilder.build() when the definition is inconsistent,
    and by TableAutomaton when asked about an unknown state or a symbol
    outside the alphabet.
    """

    pass


class UnknownCategoryError(DfalexError):
    """A category code has no human-readable name.

    Categories come exclusively from the automaton a scanner was built
    with, so this always signals a mismatch between automaton and naming
    table rather than bad input.
    """

    def __init__(self, code: int) -> None:
        """Initialize with the offending category code.

        Args:
            code: The unmapped category code
        """
        self.code = code
        super().__init__(f"Invalid value {code!r}: no token category with this code")
