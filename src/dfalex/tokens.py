"""Token definition for the dfalex scanner.

The scanner produces a stream of Token objects. Each Token has a category
(the acceptance value of the final state it ended in), the exact lexeme
consumed, and the 1-based position of its first symbol.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass

from dfalex.grammar import category_name
from dfalex.location import SourceLocation


@dataclass(frozen=True, slots=True)
class Token:
    """A token produced by the scanner.

    Attributes:
        category: Acceptance value of the final state (see TokenCategory)
        lexeme: The exact text consumed for this token
        start_row: Row of the first symbol (1-indexed)
        start_column: Column of the first symbol (1-indexed)
        source_file: Optional source file path

    """

    category: int
    lexeme: str
    start_row: int
    start_column: int
    source_file: str | None = None

    @property
    def location(self) -> SourceLocation:
        """Location of the first symbol of the lexeme."""
        return SourceLocation(self.start_row, self.start_column, self.source_file)

    @property
    def name(self) -> str:
        """Human-readable category name (arithmetic categories only).

        Raises:
            UnknownCategoryError: If the category has no name
        """
        return category_name(self.category)

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        lexeme = self.lexeme
        if len(lexeme) > 20:
            lexeme = lexeme[:17] + "..."
        return f"Token({int(self.category)}, {lexeme!r}, {self.start_row}:{self.start_column})"
