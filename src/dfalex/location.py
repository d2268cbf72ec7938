"""Source position tracking for tokens and error messages.

Provides the SourceLocation dataclass used by Token.location and by
InvalidLexemeError to point at a symbol in the scanned stream.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Position of a symbol in a scanned byte stream.

    Rows and columns are 1-indexed. Columns count bytes, so a tab or a
    carriage return each advance the column by one; only a newline starts
    a new row.

    Attributes:
        row: Row number (1-indexed)
        column: Column number (1-indexed)
        source_file: Source file path (optional)

    Examples:
            >>> loc = SourceLocation(2, 7)
            >>> str(loc)
            '2:7'

            >>> str(SourceLocation(1, 1, "expr.txt"))
            'expr.txt:1:1'

    """

    row: int
    column: int
    source_file: str | None = None

    def __str__(self) -> str:
        """Format location for error messages.

        Returns:
            Formatted string like "expr.txt:10:5" or "10:5"
        """
        if self.source_file:
            return f"{self.source_file}:{self.row}:{self.column}"
        return f"{self.row}:{self.column}"

