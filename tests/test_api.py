"""Tests for the top-level tokenize() and scan_file() entry points."""

from pathlib import Path

import pytest

from dfalex import (
    AutomatonBuilder,
    InvalidLexemeError,
    Scanner,
    Token,
    TokenCategory,
    scan_file,
    tokenize,
)


class TestTokenize:
    def test_text(self) -> None:
        tokens = tokenize("a*b")
        assert [t.category for t in tokens] == [
            TokenCategory.VARIABLE,
            TokenCategory.TIMES,
            TokenCategory.VARIABLE,
        ]

    def test_bytes(self) -> None:
        assert [t.lexeme for t in tokenize(b"1/2")] == ["1", "/", "2"]

    def test_empty(self) -> None:
        assert tokenize("") == []

    def test_idempotent(self) -> None:
        source = "33.2 + -\ntest123"
        assert tokenize(source) == tokenize(source)

    def test_custom_automaton(self) -> None:
        vowels = (
            AutomatonBuilder(states=[1, 2], start_state=1)
            .add_transitions(1, "aeiou", 2)
            .add_transitions(2, "aeiou", 2)
            .accept(2, value=1)
            .build()
        )
        assert [t.lexeme for t in tokenize("aei", vowels)] == ["aei"]
        with pytest.raises(InvalidLexemeError):
            tokenize("ab", vowels)

    def test_byte_outside_narrow_alphabet(self) -> None:
        """Input bytes the automaton has no column for are lexical errors."""
        digits = (
            AutomatonBuilder(states=[1, 2], start_state=1, alphabet=range(48, 58))
            .add_transitions(1, "0123456789", 2)
            .add_transitions(2, "0123456789", 2)
            .accept(2, value=1)
            .build()
        )
        scanner = Scanner.from_text("1a", digits)

        assert scanner.next_token() == Token(1, "1", 1, 1)
        with pytest.raises(InvalidLexemeError) as exc_info:
            scanner.next_token()
        assert (exc_info.value.row, exc_info.value.column) == (1, 2)

        with pytest.raises(InvalidLexemeError) as exc_info:
            tokenize("a", digits)
        assert exc_info.value.column == 1

    def test_token_is_immutable(self) -> None:
        token = tokenize("x")[0]
        with pytest.raises(AttributeError):
            token.lexeme = "y"  # type: ignore[misc]

    def test_token_repr(self) -> None:
        assert repr(Token(1, "3.2", 4, 2)) == "Token(1, '3.2', 4:2)"


class TestScanFile:
    def test_scans_file(self, tmp_path: Path) -> None:
        path = tmp_path / "expr.txt"
        path.write_bytes(b"33.2 + -\ntest123")

        tokens = list(scan_file(path))

        assert [t.name for t in tokens] == ["float", "plus", "minus", "variable"]
        assert all(t.source_file == str(path) for t in tokens)

    def test_lazy(self, tmp_path: Path) -> None:
        path = tmp_path / "expr.txt"
        path.write_bytes(b"a b $")

        tokens = scan_file(path)
        assert next(tokens).lexeme == "a"
        assert next(tokens).lexeme == "b"
        with pytest.raises(InvalidLexemeError) as exc_info:
            next(tokens)
        assert exc_info.value.source_file == str(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            list(scan_file(tmp_path / "missing.txt"))
