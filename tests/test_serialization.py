"""Tests for token JSON serialization."""

import json

import pytest

from dfalex import ScanConfig, Scanner, tokenize
from dfalex.serialization import from_dict, from_json, to_dict, to_json
from dfalex.tokens import Token


class TestToDict:
    def test_fields(self) -> None:
        token = tokenize("\n  x1", source_file="e.txt")[0]
        assert to_dict(token) == {
            "category": 2,
            "name": "variable",
            "lexeme": "x1",
            "start_row": 2,
            "start_column": 3,
            "source_file": "e.txt",
        }

    def test_unnamed_category(self) -> None:
        token = list(Scanner.from_text(" ", config=ScanConfig(emit_skipped=True)))[0]
        assert to_dict(token)["name"] is None


class TestJson:
    def test_round_trip(self) -> None:
        tokens = tokenize("(a + 2.5) ^ b\n/ 4")
        assert from_json(to_json(tokens)) == tokens

    def test_deterministic(self) -> None:
        tokens = tokenize("a+b")
        assert to_json(tokens) == to_json(tokenize("a+b"))

    def test_sorted_keys(self) -> None:
        data = json.loads(to_json(tokenize("a")))
        assert list(data[0]) == sorted(data[0])

    def test_empty(self) -> None:
        assert from_json(to_json([])) == []


class TestFromDictErrors:
    def test_missing_field(self) -> None:
        with pytest.raises(ValueError, match="lexeme"):
            from_dict({"category": 1, "start_row": 1, "start_column": 1})

    def test_not_an_array(self) -> None:
        with pytest.raises(ValueError, match="array"):
            from_json('{"category": 1}')

    def test_source_file_optional(self) -> None:
        token = from_dict({"category": 3, "lexeme": "+", "start_row": 1, "start_column": 2})
        assert token == Token(3, "+", 1, 2)
