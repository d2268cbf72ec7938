"""Token serialization: JSON round-trip for dfalex tokens.

Converts tokens to/from JSON-compatible dicts. Useful for:
- Machine-readable scanner output (``dfalex --json``)
- Storing token streams as test fixtures
- Debugging and inspection

All output is deterministic (sorted keys).

Example:
    from dfalex import tokenize
    from dfalex.serialization import to_json, from_json

    tokens = tokenize("x ^ 2")
    assert from_json(to_json(tokens)) == tokens

Thread Safety:
    All functions are pure, safe to call from any thread.

"""

import json
from collections.abc import Iterable
from typing import Any

from dfalex.grammar import CATEGORY_NAMES
from dfalex.tokens import Token

_REQUIRED_FIELDS = ("category", "lexeme", "start_row", "start_column")


def to_dict(token: Token) -> dict[str, Any]:
    """Convert a token to a JSON-compatible dict.

    ``name`` is included for information and is None for categories
    without a name (skip matches, custom automata). It is ignored by
    from_dict.

    Args:
        token: Token to serialize.

    Returns:
        Dict with category, name, lexeme, start_row, start_column and
        source_file.

    """
    return {
        "category": int(token.category),
        "name": CATEGORY_NAMES.get(token.category),
        "lexeme": token.lexeme,
        "start_row": token.start_row,
        "start_column": token.start_column,
        "source_file": token.source_file,
    }


def from_dict(data: dict[str, Any]) -> Token:
    """Reconstruct a token from a dict.

    Args:
        data: Dict as produced by to_dict.

    Returns:
        Token

    Raises:
        ValueError: If a required field is missing.

    """
    missing = [name for name in _REQUIRED_FIELDS if name not in data]
    if missing:
        msg = f"Missing field(s) in serialized token: {', '.join(missing)}"
        raise ValueError(msg)

    return Token(
        category=data["category"],
        lexeme=data["lexeme"],
        start_row=data["start_row"],
        start_column=data["start_column"],
        source_file=data.get("source_file"),
    )


def to_json(tokens: Iterable[Token], *, indent: int | None = None) -> str:
    """Serialize tokens to a JSON array.

    Args:
        tokens: Tokens to serialize, in order.
        indent: JSON indentation level (None for compact).

    Returns:
        JSON string.

    """
    return json.dumps([to_dict(token) for token in tokens], sort_keys=True, indent=indent)


def from_json(data: str) -> list[Token]:
    """Deserialize tokens from a JSON array.

    Raises:
        ValueError: If the JSON is not an array of token objects.

    """
    raw = json.loads(data)
    if not isinstance(raw, list):
        msg = f"Expected a JSON array of tokens, got {type(raw).__name__}"
        raise ValueError(msg)
    return [from_dict(item) for item in raw]
