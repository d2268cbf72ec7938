"""Token categories and automaton for the arithmetic-expression language.

The language has numbers with an optional fraction, identifiers that may
end in digits, seven single-character operators, and whitespace:

    float     [0-9]+(\\.[0-9]+)?
    variable  [a-zA-Z]+[0-9]*
    plus      +        minus   -       times   *
    divide    /        pow     ^
    lparen    (        rparen  )
    (skip)    space, \\n, \\t, \\r

A "." must be followed by at least one digit. State 3 (after the ".") is
not final, so "3." is rejected instead of being read as "3" then ".".

Thread Safety:
ARITHMETIC is immutable and shared by every scanner that does not bring
its own automaton.

"""

from __future__ import annotations

import string
from enum import IntEnum

from dfalex.automaton import SKIP_VALUE, AutomatonBuilder, TableAutomaton
from dfalex.errors import UnknownCategoryError


class TokenCategory(IntEnum):
    """Acceptance values produced by the arithmetic automaton."""

    FLOAT = 1
    VARIABLE = 2
    PLUS = 3
    MINUS = 4
    TIMES = 5
    DIVIDE = 6
    POW = 7
    LPAREN = 8
    RPAREN = 9


# State layout of the arithmetic automaton
START = 1
INTEGER_PART = 2
FRACTION_START = 3  # just read ".", a digit must follow
FRACTION_PART = 4
IDENTIFIER = 5
IDENTIFIER_DIGITS = 6
WHITESPACE = 14

OPERATORS: dict[str, tuple[int, TokenCategory]] = {
    "+": (7, TokenCategory.PLUS),
    "-": (8, TokenCategory.MINUS),
    "*": (9, TokenCategory.TIMES),
    "/": (10, TokenCategory.DIVIDE),
    "^": (11, TokenCategory.POW),
    "(": (12, TokenCategory.LPAREN),
    ")": (13, TokenCategory.RPAREN),
}

WHITESPACE_CHARS = " \n\t\r"

CATEGORY_NAMES: dict[int, str] = {
    TokenCategory.FLOAT: "float",
    TokenCategory.VARIABLE: "variable",
    TokenCategory.PLUS: "plus",
    TokenCategory.MINUS: "minus",
    TokenCategory.TIMES: "times",
    TokenCategory.DIVIDE: "divide",
    TokenCategory.POW: "pow",
    TokenCategory.LPAREN: "lparen",
    TokenCategory.RPAREN: "rparen",
}


def build_arithmetic_automaton() -> TableAutomaton:
    """Build the automaton for the arithmetic-expression language.

    Returns:
        A fresh immutable TableAutomaton. Most callers want the shared
        ARITHMETIC instance instead.
    """
    builder = AutomatonBuilder(states=range(START, WHITESPACE + 1), start_state=START)
    letters = string.ascii_letters
    digits = string.digits

    # float: [0-9]+(.[0-9]+)?
    builder.add_transitions(START, digits, INTEGER_PART)
    builder.add_transitions(INTEGER_PART, digits, INTEGER_PART)
    builder.add_transition(INTEGER_PART, ".", FRACTION_START)
    builder.add_transitions(FRACTION_START, digits, FRACTION_PART)
    builder.add_transitions(FRACTION_PART, digits, FRACTION_PART)
    builder.accept(INTEGER_PART, TokenCategory.FLOAT)
    builder.accept(FRACTION_PART, TokenCategory.FLOAT)

    # variable: [a-zA-Z]+[0-9]*
    builder.add_transitions(START, letters, IDENTIFIER)
    builder.add_transitions(IDENTIFIER, letters, IDENTIFIER)
    builder.add_transitions(IDENTIFIER, digits, IDENTIFIER_DIGITS)
    builder.add_transitions(IDENTIFIER_DIGITS, digits, IDENTIFIER_DIGITS)
    builder.accept(IDENTIFIER, TokenCategory.VARIABLE)
    builder.accept(IDENTIFIER_DIGITS, TokenCategory.VARIABLE)

    for char, (state, category) in OPERATORS.items():
        builder.add_transition(START, char, state)
        builder.accept(state, category)

    builder.add_transitions(START, WHITESPACE_CHARS, WHITESPACE)
    builder.accept(WHITESPACE, SKIP_VALUE)

    return builder.build()


ARITHMETIC: TableAutomaton = build_arithmetic_automaton()


def category_name(code: int) -> str:
    """Get the human-readable name of a token category.

    Args:
        code: Category code produced by the arithmetic automaton

    Returns:
        One of float, variable, plus, minus, times, divide, pow, lparen, rparen

    Raises:
        UnknownCategoryError: If code is not a named category (SKIP_VALUE
            included)
    """
    try:
        return CATEGORY_NAMES[code]
    except KeyError:
        raise UnknownCategoryError(code) from None
