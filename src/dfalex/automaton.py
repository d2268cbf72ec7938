"""Table-driven deterministic finite automata.

An automaton is pure data: a set of states, a contiguous alphabet of symbol
codes, a total transition function, and a per-state acceptance value. The
scanner only ever talks to it through the Automaton protocol.

TableAutomaton stores the transition function as a dense table (one row per
state id, one column per alphabet symbol) so every lookup is two indexing
operations. Undefined edges hold ERROR_STATE.

Thread Safety:
TableAutomaton is immutable after creation. Safe to share across threads
and across any number of Scanner instances.
Use AutomatonBuilder for mutable construction.

Example:
    >>> digits = (
    ...     AutomatonBuilder(states=range(1, 3), start_state=1)
    ...     .add_transitions(1, "0123456789", 2)
    ...     .add_transitions(2, "0123456789", 2)
    ...     .accept(2, value=1)
    ...     .build()
    ... )
    >>> digits.next(1, ord("7"))
    2
    >>> digits.next(2, EOF_SYMBOL)
    0
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from dfalex.errors import AutomatonError

# Symbol returned by the scanner's reader once the stream is exhausted
EOF_SYMBOL = -1

# Reserved successor meaning "no edge"; never a member of any state set
ERROR_STATE = 0

# Acceptance value for categories that are consumed but never emitted
SKIP_VALUE = 0

NEWLINE = ord("\n")

BYTE_ALPHABET = range(256)


@runtime_checkable
class Automaton(Protocol):
    """Contract between an automaton definition and the scanner.

    ``next`` must be total over ``states x alphabet`` and must return
    ERROR_STATE for EOF_SYMBOL whatever the state. ``value`` must be total
    over ``states``; it is only meaningful for final states.

    Thread Safety:
        Implementations must not change after construction.

    """

    @property
    def states(self) -> frozenset[int]: ...

    @property
    def alphabet(self) -> range: ...

    @property
    def start_state(self) -> int: ...

    @property
    def final_states(self) -> frozenset[int]: ...

    def next(self, state: int, symbol: int) -> int:
        """Successor of ``state`` on ``symbol``, or ERROR_STATE."""
        ...

    def value(self, state: int) -> int:
        """Acceptance value (token category) of ``state``."""
        ...


class TableAutomaton:
    """Immutable DFA backed by a dense transition table.

    Use AutomatonBuilder to create instances.

    Thread Safety:
        Immutable after creation. Safe to share across threads.
    """

    __slots__ = (
        "_states",
        "_alphabet",
        "_start_state",
        "_final_states",
        "_transitions",  # tuple of rows indexed by state id, then symbol offset
        "_values",  # acceptance value indexed by state id
    )

    def __init__(
        self,
        states: frozenset[int],
        alphabet: range,
        start_state: int,
        final_states: frozenset[int],
        transitions: tuple[tuple[int, ...], ...],
        values: tuple[int, ...],
    ) -> None:
        """Initialize automaton with a pre-built table.

        Use AutomatonBuilder to create instances.
        """
        self._states = states
        self._alphabet = alphabet
        self._start_state = start_state
        self._final_states = final_states
        self._transitions = transitions
        self._values = values

    @property
    def states(self) -> frozenset[int]:
        return self._states

    @property
    def alphabet(self) -> range:
        return self._alphabet

    @property
    def start_state(self) -> int:
        return self._start_state

    @property
    def final_states(self) -> frozenset[int]:
        return self._final_states

    def next(self, state: int, symbol: int) -> int:
        """Get the successor of ``state`` on ``symbol``.

        Args:
            state: Current state (must be in ``states``)
            symbol: Symbol code in ``alphabet``, or EOF_SYMBOL

        Returns:
            Successor state, or ERROR_STATE when no edge is defined.
            Always ERROR_STATE for EOF_SYMBOL.

        Raises:
            AutomatonError: If state or symbol is outside the automaton's domain
        """
        if symbol == EOF_SYMBOL:
            return ERROR_STATE
        if state not in self._states:
            msg = f"Unknown state {state!r}"
            raise AutomatonError(msg)
        if symbol not in self._alphabet:
            msg = f"Symbol {symbol!r} outside alphabet {self._alphabet!r}"
            raise AutomatonError(msg)
        return self._transitions[state][symbol - self._alphabet.start]

    def value(self, state: int) -> int:
        """Get the acceptance value of ``state``.

        Raises:
            AutomatonError: If state is not a member of ``states``
        """
        if state not in self._states:
            msg = f"Unknown state {state!r}"
            raise AutomatonError(msg)
        return self._values[state]

    def is_final(self, state: int) -> bool:
        """Check if a token may legally end in ``state``."""
        return state in self._final_states

    def __repr__(self) -> str:
        return (
            f"TableAutomaton(states={len(self._states)}, "
            f"start={self._start_state}, finals={sorted(self._final_states)})"
        )


class AutomatonBuilder:
    """Mutable builder for TableAutomaton.

    Declare the state set up front, add edges and acceptance values, then
    call build() to validate and freeze the table.

    Example:
        >>> builder = AutomatonBuilder(states=range(1, 3), start_state=1)
        >>> _ = builder.add_transition(1, "+", 2).accept(2, value=3)
        >>> plus = builder.build()
    """

    __slots__ = ("_states", "_alphabet", "_start_state", "_finals", "_edges", "_values")

    def __init__(
        self,
        states: Iterable[int],
        start_state: int,
        alphabet: range = BYTE_ALPHABET,
    ) -> None:
        """Initialize builder.

        Args:
            states: State identifiers (small positive integers)
            start_state: State every token starts from
            alphabet: Contiguous range of admissible symbol codes
        """
        self._states: frozenset[int] = frozenset(states)
        self._alphabet = alphabet
        self._start_state = start_state
        self._finals: set[int] = set()
        self._edges: dict[tuple[int, int], int] = {}
        self._values: dict[int, int] = {}

    def add_transition(self, source: int, symbol: int | str, target: int) -> AutomatonBuilder:
        """Add one edge.

        Args:
            source: State the edge leaves
            symbol: Symbol code, or a one-character ASCII string
            target: State the edge enters

        Returns:
            Self for chaining

        Raises:
            AutomatonError: If the edge conflicts with an existing one, or the
                character is not a single ASCII character
        """
        code = _symbol_code(symbol)
        existing = self._edges.get((source, code))
        if existing is not None and existing != target:
            msg = f"Conflicting edges from state {source} on {code!r}: {existing} and {target}"
            raise AutomatonError(msg)
        self._edges[(source, code)] = target
        return self

    def add_transitions(
        self, source: int, symbols: Iterable[int | str], target: int
    ) -> AutomatonBuilder:
        """Add an edge for every symbol in ``symbols``.

        A string is treated as a collection of characters, so
        ``add_transitions(1, string.digits, 2)`` adds ten edges.

        Returns:
            Self for chaining
        """
        for symbol in symbols:
            self.add_transition(source, symbol, target)
        return self

    def accept(self, state: int, value: int) -> AutomatonBuilder:
        """Mark ``state`` final with acceptance value ``value``.

        Use SKIP_VALUE for categories that should be consumed silently.

        Returns:
            Self for chaining
        """
        self._finals.add(state)
        self._values[state] = value
        return self

    def build(self) -> TableAutomaton:
        """Build immutable automaton from the declared states and edges.

        Returns:
            Immutable TableAutomaton

        Raises:
            AutomatonError: If the definition is inconsistent
        """
        self._validate()

        width = len(self._alphabet)
        offset = self._alphabet.start
        rows = [[ERROR_STATE] * width for _ in range(max(self._states) + 1)]
        for (source, symbol), target in self._edges.items():
            rows[source][symbol - offset] = target

        values = [SKIP_VALUE] * (max(self._states) + 1)
        for state, value in self._values.items():
            values[state] = value

        return TableAutomaton(
            states=self._states,
            alphabet=self._alphabet,
            start_state=self._start_state,
            final_states=frozenset(self._finals),
            transitions=tuple(tuple(row) for row in rows),
            values=tuple(values),
        )

    def _validate(self) -> None:
        if not self._states:
            raise AutomatonError("Automaton needs at least one state")
        if ERROR_STATE in self._states:
            msg = f"ERROR_STATE ({ERROR_STATE}) cannot be a member of states"
            raise AutomatonError(msg)
        if any(state < 0 for state in self._states):
            raise AutomatonError("State identifiers must be non-negative")
        if self._alphabet.step != 1 or self._alphabet.start < 0 or not self._alphabet:
            msg = f"Alphabet must be a non-empty contiguous range, got {self._alphabet!r}"
            raise AutomatonError(msg)
        if self._start_state not in self._states:
            msg = f"Start state {self._start_state} is not a member of states"
            raise AutomatonError(msg)

        unknown_finals = self._finals - self._states
        if unknown_finals:
            msg = f"Final states {sorted(unknown_finals)} are not members of states"
            raise AutomatonError(msg)

        for (source, symbol), target in self._edges.items():
            if source not in self._states or target not in self._states:
                msg = f"Edge {source} -> {target} uses a state outside states"
                raise AutomatonError(msg)
            if symbol not in self._alphabet:
                msg = f"Edge {source} -> {target} on {symbol!r} is outside the alphabet"
                raise AutomatonError(msg)


def _symbol_code(symbol: int | str) -> int:
    if isinstance(symbol, str):
        if len(symbol) != 1:
            msg = f"Expected a single character, got {symbol!r}"
            raise AutomatonError(msg)
        code = ord(symbol)
        # Input is read byte by byte; a non-ASCII character spans several bytes
        if code > 0x7F:
            msg = f"Character {symbol!r} is not ASCII; pass its byte codes as ints"
            raise AutomatonError(msg)
        return code
    return symbol
