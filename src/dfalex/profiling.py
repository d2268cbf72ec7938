"""dfalex ScanAccumulator, opt-in profiling for scanning.

This module provides accumulated metrics while scanners run:
- Symbols read from streams
- Tokens emitted and skip-category matches discarded
- Lexical errors raised

Zero overhead when disabled (get_scan_accumulator() returns None).

Example:
    from dfalex import tokenize
    from dfalex.profiling import profiled_scan

    with profiled_scan() as metrics:
        tokens = tokenize("x ^ 2 + 1")

    print(metrics.summary())
    # {"total_ms": 0.1, "symbols_read": 10, "tokens": 5, "skipped": 4, "errors": 0}

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any


@dataclass
class ScanAccumulator:
    """Accumulated metrics during scanning.

    Attributes:
        start_time: Profiling start timestamp.
        symbols_read: Symbols pulled from streams (end of stream included).
        tokens: Tokens returned to callers.
        skipped: Skip-category matches consumed without a token.
        errors: InvalidLexemeError raised.

    """

    start_time: float = field(default_factory=perf_counter)
    symbols_read: int = 0
    tokens: int = 0
    skipped: int = 0
    errors: int = 0

    @property
    def total_duration_ms(self) -> float:
        """Total profiling duration in milliseconds."""
        return (perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        """Get summary of scan metrics.

        Returns:
            Dict with total_ms, symbols_read, tokens, skipped, errors.

        """
        return {
            "total_ms": round(self.total_duration_ms, 2),
            "symbols_read": self.symbols_read,
            "tokens": self.tokens,
            "skipped": self.skipped,
            "errors": self.errors,
        }


_accumulator: ContextVar[ScanAccumulator | None] = ContextVar(
    "scan_accumulator",
    default=None,
)


def get_scan_accumulator() -> ScanAccumulator | None:
    """Get current accumulator (None if profiling disabled)."""
    return _accumulator.get()


@contextmanager
def profiled_scan() -> Iterator[ScanAccumulator]:
    """Context manager for profiled scanning.

    Creates a ScanAccumulator and makes it available via
    get_scan_accumulator() for the duration of the with block.

    Yields:
        ScanAccumulator that will be populated by scanners created inside
        the block.

    """
    acc = ScanAccumulator()
    token: Token[ScanAccumulator | None] = _accumulator.set(acc)
    try:
        yield acc
    finally:
        _accumulator.reset(token)
