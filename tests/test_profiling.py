"""Tests for dfalex.profiling, the scan profiling API."""

import pytest

from dfalex import InvalidLexemeError, Scanner, tokenize
from dfalex.profiling import ScanAccumulator, get_scan_accumulator, profiled_scan


class TestGetScanAccumulator:
    def test_returns_none_when_disabled(self) -> None:
        assert get_scan_accumulator() is None

    def test_returns_none_outside_context(self) -> None:
        with profiled_scan():
            pass
        assert get_scan_accumulator() is None


class TestProfiledScan:
    def test_yields_accumulator(self) -> None:
        with profiled_scan() as acc:
            assert isinstance(acc, ScanAccumulator)
            assert get_scan_accumulator() is acc

    def test_counts_tokens_and_skips(self) -> None:
        with profiled_scan() as acc:
            tokenize("x ^ 2 + 1")
        assert acc.tokens == 5
        assert acc.skipped == 4
        assert acc.errors == 0

    def test_each_symbol_read_once(self) -> None:
        source = "x ^ 2 + 1"
        with profiled_scan() as acc:
            tokenize(source)
        # One read per byte plus the end of stream
        assert acc.symbols_read == len(source) + 1

    def test_counts_errors(self) -> None:
        with profiled_scan() as acc, pytest.raises(InvalidLexemeError):
            tokenize("3.")
        assert acc.errors == 1

    def test_accumulates_across_scanners(self) -> None:
        with profiled_scan() as acc:
            tokenize("a")
            tokenize("b c")
        assert acc.tokens == 3

    def test_scanner_created_outside_not_counted(self) -> None:
        scanner = Scanner.from_text("a b")
        with profiled_scan() as acc:
            list(scanner)
        assert acc.tokens == 0


class TestSummary:
    def test_summary_keys(self) -> None:
        with profiled_scan() as acc:
            tokenize("(a)")
        summary = acc.summary()
        assert set(summary) == {"total_ms", "symbols_read", "tokens", "skipped", "errors"}
        assert summary["tokens"] == 3

    def test_total_duration_non_negative(self) -> None:
        with profiled_scan() as acc:
            tokenize("1 + 2")
        assert acc.total_duration_ms >= 0
