"""Thread safety tests for shared automata.

The automaton is documented as immutable and shareable across any number
of scanners. These tests scan concurrently with one shared automaton and
check every thread gets the same answer it would get alone.
"""

from concurrent.futures import ThreadPoolExecutor

from dfalex import ARITHMETIC, ScanConfig, Scanner, scan_config_context, tokenize

SOURCES = [
    "33.2 + -\ntest123",
    "(a + b) * c ^ 2",
    "x1 / y2 - 0.5",
    "alpha\tbeta\r\ngamma",
]


def scan(source: str) -> list[tuple[int, str, int, int]]:
    return [
        (int(t.category), t.lexeme, t.start_row, t.start_column)
        for t in Scanner.from_text(source, ARITHMETIC)
    ]


class TestSharedAutomaton:
    def test_concurrent_scanners_match_sequential(self) -> None:
        expected = {source: scan(source) for source in SOURCES}

        with ThreadPoolExecutor(max_workers=8) as pool:
            futures = [(source, pool.submit(scan, source)) for source in SOURCES * 50]
            results = [(source, future.result()) for source, future in futures]

        for source, result in results:
            assert result == expected[source]

    def test_config_is_per_thread(self) -> None:
        def scan_with_skips(source: str) -> int:
            with scan_config_context(ScanConfig(emit_skipped=True)):
                return len(tokenize(source))

        def scan_plain(source: str) -> int:
            return len(tokenize(source))

        with ThreadPoolExecutor(max_workers=4) as pool:
            with_skips = [pool.submit(scan_with_skips, "a b c") for _ in range(20)]
            plain = [pool.submit(scan_plain, "a b c") for _ in range(20)]

            assert all(f.result() == 5 for f in with_skips)
            assert all(f.result() == 3 for f in plain)
