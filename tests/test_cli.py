"""Tests for the dfalex command-line driver."""

import io
import json
import sys
from pathlib import Path

import pytest

from dfalex.cli import format_token, main
from dfalex.tokens import Token


def write(tmp_path: Path, content: bytes) -> str:
    path = tmp_path / "input.txt"
    path.write_bytes(content)
    return str(path)


class TestTraceOutput:
    def test_trace_format(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        status = main([write(tmp_path, b"33.2 + - test123 44.023")])

        assert status == 0
        assert capsys.readouterr().out == (
            'float("33.2") plus("+") minus("-") variable("test123") float("44.023") '
        )

    def test_empty_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([write(tmp_path, b"")]) == 0
        assert capsys.readouterr().out == ""

    def test_format_token(self) -> None:
        assert format_token(Token(8, "(", 1, 1)) == 'lparen("(") '


class TestJsonOutput:
    def test_json(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        status = main([write(tmp_path, b"a\n^ 2"), "--json"])

        assert status == 0
        data = json.loads(capsys.readouterr().out)
        assert [(d["name"], d["start_row"], d["start_column"]) for d in data] == [
            ("variable", 1, 1),
            ("pow", 2, 1),
            ("float", 2, 3),
        ]


class TestErrors:
    def test_lexical_error(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = write(tmp_path, b"1 +\n 3.x")

        status = main([path])

        captured = capsys.readouterr()
        assert status == 1
        assert captured.out == 'float("1") plus("+") '
        assert f"{path}:2:4" in captured.err

    def test_missing_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        status = main([str(tmp_path / "nope.txt")])

        assert status == 2
        assert "cannot read" in capsys.readouterr().err

    def test_no_arguments(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 2

    def test_broken_stdout_is_not_a_read_error(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        class ClosedPipe(io.StringIO):
            def write(self, s: str) -> int:
                raise BrokenPipeError(32, "Broken pipe")

        monkeypatch.setattr(sys, "stdout", ClosedPipe())

        with pytest.raises(BrokenPipeError):
            main([write(tmp_path, b"1 + 2")])
        assert "cannot read" not in capsys.readouterr().err
