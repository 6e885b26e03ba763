from __future__ import annotations

import io
from pathlib import Path

import pytest

from discombobugraph.__main__ import (
    EXIT_INVALID_CONFIG,
    EXIT_INVALID_INPUT,
    EXIT_MISSING_FILE,
    EXIT_SUCCESS,
    main,
)


def _feed_stdin(monkeypatch: pytest.MonkeyPatch, data: bytes) -> None:
    monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(data)))


def test_main_reads_stdin(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    _feed_stdin(monkeypatch, b"\xff\x00")

    exit_code = main([])

    assert exit_code == EXIT_SUCCESS
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Shannon : 0.000000"
    assert lines[-1] == "AC (50%): -2.000000"
    assert len(lines) == 11


def test_main_reports_short_input(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    _feed_stdin(monkeypatch, b"\x00")

    exit_code = main([])

    captured = capsys.readouterr()
    assert exit_code == EXIT_INVALID_INPUT
    assert captured.out == ""
    assert "too short" in captured.err


def test_main_reports_missing_input_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["--input", str(tmp_path / "absent.bin")])

    assert exit_code == EXIT_MISSING_FILE
    assert "Input file not found" in capsys.readouterr().err


def test_main_reports_invalid_config(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    input_path = tmp_path / "data.bin"
    input_path.write_bytes(b"\xff\x00")
    config_path = tmp_path / "config.ini"
    config_path.write_text("[output]\nprecision = lots\n", encoding="utf-8")

    exit_code = main(["-i", str(input_path), "-c", str(config_path)])

    assert exit_code == EXIT_INVALID_CONFIG
    assert "Configuration error" in capsys.readouterr().err


def test_main_writes_report(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    input_path = tmp_path / "data.bin"
    input_path.write_bytes(bytes(range(64)))
    report_path = tmp_path / "out" / "report.md"

    exit_code = main(["-i", str(input_path), "-r", str(report_path)])

    assert exit_code == EXIT_SUCCESS
    assert report_path.exists()
    assert len(capsys.readouterr().out.splitlines()) == 11
