"""Tests for :mod:`discombobugraph.reporting`."""

from __future__ import annotations

import io
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from discombobugraph import reporting
from discombobugraph.app import RunResult
from discombobugraph.battery import run_battery

EXPECTED_LINES = [
    "Shannon : 0.000000",
    "Freq    : 1.414214",
    "Runs    : 0.000000",
    "Pairs   : 2.250000",
    "χ2      : 0.000000",
    "AC (1)  : 1.500000",
    "AC (4)  : 0.000000",
    "AC (8)  : -2.000000",
    "AC (10%): 1.500000",
    "AC (25%): 0.000000",
    "AC (50%): -2.000000",
]


def _build_run_result(tmp_path: Path, *, from_file: bool = True) -> RunResult:
    input_path = tmp_path / "data.bin"
    input_path.write_bytes(b"\xff\x00")
    return RunResult(
        source=str(input_path) if from_file else "<stdin>",
        input_path=input_path if from_file else None,
        config_path=None,
        battery=run_battery(b"\xff\x00"),
        started_at=datetime(2023, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        duration=timedelta(seconds=1.234),
    )


def test_print_console_summary_reference_layout(tmp_path: Path) -> None:
    buffer = io.StringIO()

    reporting.print_console_summary(_build_run_result(tmp_path), stream=buffer)

    assert buffer.getvalue().splitlines() == EXPECTED_LINES


def test_print_console_summary_verbose(tmp_path: Path) -> None:
    buffer = io.StringIO()

    reporting.print_console_summary(_build_run_result(tmp_path), verbose=True, stream=buffer)
    output = buffer.getvalue()

    assert "Bitstream length: 2 bytes (16 bits)" in output
    assert "Lags: 1=1, 4=4, 8=8, 10%=1, 25%=4, 50%=8" in output
    assert output.splitlines()[-11:] == EXPECTED_LINES


def test_print_console_summary_precision(tmp_path: Path) -> None:
    buffer = io.StringIO()

    reporting.print_console_summary(_build_run_result(tmp_path), precision=2, stream=buffer)

    assert buffer.getvalue().splitlines()[1] == "Freq    : 1.41"


def test_write_markdown_report_default_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    result = _build_run_result(tmp_path)
    monkeypatch.chdir(tmp_path)

    report_path = reporting.write_markdown_report(result)

    expected = (tmp_path / "reports" / "data-20230102-030405.md").resolve()
    assert report_path == expected
    content = report_path.read_text(encoding="utf-8")

    assert "# Randomness Battery Report" in content
    assert "- **Total bytes:** 2" in content
    assert "- **Total bits:** 16" in content
    assert "| # | Estimator | Score |" in content
    assert "| 3 | Pairs | 2.250000 |" in content
    assert "| 10 | AC (50%) | -2.000000 |" in content
    assert "- **AC (lag):**" in content
    assert content.count("- **AC (lag):**") == 1
    assert "Generated on 2023-01-02T03:04:05+00:00 (duration: 1.23 s)" in content


def test_write_markdown_report_for_stdin(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    report_path = reporting.write_markdown_report(_build_run_result(tmp_path, from_file=False))

    assert report_path.name == "stdin-20230102-030405.md"
    assert "- **Source:** <stdin>" in report_path.read_text(encoding="utf-8")


def test_write_markdown_report_custom_path(tmp_path: Path) -> None:
    custom_path = tmp_path / "custom" / "report.md"

    written_path = reporting.write_markdown_report(_build_run_result(tmp_path), path=custom_path)

    assert written_path == custom_path
    assert custom_path.exists()
