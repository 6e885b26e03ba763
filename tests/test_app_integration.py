from __future__ import annotations

import io
from pathlib import Path

import pytest

from discombobugraph.app import BatteryApp
from discombobugraph.errors import InvalidInputError

CONFIG_TEMPLATE = """
[battery]
min_length = 2

[output]
precision = 4
""".strip()


def _write_files(tmp_path: Path) -> tuple[Path, Path]:
    config_path = tmp_path / "config.ini"
    config_path.write_text(CONFIG_TEMPLATE, encoding="utf-8")
    data_path = tmp_path / "data.bin"
    data_path.write_bytes(bytes((idx * 73 + 5) % 256 for idx in range(256)))
    return data_path, config_path


def test_app_run_from_file_with_config(tmp_path: Path) -> None:
    input_path, config_path = _write_files(tmp_path)
    output = io.StringIO()
    report_path = tmp_path / "report.md"

    result = BatteryApp().run(
        input_path=input_path,
        config_path=config_path,
        report_path=report_path,
        output=output,
    )

    assert result.battery.total_bytes == 256
    assert len(result.scores) == 11
    lines = output.getvalue().splitlines()
    assert len(lines) == 11
    assert lines[0].startswith("Shannon : ")
    assert len(lines[0].split(": ")[1].split(".")[1]) == 4
    assert report_path.exists()


def test_app_run_from_stream_without_config(tmp_path: Path) -> None:
    output = io.StringIO()

    result = BatteryApp().run(stream=io.BytesIO(b"\xff\x00"), output=output)

    assert result.source == "<stdin>"
    assert result.input_path is None
    assert output.getvalue().splitlines()[3] == "Pairs   : 2.250000"


def test_app_run_rejects_short_stream() -> None:
    output = io.StringIO()

    with pytest.raises(InvalidInputError):
        BatteryApp().run(stream=io.BytesIO(b"\x01"), output=output)
    assert output.getvalue() == ""


def test_app_run_writes_nothing_besides_the_report(tmp_path: Path) -> None:
    input_path, config_path = _write_files(tmp_path)
    config_path.write_text(
        CONFIG_TEMPLATE + "\n\n[logging]\nenabled = true\npath = logs/history.jsonl\n",
        encoding="utf-8",
    )
    report_path = tmp_path / "report.md"

    BatteryApp().run(
        input_path=input_path,
        config_path=config_path,
        report_path=report_path,
        output=io.StringIO(),
    )

    assert sorted(path.name for path in tmp_path.iterdir()) == [
        "config.ini",
        "data.bin",
        "report.md",
    ]
