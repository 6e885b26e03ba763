"""Reporting utilities for console and markdown output."""

from __future__ import annotations

import re
import sys
import textwrap
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from string import Template
from typing import TYPE_CHECKING, TextIO

from .config import DEFAULT_PRECISION

if TYPE_CHECKING:
    from datetime import timedelta

    from .app import RunResult
    from .battery import BatteryResult

LABEL_WIDTH = 8


@dataclass(frozen=True)
class ReportTemplate:
    """Container for the markdown report template."""

    template: Template = Template(
        textwrap.dedent(
            """
            # Randomness Battery Report

            ## Input
            ${input_metadata}

            ## Scores
            ${score_table}

            ## Interpretations
            ${interpretations}

            _Generated on ${timestamp} (duration: ${duration})._
            """
        ).strip()
    )


DEFAULT_TEMPLATE = ReportTemplate()


def format_score_lines(battery: "BatteryResult", *, precision: int = DEFAULT_PRECISION) -> list[str]:
    """Return one ``"<label>: <score>"`` line per score, in Score Sequence order."""

    return [
        f"{label:<{LABEL_WIDTH}}: {score:.{precision}f}" for label, score in battery.items()
    ]


def print_console_summary(
    result: "RunResult",
    *,
    verbose: bool = False,
    precision: int = DEFAULT_PRECISION,
    stream: TextIO | None = None,
) -> None:
    """Print every score of ``result`` to ``stream``."""

    output = stream if stream is not None else sys.stdout
    battery = result.battery
    if verbose:
        print(f"Input: {result.source}", file=output)
        print(f"Bitstream length: {battery.total_bytes} bytes ({battery.bit_length} bits)", file=output)
        lag_values = ", ".join(f"{lag.label}={lag.value}" for lag in battery.lags)
        print(f"Lags: {lag_values}", file=output)
    for line in format_score_lines(battery, precision=precision):
        print(line, file=output)


def build_markdown_report(
    result: "RunResult",
    *,
    precision: int = DEFAULT_PRECISION,
    template: Template | None = None,
) -> str:
    """Generate a markdown report for ``result`` using ``template``."""

    template = template or DEFAULT_TEMPLATE.template
    return template.substitute(
        input_metadata=_format_input_metadata(result),
        score_table=_format_score_table(result.battery, precision),
        interpretations=_format_interpretations(result.battery),
        timestamp=result.started_at.astimezone(timezone.utc).isoformat(),
        duration=_format_duration(result.duration),
    )


def write_markdown_report(
    result: "RunResult",
    path: Path | None = None,
    *,
    precision: int = DEFAULT_PRECISION,
    template: Template | None = None,
) -> Path:
    """Render and persist a markdown report for ``result``."""

    target = _resolve_report_path(result, path)
    target.parent.mkdir(parents=True, exist_ok=True)
    content = build_markdown_report(result, precision=precision, template=template)
    target.write_text(content, encoding="utf-8")
    return target


# ---------------------------------------------------------------------------
# Helper formatting utilities
# ---------------------------------------------------------------------------

def _format_input_metadata(result: "RunResult") -> str:
    battery = result.battery
    lines = [
        _metadata_line(result.source, result.input_path),
        f"- **Total bytes:** {battery.total_bytes}",
        f"- **Total bits:** {battery.bit_length}",
        "- **Lags:** " + ", ".join(f"{lag.label} = {lag.value}" for lag in battery.lags),
    ]
    if result.config_path is not None:
        lines.append(f"- **Configuration:** {result.config_path}")
    return "\n".join(lines)


def _metadata_line(source: str, path: Path | None) -> str:
    if path is None:
        return f"- **Source:** {source}"
    try:
        stat = path.stat()
        modified = datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc)
        details = f"modified: {modified.isoformat()}"
    except OSError:
        details = "metadata unavailable"
    return f"- **Source:** {path} ({details})"


def _format_score_table(battery: "BatteryResult", precision: int) -> str:
    header = "| # | Estimator | Score |"
    separator = "| --- | --- | --- |"
    rows = [
        f"| {index} | {label} | {score:.{precision}f} |"
        for index, (label, score) in enumerate(battery.items())
    ]
    return "\n".join([header, separator, *rows])


def _format_interpretations(battery: "BatteryResult") -> str:
    seen: list[str] = []
    lines: list[str] = []
    for label, description in zip(battery.labels, battery.descriptions):
        if description in seen:
            continue
        seen.append(description)
        name = "AC (lag)" if label.startswith("AC (") else label
        lines.append(f"- **{name}:** {description}")
    if not lines:
        return "- No additional interpretations were recorded."
    return "\n".join(lines)


def _format_duration(duration: "timedelta") -> str:
    total_seconds = duration.total_seconds()
    if total_seconds < 1:
        return f"{total_seconds * 1000:.0f} ms"
    return f"{total_seconds:.2f} s"


def _resolve_report_path(result: "RunResult", path: Path | None) -> Path:
    if path is not None:
        return Path(path).expanduser().resolve()
    base_dir = Path("reports")
    stem = result.input_path.stem if result.input_path is not None else "stdin"
    safe_stem = re.sub(r"[^A-Za-z0-9_.-]+", "-", stem).strip("-") or "analysis"
    timestamp = result.started_at.astimezone(timezone.utc).strftime("%Y%m%d-%H%M%S")
    return (base_dir / f"{safe_stem}-{timestamp}.md").resolve()


__all__ = [
    "DEFAULT_TEMPLATE",
    "ReportTemplate",
    "build_markdown_report",
    "format_score_lines",
    "print_console_summary",
    "write_markdown_report",
]
