"""Application orchestration for the randomness battery CLI."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from time import perf_counter
from typing import BinaryIO, TextIO

from .battery import Analyzer, BatteryResult
from .config import BatteryConfig, default_config, load_config
from .io import InputData, read_input_bytes
from .reporting import print_console_summary, write_markdown_report

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunResult:
    """Summary of a full application run."""

    source: str
    input_path: Path | None
    config_path: Path | None
    battery: BatteryResult
    started_at: datetime
    duration: timedelta

    @property
    def scores(self) -> tuple[float, ...]:
        return self.battery.scores


class BatteryApp:
    """High level service wiring configuration, input, analysis and rendering."""

    def __init__(self, analyzer_factory=Analyzer) -> None:
        self._analyzer_factory = analyzer_factory

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def run(
        self,
        input_path: Path | None = None,
        config_path: Path | None = None,
        report_path: Path | None = None,
        verbose: bool = False,
        *,
        stream: BinaryIO | None = None,
        output: TextIO | None = None,
    ) -> RunResult:
        """Execute the battery workflow.

        Bytes come from ``input_path`` or, when it is ``None``, from ``stream``
        (standard input by default).
        """

        config = self._load_config(config_path)
        started_at = datetime.now(timezone.utc)
        timer_start = perf_counter()
        input_data = self._load_input(input_path, stream, config)
        battery = self._analyze(input_data, config)
        result = RunResult(
            source=input_data.source,
            input_path=input_data.path,
            config_path=config_path,
            battery=battery,
            started_at=started_at,
            duration=timedelta(seconds=perf_counter() - timer_start),
        )
        print_console_summary(
            result, verbose=verbose, precision=config.output.precision, stream=output
        )
        self._render_report(result, report_path, config)
        return result

    # ------------------------------------------------------------------
    # Pipeline stages
    # ------------------------------------------------------------------
    def _load_config(self, path: Path | None) -> BatteryConfig:
        if path is None:
            return default_config()
        config = load_config(path)
        for warning in config.warnings:
            logger.warning(warning)
        return config

    def _load_input(
        self, path: Path | None, stream: BinaryIO | None, config: BatteryConfig
    ) -> InputData:
        return read_input_bytes(path, stream=stream, max_bytes=config.battery.max_bytes)

    def _analyze(self, input_data: InputData, config: BatteryConfig) -> BatteryResult:
        analyzer = self._analyzer_factory(
            min_length=config.battery.min_length,
            serial_window=config.battery.serial_window,
        )
        return analyzer.analyze(input_data.data)

    def _render_report(
        self, result: RunResult, report_path: Path | None, config: BatteryConfig
    ) -> Path | None:
        target = report_path if report_path is not None else config.output.report_path
        if target is None:
            return None
        written = write_markdown_report(result, target, precision=config.output.precision)
        logger.info("Report written to %s", written)
        return written


__all__ = ["BatteryApp", "RunResult"]
