"""Configuration parsing utilities for the randomness battery."""

from __future__ import annotations

import configparser
from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple

from .battery import MIN_INPUT_LENGTH
from .errors import InvalidConfigurationError, MissingFileError
from .estimators.factory import DEFAULT_SERIAL_WINDOW

DEFAULT_MAX_BYTES = 64 * 1024 * 1024
DEFAULT_PRECISION = 6
MAX_PRECISION = 17


@dataclass(frozen=True)
class BatterySection:
    """Settings forwarded to :class:`~discombobugraph.battery.Analyzer`."""

    min_length: int = MIN_INPUT_LENGTH
    serial_window: int = DEFAULT_SERIAL_WINDOW
    max_bytes: int | None = DEFAULT_MAX_BYTES


@dataclass(frozen=True)
class OutputSection:
    """Options controlling how results should be presented to the user."""

    precision: int = DEFAULT_PRECISION
    report_path: Path | None = None


@dataclass(frozen=True)
class BatteryConfig:
    """Aggregate configuration container returned by :func:`load_config`."""

    battery: BatterySection = field(default_factory=BatterySection)
    output: OutputSection = field(default_factory=OutputSection)
    warnings: Tuple[str, ...] = field(default_factory=tuple)


def default_config() -> BatteryConfig:
    """Return the configuration used when no file is supplied."""

    return BatteryConfig()


def load_config(path: Path) -> BatteryConfig:
    """Load and validate an INI configuration file."""

    parser = configparser.ConfigParser()
    try:
        with path.open("r", encoding="utf-8") as config_file:
            parser.read_file(config_file)
    except FileNotFoundError as exc:
        raise MissingFileError(f"Configuration file not found: {path}") from exc
    except OSError as exc:  # pragma: no cover - filesystem guard
        raise MissingFileError(f"Could not read configuration file: {path}") from exc
    except configparser.Error as exc:
        raise InvalidConfigurationError(f"Configuration is not valid INI: {exc}") from exc

    base_dir = path.resolve().parent
    warnings: list[str] = []
    known = {"battery", "output"}
    for section in parser.sections():
        if section not in known:
            warnings.append(f"Ignoring unknown section [{section}].")

    return BatteryConfig(
        battery=_parse_battery(parser),
        output=_parse_output(parser, base_dir),
        warnings=tuple(warnings),
    )


def _parse_battery(parser: configparser.ConfigParser) -> BatterySection:
    if not parser.has_section("battery"):
        return BatterySection()
    section = parser["battery"]

    min_length = _get_int(section, "min_length", MIN_INPUT_LENGTH, section_name="battery")
    if min_length < MIN_INPUT_LENGTH:
        raise InvalidConfigurationError(
            f"Option 'min_length' in [battery] must be at least {MIN_INPUT_LENGTH}."
        )
    serial_window = _get_int(
        section, "serial_window", DEFAULT_SERIAL_WINDOW, section_name="battery"
    )
    if serial_window < 1:
        raise InvalidConfigurationError(
            "Option 'serial_window' in [battery] must be a positive integer."
        )
    max_bytes = _get_int(section, "max_bytes", DEFAULT_MAX_BYTES, section_name="battery")
    return BatterySection(
        min_length=min_length,
        serial_window=serial_window,
        max_bytes=max_bytes if max_bytes > 0 else None,
    )


def _parse_output(parser: configparser.ConfigParser, base_dir: Path) -> OutputSection:
    if not parser.has_section("output"):
        return OutputSection()
    section = parser["output"]

    precision = _get_int(section, "precision", DEFAULT_PRECISION, section_name="output")
    if not 0 <= precision <= MAX_PRECISION:
        raise InvalidConfigurationError(
            f"Option 'precision' in [output] must be between 0 and {MAX_PRECISION}."
        )
    report_path: Path | None = None
    raw_report = section.get("report_path", "").strip()
    if raw_report:
        report_path = _resolve_path(raw_report, base_dir)
    return OutputSection(precision=precision, report_path=report_path)


def _get_int(
    section: configparser.SectionProxy, key: str, default: int, *, section_name: str
) -> int:
    raw_value = section.get(key, "").strip()
    if not raw_value:
        return default
    try:
        return int(raw_value)
    except ValueError as exc:
        raise InvalidConfigurationError(
            f"Option '{key}' in [{section_name}] must be an integer value."
        ) from exc


def _resolve_path(raw_path: str, base_dir: Path) -> Path:
    candidate = Path(raw_path).expanduser()
    if not candidate.is_absolute():
        candidate = base_dir / candidate
    return candidate.resolve()


__all__ = [
    "BatteryConfig",
    "BatterySection",
    "OutputSection",
    "default_config",
    "load_config",
]
