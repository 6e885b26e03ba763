"""Command line entry point for the randomness battery."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .app import BatteryApp
from .errors import (
    EstimatorExecutionError,
    InvalidConfigurationError,
    InvalidInputError,
    MissingFileError,
)

EXIT_SUCCESS = 0
EXIT_UNEXPECTED_ERROR = 1
EXIT_MISSING_FILE = 2
EXIT_INVALID_CONFIG = 3
EXIT_ESTIMATOR_FAILURE = 4
EXIT_INVALID_INPUT = 5


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="discombobugraph",
        description="Compute a battery of randomness scores over raw bytes read from stdin.",
    )
    parser.add_argument(
        "--input",
        "-i",
        type=Path,
        help="Read bytes from this file instead of standard input.",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        help="Path to an INI configuration file.",
    )
    parser.add_argument(
        "--report",
        "-r",
        type=Path,
        help="Optional path where a markdown report will be written.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Print input details and debug diagnostics.",
    )
    return parser


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        stream=sys.stderr,
    )


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)
    app = BatteryApp()
    try:
        app.run(
            input_path=args.input,
            config_path=args.config,
            report_path=args.report,
            verbose=args.verbose,
        )
    except MissingFileError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_MISSING_FILE
    except InvalidConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_INVALID_CONFIG
    except InvalidInputError as exc:
        print(f"Invalid input: {exc}", file=sys.stderr)
        return EXIT_INVALID_INPUT
    except EstimatorExecutionError as exc:
        print(f"Estimator failed: {exc}", file=sys.stderr)
        return EXIT_ESTIMATOR_FAILURE
    except Exception as exc:  # pragma: no cover - last-resort guard
        print(f"Unexpected error: {exc}", file=sys.stderr)
        return EXIT_UNEXPECTED_ERROR
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
