"""Input helpers for reading the byte buffers to analyse."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from .config import DEFAULT_MAX_BYTES
from .errors import EmptyInputFileError, InputTooLargeError, MissingFileError

STDIN_NAME = "<stdin>"


@dataclass(frozen=True)
class InputData:
    """Container describing the bytes loaded from a file or stream."""

    data: bytes
    source: str
    path: Path | None = None

    @property
    def byte_count(self) -> int:
        return len(self.data)


def read_input_bytes(
    path: Path | str | None = None,
    *,
    stream: BinaryIO | None = None,
    max_bytes: int | None = DEFAULT_MAX_BYTES,
) -> InputData:
    """Read every byte from ``path``, or from ``stream`` (stdin) when no path is given."""

    if path is not None:
        return _read_file(_normalise_path(path), max_bytes)
    source = stream if stream is not None else sys.stdin.buffer
    data = _read_limited(source, max_bytes, STDIN_NAME)
    return InputData(data=data, source=STDIN_NAME)


def _read_file(candidate: Path, max_bytes: int | None) -> InputData:
    if not candidate.is_file():
        raise MissingFileError(f"Input file not found: {candidate}")
    try:
        with candidate.open("rb") as handle:
            data = _read_limited(handle, max_bytes, str(candidate))
    except OSError as exc:  # pragma: no cover - filesystem guard
        raise MissingFileError(f"Could not read input file: {candidate}") from exc
    if not data:
        raise EmptyInputFileError(f"Input file '{candidate}' is empty.")
    return InputData(data=data, source=str(candidate), path=candidate)


def _read_limited(handle: BinaryIO, max_bytes: int | None, source: str) -> bytes:
    if max_bytes is None:
        return handle.read()
    # One extra byte tells an exact fit apart from an overflow.
    data = handle.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise InputTooLargeError(
            f"Input '{source}' exceeds the allowed maximum of {max_bytes} bytes."
        )
    return data


def _normalise_path(path: Path | str) -> Path:
    return Path(path).expanduser().resolve()


__all__ = ["InputData", "STDIN_NAME", "read_input_bytes"]
