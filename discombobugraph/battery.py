"""Battery orchestration: validate the buffer, run every estimator, assemble scores.

The Score Sequence has a fixed schema that callers rely on::

    [Shannon, Freq, Runs, Pairs, χ2, AC (1), AC (4), AC (8), AC (10%), AC (25%), AC (50%)]

The autocorrelation lags are derived from the bit length of the analysed
buffer; a lag that does not fit in the sequence is dropped from the set, and a
lag that is kept but is not a positive offset scores ``0.0``.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Iterator, List, Tuple

import numpy as np

from .bits import BufferLike, as_buffer, expand_bits
from .errors import (
    DiscombobugraphError,
    EstimatorExecutionError,
    InvalidConfigurationError,
    InvalidInputError,
)
from .estimators.base import EstimatorSpec
from .estimators.factory import (
    AUTOCORRELATION_DESCRIPTION,
    DEFAULT_SERIAL_WINDOW,
    build_estimator_suite,
)
from .estimators.statistical import autocorrelation_test

logger = logging.getLogger(__name__)

MIN_INPUT_LENGTH = 2
"""Shortest buffer, in bytes, the battery accepts."""


@dataclass(frozen=True)
class Lag:
    """Autocorrelation offset in bits together with its display label."""

    label: str
    value: int


@dataclass(frozen=True)
class BatteryResult:
    """Ordered scores produced by one battery run."""

    scores: Tuple[float, ...]
    labels: Tuple[str, ...]
    lags: Tuple[Lag, ...]
    total_bytes: int
    descriptions: Tuple[str, ...] = field(default_factory=tuple, repr=False)

    @property
    def bit_length(self) -> int:
        return self.total_bytes * 8

    def items(self) -> Iterator[Tuple[str, float]]:
        """Yield ``(label, score)`` pairs in Score Sequence order."""

        return iter(zip(self.labels, self.scores))

    def __len__(self) -> int:
        return len(self.scores)

    def __iter__(self) -> Iterator[float]:
        return iter(self.scores)

    def __getitem__(self, index: int) -> float:
        return self.scores[index]


def derive_lags(bit_length: int) -> Tuple[Lag, ...]:
    """Return the autocorrelation lags for a sequence of ``bit_length`` bits.

    Lags at or beyond the bit length are dropped; coinciding lags are kept.
    """

    candidates = (
        Lag("1", 1),
        Lag("4", 4),
        Lag("8", 8),
        Lag("10%", bit_length // 10),
        Lag("25%", bit_length // 4),
        Lag("50%", bit_length // 2),
    )
    return tuple(lag for lag in candidates if lag.value < bit_length)


class Analyzer:
    """Stateless entry point evaluating the full battery on a byte buffer.

    Construction only fixes the battery settings; every call to :meth:`run`
    or :meth:`analyze` works on its own copy of the input.
    """

    def __init__(
        self,
        *,
        min_length: int = MIN_INPUT_LENGTH,
        serial_window: int = DEFAULT_SERIAL_WINDOW,
    ) -> None:
        if min_length < MIN_INPUT_LENGTH:
            raise InvalidConfigurationError(
                f"Minimum input length must be at least {MIN_INPUT_LENGTH} bytes, got {min_length}."
            )
        self._min_length = min_length
        self._serial_window = serial_window
        self._suite = build_estimator_suite(serial_window)

    @property
    def min_length(self) -> int:
        return self._min_length

    @property
    def serial_window(self) -> int:
        return self._serial_window

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def run(self, bitstream: BufferLike) -> List[float]:
        """Return the Score Sequence for ``bitstream`` as a list of floats."""

        return list(self.analyze(bitstream).scores)

    def analyze(self, bitstream: BufferLike) -> BatteryResult:
        """Evaluate every estimator on ``bitstream``.

        Raises :class:`InvalidInputError` before any estimator runs when the
        buffer is too short.
        """

        data = as_buffer(bitstream)
        self._validate(data)
        bits = expand_bits(data)
        lags = derive_lags(len(bits))
        logger.debug(
            "Bitstream length: %d bytes, %d bits; lags %s",
            len(data),
            len(bits),
            [lag.value for lag in lags],
        )

        scores: List[float] = []
        labels: List[str] = []
        descriptions: List[str] = []
        for spec in self._suite:
            scores.append(self._evaluate(spec, data, bits))
            labels.append(spec.label)
            descriptions.append(spec.description)
        for lag in lags:
            scores.append(self._evaluate_lag(lag, data, bits))
            labels.append(f"AC ({lag.label})")
            descriptions.append(AUTOCORRELATION_DESCRIPTION)

        return BatteryResult(
            scores=tuple(scores),
            labels=tuple(labels),
            lags=lags,
            total_bytes=len(data),
            descriptions=tuple(descriptions),
        )

    # ------------------------------------------------------------------
    # Pipeline stages
    # ------------------------------------------------------------------
    def _validate(self, data: bytes) -> None:
        required = max(self._min_length, self._serial_window)
        if len(data) < required:
            raise InvalidInputError(
                f"Bitstream too short for analysis: {len(data)} bytes, at least {required} required."
            )

    def _evaluate(self, spec: EstimatorSpec, data: bytes, bits: np.ndarray) -> float:
        try:
            score = spec.estimator(data, bits)
        except DiscombobugraphError:
            raise
        except Exception as exc:
            raise EstimatorExecutionError(f"Estimator '{spec.name}' failed to execute.") from exc
        return _checked(spec.name, score)

    def _evaluate_lag(self, lag: Lag, data: bytes, bits: np.ndarray) -> float:
        if not 0 < lag.value < len(bits):
            return 0.0
        name = f"autocorrelation[{lag.value}]"
        try:
            score = autocorrelation_test(data, lag.value, bits)
        except DiscombobugraphError:
            raise
        except Exception as exc:
            raise EstimatorExecutionError(f"Estimator '{name}' failed to execute.") from exc
        return _checked(name, score)


def _checked(name: str, score: float) -> float:
    value = float(score)
    if not math.isfinite(value):
        raise EstimatorExecutionError(f"Estimator '{name}' produced a non-finite score ({value}).")
    return value


def run_battery(
    data: BufferLike,
    *,
    min_length: int = MIN_INPUT_LENGTH,
    serial_window: int = DEFAULT_SERIAL_WINDOW,
) -> BatteryResult:
    """Evaluate the battery on ``data`` with the given settings."""

    return Analyzer(min_length=min_length, serial_window=serial_window).analyze(data)


def analyze(data: BufferLike) -> Tuple[float, ...]:
    """Return the reference Score Sequence for ``data``."""

    return run_battery(data).scores


__all__ = [
    "Analyzer",
    "BatteryResult",
    "Lag",
    "MIN_INPUT_LENGTH",
    "analyze",
    "derive_lags",
    "run_battery",
]
