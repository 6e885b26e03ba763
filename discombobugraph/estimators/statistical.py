"""Concrete implementations of the randomness estimators.

Every estimator is a pure function of the input buffer. The frequency, runs
and serial estimators treat each *byte* as one binary sample (value ``1`` is a
one, anything else a zero); the chi-square and autocorrelation estimators work
on the expanded bit sequence.
"""

from __future__ import annotations

import math
from collections import Counter
from typing import Optional

import numpy as np

from ..bits import BufferLike, as_buffer
from ..errors import DegenerateStatisticError, InvalidInputError
from .base import resolves_degenerate
from .utils import (
    byte_histogram,
    guarded_sqrt_divide,
    require_samples,
    resolve_bits,
    shannon_entropy_from_counts,
    signed_sum,
)

# Windows up to this size are packed into a uint64 code.
_PACKED_WINDOW_LIMIT = 7


def shannon_entropy(data: BufferLike) -> float:
    """Return the normalised entropy deficiency ``1 - H / log2(n)``.

    ``0`` means the byte histogram reaches the highest entropy attainable for
    a buffer of this length; values near ``1`` mean most of the byte value
    space is unused.
    """

    data = as_buffer(data)
    n = require_samples(data, 2, "Shannon entropy")
    entropy = shannon_entropy_from_counts(byte_histogram(data))
    return min(1.0, max(0.0, 1.0 - entropy / math.log2(n)))


def frequency_test(data: BufferLike) -> float:
    """Return the monobit Z-score magnitude ``|S| / sqrt(n)``."""

    data = as_buffer(data)
    n = require_samples(data, 1, "Frequency test")
    return abs(signed_sum(data)) / math.sqrt(n)


@resolves_degenerate
def runs_test(data: BufferLike) -> float:
    """Return ``|runs - expected| / sqrt(expected)`` for the run count.

    A constant sample has no expected runs and scores ``DEGENERATE_SCORE``.
    """

    data = as_buffer(data)
    n = require_samples(data, 1, "Runs test")
    samples = np.frombuffer(data, dtype=np.uint8)
    runs = 1 + int(np.count_nonzero(samples[1:] != samples[:-1]))
    pi = data.count(1) / n
    expected = 2.0 * n * pi * (1.0 - pi)
    return guarded_sqrt_divide(abs(runs - expected), expected, "Runs test")


def serial_test(data: BufferLike, n: int = 2) -> float:
    """Return the chi-square statistic of overlapping ``n``-byte windows.

    The expected count per pattern is ``windows / 2**n``, which only holds
    when every byte is 0 or 1. Other inputs still produce a number, but it
    carries no statistical meaning. Only patterns that actually occur
    contribute to the sum.
    """

    data = as_buffer(data)
    if n < 1:
        raise InvalidInputError(f"Serial test window must be positive, got {n}.")
    length = require_samples(data, n, "Serial test")
    windows = length - n + 1
    expected = windows / 2.0**n
    return sum((count - expected) ** 2 / expected for count in _window_counts(data, n, windows))


def chi_square_test(data: BufferLike, bits: Optional[np.ndarray] = None) -> float:
    """Return the chi-square statistic of zero and one bit counts."""

    bits = resolve_bits(data, bits)
    total = require_samples(bits, 1, "Chi-square test")
    ones = int(np.count_nonzero(bits))
    expected = total / 2.0
    return sum((count - expected) ** 2 / expected for count in (total - ones, ones))


@resolves_degenerate
def autocorrelation_test(data: BufferLike, lag: int, bits: Optional[np.ndarray] = None) -> float:
    """Return the Z-score of ``P(bit[i] & bit[i + lag])`` against ``P(1)**2``.

    Both frequencies are normalised by the full bit length. Lags that do not
    fit in the sequence score ``0.0``; so does a sequence whose bits are all
    equal.
    """

    if lag < 0:
        raise InvalidInputError(f"Autocorrelation lag must not be negative, got {lag}.")
    bits = resolve_bits(data, bits)
    total = len(bits)
    if lag >= total:
        return 0.0
    overlap = total - lag
    and_count = int(np.count_nonzero(bits[:overlap] & bits[lag:lag + overlap]))
    f_and = and_count / total
    f_bias = int(np.count_nonzero(bits)) / total
    if f_bias * f_bias <= 0.0 or f_bias >= 1.0:
        raise DegenerateStatisticError(f"1-bit frequency is {f_bias}.")
    z_score = guarded_sqrt_divide(
        f_and - f_bias * f_bias, f_bias * (1.0 - f_bias), "Autocorrelation test"
    )
    return z_score * math.sqrt(total)


def _window_counts(data: bytes, n: int, windows: int):
    if n > _PACKED_WINDOW_LIMIT:
        return Counter(data[idx:idx + n] for idx in range(windows)).values()
    samples = np.frombuffer(data, dtype=np.uint8).astype(np.uint64)
    codes = np.zeros(windows, dtype=np.uint64)
    for offset in range(n):
        codes = (codes << np.uint64(8)) | samples[offset:offset + windows]
    _, counts = np.unique(codes, return_counts=True)
    return counts.tolist()


__all__ = [
    "autocorrelation_test",
    "chi_square_test",
    "frequency_test",
    "runs_test",
    "serial_test",
    "shannon_entropy",
]
