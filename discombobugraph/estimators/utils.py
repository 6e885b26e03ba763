"""Utility helpers shared by the estimators."""

from __future__ import annotations

import math
from collections import Counter
from typing import Optional

import numpy as np

from ..bits import expand_bits
from ..errors import DegenerateStatisticError, InvalidInputError


def byte_histogram(data: bytes) -> Counter[int]:
    """Return the occurrence count of every byte value present in ``data``."""

    counts = np.bincount(np.frombuffer(data, dtype=np.uint8), minlength=256)
    return Counter({value: int(count) for value, count in enumerate(counts) if count})


def shannon_entropy_from_counts(counts: Counter[int]) -> float:
    """Compute Shannon entropy in bits from symbol counts."""

    total = sum(counts.values())
    if total == 0:
        return 0.0
    entropy = 0.0
    for count in counts.values():
        probability = count / total
        if probability > 0:
            entropy -= probability * math.log2(probability)
    return entropy


def signed_sum(data: bytes) -> int:
    """Return the +1/-1 walk total treating each byte as one binary sample."""

    ones = data.count(1)
    return ones - (len(data) - ones)


def resolve_bits(data: bytes, bits: Optional[np.ndarray]) -> np.ndarray:
    """Return ``bits`` when supplied, otherwise expand ``data``."""

    return expand_bits(data) if bits is None else bits


def require_samples(data, minimum: int, what: str) -> int:
    """Return ``len(data)`` or raise when fewer than ``minimum`` samples exist."""

    length = len(data)
    if length < minimum:
        raise InvalidInputError(
            f"{what} requires at least {minimum} samples, got {length}."
        )
    return length


def guarded_sqrt_divide(numerator: float, variance: float, what: str) -> float:
    """Return ``numerator / sqrt(variance)`` or flag a degenerate statistic."""

    if not variance > 0 or math.isinf(variance):
        raise DegenerateStatisticError(f"{what} has non-positive variance ({variance}).")
    return numerator / math.sqrt(variance)


__all__ = [
    "byte_histogram",
    "guarded_sqrt_divide",
    "require_samples",
    "resolve_bits",
    "shannon_entropy_from_counts",
    "signed_sum",
]
