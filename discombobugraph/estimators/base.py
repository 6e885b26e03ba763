"""Common interfaces and conventions shared by the estimators."""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, TypeVar

import numpy as np

from ..errors import DegenerateStatisticError

logger = logging.getLogger(__name__)

DEGENERATE_SCORE: float = 0.0
"""Score reported when a statistic has no variance to normalise against.

Runs with a constant sample and autocorrelation with a 1-bit share of 0 or 1
both resolve to this value. It reads as "no measurable deviation" and is a
fixed convention, not the outcome of a floating point division.
"""

F = TypeVar("F", bound=Callable[..., float])


class Estimator(Protocol):
    """Callable computing a single score from a byte buffer."""

    def __call__(self, data: bytes, bits: Optional[np.ndarray] = None) -> float:
        """Return the score for ``data``; ``bits`` is its pre-expanded form."""


@dataclass(frozen=True)
class EstimatorSpec:
    """Registry entry binding an estimator to its position in the battery."""

    name: str
    label: str
    estimator: Estimator
    description: str


def resolves_degenerate(func: F) -> F:
    """Map :class:`DegenerateStatisticError` raised by ``func`` to ``DEGENERATE_SCORE``."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except DegenerateStatisticError as exc:
            logger.debug("%s is degenerate: %s", func.__name__, exc)
            return DEGENERATE_SCORE

    return wrapper  # type: ignore[return-value]


__all__ = [
    "DEGENERATE_SCORE",
    "Estimator",
    "EstimatorSpec",
    "resolves_degenerate",
]
