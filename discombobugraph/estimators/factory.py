"""Registry of the estimators evaluated by the battery, in output order."""

from __future__ import annotations

from typing import Tuple

from ..errors import InvalidConfigurationError
from .base import EstimatorSpec
from .statistical import (
    chi_square_test,
    frequency_test,
    runs_test,
    serial_test,
    shannon_entropy,
)

DEFAULT_SERIAL_WINDOW = 2


def build_estimator_suite(serial_window: int = DEFAULT_SERIAL_WINDOW) -> Tuple[EstimatorSpec, ...]:
    """Return the fixed-lag estimators in Score Sequence order.

    Autocorrelation is not listed here; the battery adds one entry per lag.
    """

    if serial_window < 1:
        raise InvalidConfigurationError(
            f"Serial window must be a positive integer, got {serial_window}."
        )
    serial_label = "Pairs" if serial_window == 2 else f"Serial({serial_window})"
    return (
        EstimatorSpec(
            name="shannon",
            label="Shannon",
            estimator=lambda data, bits=None: shannon_entropy(data),
            description=(
                "Entropy deficiency of the byte histogram. 0 is the highest entropy "
                "attainable for this length; values near 1 mean most byte values are unused."
            ),
        ),
        EstimatorSpec(
            name="frequency",
            label="Freq",
            estimator=lambda data, bits=None: frequency_test(data),
            description=(
                "Monobit Z-score over byte samples. A high value suggests an imbalance "
                "between ones and zeros."
            ),
        ),
        EstimatorSpec(
            name="runs",
            label="Runs",
            estimator=lambda data, bits=None: runs_test(data),
            description=(
                "Runs Z-score over byte samples. Values near 0 are consistent with "
                "randomness; large values point to clustering or excessive alternation."
            ),
        ),
        EstimatorSpec(
            name="serial",
            label=serial_label,
            estimator=lambda data, bits=None: serial_test(data, serial_window),
            description=(
                f"Chi-square of overlapping {serial_window}-sample windows against a binary "
                "alphabet. High values indicate repetitive patterns."
            ),
        ),
        EstimatorSpec(
            name="chi_square",
            label="χ2",
            estimator=chi_square_test,
            description=(
                "Chi-square of zero and one bit counts. Values near 0 match a uniform "
                "bit distribution; larger values indicate bias."
            ),
        ),
    )


AUTOCORRELATION_DESCRIPTION = (
    "Z-score of bit pairs at the given lag both being set, against the independence "
    "expectation. Values far from 0 indicate correlation at that distance."
)

__all__ = [
    "AUTOCORRELATION_DESCRIPTION",
    "DEFAULT_SERIAL_WINDOW",
    "build_estimator_suite",
]
