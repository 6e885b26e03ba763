"""Statistical randomness estimators."""

from .base import DEGENERATE_SCORE, Estimator, EstimatorSpec, resolves_degenerate
from .factory import build_estimator_suite
from .statistical import (
    autocorrelation_test,
    chi_square_test,
    frequency_test,
    runs_test,
    serial_test,
    shannon_entropy,
)

__all__ = [
    "DEGENERATE_SCORE",
    "Estimator",
    "EstimatorSpec",
    "autocorrelation_test",
    "build_estimator_suite",
    "chi_square_test",
    "frequency_test",
    "resolves_degenerate",
    "runs_test",
    "serial_test",
    "shannon_entropy",
]
