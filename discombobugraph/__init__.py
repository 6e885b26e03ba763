"""Statistical randomness battery over raw byte buffers."""

from .app import BatteryApp, RunResult
from .battery import Analyzer, BatteryResult, Lag, analyze, derive_lags, run_battery
from .bits import expand_bits
from .errors import (
    DegenerateStatisticError,
    DiscombobugraphError,
    EstimatorExecutionError,
    InvalidInputError,
)
from .estimators import DEGENERATE_SCORE

__all__ = [
    "Analyzer",
    "BatteryApp",
    "BatteryResult",
    "DEGENERATE_SCORE",
    "DegenerateStatisticError",
    "DiscombobugraphError",
    "EstimatorExecutionError",
    "InvalidInputError",
    "Lag",
    "RunResult",
    "analyze",
    "derive_lags",
    "expand_bits",
    "run_battery",
]
