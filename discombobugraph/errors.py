"""Custom exceptions for the randomness battery."""

from __future__ import annotations


class DiscombobugraphError(Exception):
    """Base error type for application specific failures."""


class MissingFileError(DiscombobugraphError):
    """Raised when a required input file could not be located."""


class InvalidConfigurationError(DiscombobugraphError):
    """Raised when the configuration file is malformed or invalid."""


class EstimatorExecutionError(DiscombobugraphError):
    """Raised when an estimator fails with an unexpected error."""


class InvalidInputError(DiscombobugraphError):
    """Raised when the provided buffer cannot be analysed."""


class EmptyInputFileError(InvalidInputError):
    """Raised when the input file does not contain any bytes."""


class InputTooLargeError(InvalidInputError):
    """Raised when the input exceeds the configured size cap."""


class DegenerateStatisticError(DiscombobugraphError):
    """Raised when a statistic's normaliser is zero or undefined.

    Estimators resolve this locally to ``DEGENERATE_SCORE``; it never escapes
    an estimator call.
    """
