"""Exceptions and warnings raised while evaluating residuals."""

from __future__ import annotations


class NormalityError(Exception):
    """Base class for errors raised by the package."""


class InsufficientDataError(NormalityError, ValueError):
    """Raised when a residual series is too short for the requested statistic."""

    def __init__(self, n: int, required: int, what: str = "the Shapiro-Wilk test") -> None:
        self.n = n
        self.required = required
        super().__init__(f"{what} requires at least {required} residuals, got {n}")


class DegenerateSampleWarning(UserWarning):
    """Issued when every residual has the same value."""
