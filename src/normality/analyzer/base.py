"""Base class shared by the residual analyzers.

An analyzer owns one validated residual array and runs the descriptive
statistics, the Shapiro-Wilk test and the Q-Q plot builder on it.  Concrete
subclasses provide the logic for building the residuals from various input
types.
"""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

from ..metrics import residual_stats
from ..qq import qq_points
from ..residuals import as_residuals
from ..shapiro import shapiro_wilk
from ..stats import NormalityTestResult, QQPoint, ResidualStats


class BaseAnalyzer:
    """Hold residuals and compute their normality summaries."""

    def __init__(self, residuals: Iterable[float] | np.ndarray) -> None:
        """Validate and store a private copy of *residuals*."""
        self.res = as_residuals(residuals)

    def summary(self) -> ResidualStats:
        """Return descriptive statistics of the residuals."""
        return residual_stats(self.res)

    def normality(self, alpha: float = 0.05) -> NormalityTestResult:
        """Run the Shapiro-Wilk test on the residuals."""
        return shapiro_wilk(self.res, alpha=alpha)

    def qq_points(self) -> tuple[QQPoint, ...]:
        """Return Q-Q plot coordinates of the residuals."""
        return qq_points(self.res)
