"""Data structures for normality tests and residual statistics."""

from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class NormalityTestResult:
    """Outcome of a Shapiro-Wilk test on one residual sample.

    ``hypothesis`` is ``1`` when the null hypothesis of normality is
    rejected at level ``alpha`` and ``0`` otherwise.
    """

    w: float
    p_value: float
    hypothesis: int
    reject_null: bool
    alpha: float = 0.05
    n: int = 0

    @classmethod
    def decide(cls, w: float, p_value: float, alpha: float, n: int) -> "NormalityTestResult":
        """Build a result applying the decision rule ``p_value < alpha``."""
        reject = bool(p_value < alpha)
        return cls(
            w=float(w),
            p_value=float(p_value),
            hypothesis=int(reject),
            reject_null=reject,
            alpha=float(alpha),
            n=int(n),
        )

    @property
    def interpretation(self) -> str:
        if self.reject_null:
            return "Residuals are NOT normally distributed (systematic errors remain)"
        return "Residuals are consistent with a normal distribution (systematic errors removed)"

    def as_dict(self) -> dict[str, float | int | bool]:
        """Return the result keyed by the report field names."""

        return {
            "W": self.w,
            "pValue": self.p_value,
            "hypothesis": self.hypothesis,
            "rejectNull": self.reject_null,
        }


@dataclass(frozen=True)
class ResidualStats:
    """Immutable container for descriptive residual statistics.

    Moments are population moments.  ``skewness`` and ``kurtosis`` (excess)
    are ``nan`` for a constant sample.
    """

    mean: float
    std: float
    variance: float
    min: float
    max: float
    skewness: float
    kurtosis: float
    count: int
    rms: float

    def as_dict(self) -> dict[str, float | int]:
        """Return statistics as a plain dictionary."""

        return asdict(self)


@dataclass(frozen=True)
class QQPoint:
    """One point of a normal quantile-quantile plot."""

    theoretical_quantile: float
    standardized_sample: float
    original_value: float
    rank: int

    def as_dict(self) -> dict[str, float | int]:
        return {
            "theoreticalQuantile": self.theoretical_quantile,
            "standardizedSample": self.standardized_sample,
            "originalValue": self.original_value,
            "rank": self.rank,
        }
