"""Collection of descriptive statistics computed for every residual series."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import fields

import numpy as np

from .residuals import as_residuals
from .stats import ResidualStats

METRICS: dict[str, Callable[[np.ndarray], float]] = {}


def register_metric(
    name: str,
) -> Callable[[Callable[[np.ndarray], float]], Callable[[np.ndarray], float]]:
    """Register *name* as a metric."""

    def decorator(fn: Callable[[np.ndarray], float]) -> Callable[[np.ndarray], float]:
        METRICS[name] = fn
        return fn

    return decorator


def _scaled_deviations(res: np.ndarray) -> tuple[np.ndarray, float]:
    """Return ``(u, scale)`` such that ``res - mean(res) == u * scale``.

    Dividing by the largest magnitude first keeps every moment of ``u`` of
    order one, so residuals near the limits of the float range neither
    underflow to zero nor overflow to ``inf``.
    """
    if np.all(res == res[0]):
        return np.zeros(res.size), 1.0
    scale = float(np.max(np.abs(res)))
    u = res / scale
    return u - np.mean(u), scale


def _central_moment(res: np.ndarray, order: int) -> float:
    u, scale = _scaled_deviations(res)
    with np.errstate(over="ignore", under="ignore"):
        return float(np.mean(u**order) * np.float64(scale) ** order)


def _standardized_moment(res: np.ndarray, order: int) -> float:
    u, _ = _scaled_deviations(res)
    m2 = np.mean(u**2)
    if m2 == 0:
        return np.nan
    return float(np.mean(u**order) / m2 ** (order / 2))


@register_metric("mean")
def mean(res: np.ndarray) -> float:
    return float(np.mean(res))


@register_metric("variance")
def variance(res: np.ndarray) -> float:
    """Population variance (divides by ``n``).

    Saturates to ``0`` or ``inf`` when the variance itself is not
    representable, e.g. for residuals of order ``1e-200`` or ``1e200``.
    """
    return _central_moment(res, 2)


@register_metric("std")
def std(res: np.ndarray) -> float:
    u, scale = _scaled_deviations(res)
    return float(scale * np.sqrt(np.mean(u**2)))


@register_metric("min")
def minimum(res: np.ndarray) -> float:
    return float(np.min(res))


@register_metric("max")
def maximum(res: np.ndarray) -> float:
    return float(np.max(res))


@register_metric("skewness")
def skewness(res: np.ndarray) -> float:
    """Third standardized moment; ``nan`` when the sample is constant."""
    return _standardized_moment(res, 3)


@register_metric("kurtosis")
def kurtosis(res: np.ndarray) -> float:
    """Excess kurtosis; ``nan`` when the sample is constant."""
    return _standardized_moment(res, 4) - 3.0


@register_metric("count")
def count(res: np.ndarray) -> int:
    return int(res.size)


@register_metric("rms")
def rms(res: np.ndarray) -> float:
    """Root mean square of the residuals."""
    scale = float(np.max(np.abs(res)))
    if scale == 0:
        return 0.0
    return float(scale * np.sqrt(np.mean((res / scale) ** 2)))


def residual_stats(residuals: Iterable[float] | np.ndarray) -> ResidualStats:
    """Compute a :class:`ResidualStats` for one residual series."""
    res = as_residuals(residuals)
    return ResidualStats(**{f.name: METRICS[f.name](res) for f in fields(ResidualStats)})
