"""Shapiro-Wilk test for normality of residuals.

The weights are derived from Blom's approximation of the expected normal
order statistics rather than from exact tables, and the p-value uses
Royston's continuous approximation of the null distribution of ``W``:

* ``n == 3``: exact distribution of ``W``.
* ``4 <= n <= 11``: :func:`p_value_small_sample`.
* ``n >= 12``: :func:`p_value_large_sample`.
"""

from __future__ import annotations

import logging
import math
import warnings
from collections.abc import Iterable

import numpy as np

from .distributions import expected_order_statistic, normal_cdf
from .errors import DegenerateSampleWarning, InsufficientDataError
from .residuals import as_residuals
from .stats import NormalityTestResult

logger = logging.getLogger(__name__)

MIN_SAMPLE_SIZE = 3
MAX_CALIBRATED_SIZE = 5000
SMALL_SAMPLE_LIMIT = 11


def shapiro_wilk_coefficients(n: int) -> np.ndarray:
    """Return the ``n // 2`` Shapiro-Wilk weights, normalised to unit length.

    ``a[i] = m(n - i) - m(i + 1)`` for 0-based ``i`` where ``m`` is the
    approximate expected order statistic.  A zero-norm vector (``n < 2``)
    is returned unnormalised.
    """
    half = n // 2
    if half == 0:
        return np.zeros(0)
    i = np.arange(1, half + 1)
    a = expected_order_statistic(n - i + 1, n) - expected_order_statistic(i, n)
    norm = np.sqrt(np.sum(a * a))
    if norm == 0:
        return a
    return a / norm


def _p_value_exact(w: float) -> float:
    # n == 3: W is supported on [3/4, 1]
    p = 6.0 / math.pi * (math.asin(math.sqrt(w)) - math.asin(math.sqrt(0.75)))
    return min(max(p, 0.0), 1.0)


def p_value_small_sample(w: float, n: int) -> float:
    """Royston p-value for ``4 <= n <= 11``."""
    if w >= 1.0:
        return 1.0
    gamma = 0.459 * n - 2.273
    mu = -0.0006714 * n**3 + 0.025054 * n**2 - 0.39978 * n + 0.5440
    sigma = math.exp(-0.0020322 * n**3 + 0.062767 * n**2 - 0.77857 * n + 1.3822)
    arg = gamma - math.log(1.0 - w)
    if arg <= 0:
        # W below the support of the approximation
        return 0.0
    y = -math.log(arg)
    z = (y - mu) / sigma
    return min(max(1.0 - normal_cdf(z), 0.0), 1.0)


def p_value_large_sample(w: float, n: int) -> float:
    """Royston p-value for ``n >= 12``."""
    if w >= 1.0:
        return 1.0
    log_n = math.log(n)
    mu = 0.0038915 * log_n**3 - 0.083751 * log_n**2 - 0.31082 * log_n - 1.5861
    sigma = math.exp(0.0030302 * log_n**2 - 0.082676 * log_n - 0.4803)
    z = (math.log(1.0 - w) - mu) / sigma
    return min(max(1.0 - normal_cdf(z), 0.0), 1.0)


def shapiro_wilk_p_value(w: float, n: int) -> float:
    """Dispatch to the p-value approximation appropriate for *n*."""
    if n < MIN_SAMPLE_SIZE:
        raise InsufficientDataError(n, MIN_SAMPLE_SIZE)
    if n == MIN_SAMPLE_SIZE:
        return _p_value_exact(w)
    if n <= SMALL_SAMPLE_LIMIT:
        return p_value_small_sample(w, n)
    return p_value_large_sample(w, n)


def shapiro_wilk_statistic(sorted_res: np.ndarray) -> float:
    """Return ``W`` for an ascending, non-constant sample."""
    n = sorted_res.size
    # W is scale invariant; work on values of order one so SS cannot
    # underflow or overflow
    x = sorted_res / max(abs(sorted_res[0]), abs(sorted_res[-1]))
    x = (x - np.mean(x)) / (x[-1] - x[0])
    ss = float(np.sum(x**2))
    a = shapiro_wilk_coefficients(n)
    half = a.size
    b = float(np.sum(a * (x[::-1][:half] - x[:half])))
    # the full antisymmetric weight vector is (-a, a) / sqrt(2)
    return min(b * b / (2.0 * ss), 1.0)


def shapiro_wilk(
    residuals: Iterable[float] | np.ndarray,
    alpha: float = 0.05,
) -> NormalityTestResult:
    """Test the null hypothesis that *residuals* come from a normal distribution.

    Parameters
    ----------
    residuals:
        Finite residual values; at least three are required.
    alpha:
        Significance level of the decision ``p_value < alpha``.

    Returns
    -------
    NormalityTestResult
        ``W`` in ``(0, 1]``, the approximate p-value and the decision.

    Raises
    ------
    InsufficientDataError
        If fewer than three residuals are given.
    """
    if not 0.0 < alpha < 1.0:
        raise ValueError(f"alpha must lie in (0, 1), got {alpha}")

    res = as_residuals(residuals, min_size=0)
    n = res.size
    if n < MIN_SAMPLE_SIZE:
        raise InsufficientDataError(n, MIN_SAMPLE_SIZE)
    if n > MAX_CALIBRATED_SIZE:
        logger.warning(
            "Shapiro-Wilk p-value approximation is calibrated for n <= %d, got n=%d",
            MAX_CALIBRATED_SIZE,
            n,
        )

    res.sort()
    if np.all(res == res[0]):
        logger.debug("constant sample of size %d, returning W=1", n)
        warnings.warn(
            "all residuals are identical; normality test is trivially satisfied",
            DegenerateSampleWarning,
            stacklevel=2,
        )
        return NormalityTestResult.decide(1.0, 1.0, alpha, n)

    w = shapiro_wilk_statistic(res)
    p_value = shapiro_wilk_p_value(w, n)
    return NormalityTestResult.decide(w, p_value, alpha, n)
