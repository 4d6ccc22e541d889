"""Closed-form approximations of the standard normal distribution.

Both functions accept scalars or arrays.  Scalars come back as plain
``float`` values, arrays as ``numpy.ndarray`` of the same shape.
"""

from __future__ import annotations

import numpy as np

# Abramowitz & Stegun 26.2.23, |error| < 4.5e-4
_C = (2.515517, 0.802853, 0.010328)
_D = (1.432788, 0.189269, 0.001308)

# Abramowitz & Stegun 7.1.26, |error| < 1.5e-7
_ERF_A = (0.254829592, -0.284496736, 1.421413741, -1.453152027, 1.061405429)
_ERF_P = 0.3275911


def _unwrap(out: np.ndarray, scalar: bool) -> float | np.ndarray:
    return float(out) if scalar else out


def normal_quantile(p: float | np.ndarray) -> float | np.ndarray:
    """Approximate inverse CDF of the standard normal distribution.

    ``p <= 0`` maps to ``-inf``, ``p >= 1`` to ``+inf`` and ``p == 0.5`` to
    exactly ``0``.
    """
    p_arr = np.asarray(p, dtype=float)
    scalar = p_arr.ndim == 0
    p_arr = np.atleast_1d(p_arr)

    inside = (p_arr > 0.0) & (p_arr < 1.0)
    tail = np.where(p_arr < 0.5, p_arr, 1.0 - p_arr)
    tail = np.where(inside, tail, 0.5)

    t = np.sqrt(-2.0 * np.log(tail))
    num = _C[0] + _C[1] * t + _C[2] * t**2
    den = 1.0 + _D[0] * t + _D[1] * t**2 + _D[2] * t**3
    q = t - num / den
    q = np.where(p_arr < 0.5, -q, q)

    q = np.where(p_arr == 0.5, 0.0, q)
    q = np.where(p_arr <= 0.0, -np.inf, q)
    q = np.where(p_arr >= 1.0, np.inf, q)
    return _unwrap(q.reshape(np.shape(p)), scalar)


def normal_cdf(x: float | np.ndarray) -> float | np.ndarray:
    """Approximate CDF of the standard normal distribution."""
    x_arr = np.asarray(x, dtype=float)
    scalar = x_arr.ndim == 0
    x_arr = np.atleast_1d(x_arr)

    sign = np.where(x_arr < 0, -1.0, 1.0)
    u = np.abs(x_arr) / np.sqrt(2.0)
    with np.errstate(over="ignore", invalid="ignore"):
        t = 1.0 / (1.0 + _ERF_P * u)
        poly = ((((_ERF_A[4] * t + _ERF_A[3]) * t + _ERF_A[2]) * t + _ERF_A[1]) * t + _ERF_A[0]) * t
        erf = 1.0 - poly * np.exp(-u * u)
    erf = np.where(np.isinf(u), 1.0, erf)
    out = 0.5 * (1.0 + sign * erf)
    return _unwrap(out.reshape(np.shape(x)), scalar)


def expected_order_statistic(i: int | np.ndarray, n: int) -> float | np.ndarray:
    """Approximate expected value of the *i*-th of *n* standard normal order statistics.

    Uses Blom's plotting position ``(i - 0.375) / (n + 0.25)``; ``i`` is
    1-based.
    """
    i_arr = np.asarray(i, dtype=float)
    if n < 1 or np.any(i_arr < 1) or np.any(i_arr > n):
        raise ValueError(f"order statistic index must satisfy 1 <= i <= n, got i={i}, n={n}")
    return normal_quantile((i_arr - 0.375) / (n + 0.25))
