"""Input contract for residual series."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

from .errors import InsufficientDataError


def as_residuals(values: Iterable[float] | np.ndarray, *, min_size: int = 1) -> np.ndarray:
    """Return *values* as a fresh 1-D ``float64`` array.

    The returned array is always a copy, so callers may sort it in place
    without touching the original data.

    Raises
    ------
    ValueError
        If the input is not one-dimensional or holds non-finite values.
    InsufficientDataError
        If fewer than *min_size* values are given.
    """
    if isinstance(values, np.ndarray):
        res = np.array(values, dtype=float, copy=True)
    else:
        res = np.array(list(values), dtype=float)
    if res.ndim != 1:
        raise ValueError(f"residuals must be one-dimensional, got shape {res.shape}")
    if not np.all(np.isfinite(res)):
        raise ValueError("residuals must be finite")
    if res.size < min_size:
        raise InsufficientDataError(res.size, min_size, what="residual analysis")
    return res
