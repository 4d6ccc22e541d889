"""Normal quantile-quantile plot coordinates."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

from .distributions import normal_quantile
from .metrics import std
from .residuals import as_residuals
from .stats import QQPoint


def qq_points(residuals: Iterable[float] | np.ndarray) -> tuple[QQPoint, ...]:
    """Pair each sorted residual with the standard normal quantile of its rank.

    Residuals are standardized with their own population mean and standard
    deviation; a zero deviation is replaced by ``1``.  Points are returned in
    ascending rank order.
    """
    res = as_residuals(residuals)
    n = res.size
    res.sort()

    theoretical = normal_quantile((np.arange(n) + 0.5) / n)
    sd = std(res)
    standardized = (res - np.mean(res)) / (sd or 1.0)

    return tuple(
        QQPoint(
            theoretical_quantile=float(q),
            standardized_sample=float(z),
            original_value=float(x),
            rank=rank,
        )
        for rank, (q, z, x) in enumerate(zip(theoretical, standardized, res), start=1)
    )
