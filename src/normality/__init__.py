"""High level entry points for the residual normality package.

The package exposes a single :func:`evaluate` convenience function which
dispatches the input data to the appropriate analyzer.  It supports
``pandas`` ``DataFrame`` objects, mappings of channel name to residuals and
plain iterables.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

import numpy as np
import pandas as pd

from .analyzer.array import ArrayAnalyzer
from .analyzer.channels import ChannelAnalyzer
from .analyzer.dataframe import DataFrameAnalyzer
from .config import Benchmark, EvaluationConfig
from .distributions import expected_order_statistic, normal_cdf, normal_quantile
from .errors import DegenerateSampleWarning, InsufficientDataError, NormalityError
from .evaluation import (
    AggregateEvaluation,
    BenchmarkComparison,
    ChannelEvaluation,
    OverallEvaluation,
)
from .metrics import residual_stats
from .qq import qq_points
from .shapiro import shapiro_wilk, shapiro_wilk_coefficients
from .stats import NormalityTestResult, QQPoint, ResidualStats

__all__ = [
    "AggregateEvaluation",
    "ArrayAnalyzer",
    "Benchmark",
    "BenchmarkComparison",
    "ChannelAnalyzer",
    "ChannelEvaluation",
    "DataFrameAnalyzer",
    "DegenerateSampleWarning",
    "EvaluationConfig",
    "InsufficientDataError",
    "NormalityError",
    "NormalityTestResult",
    "OverallEvaluation",
    "QQPoint",
    "ResidualStats",
    "evaluate",
    "expected_order_statistic",
    "normal_cdf",
    "normal_quantile",
    "qq_points",
    "residual_stats",
    "shapiro_wilk",
    "shapiro_wilk_coefficients",
]


def evaluate(
    data: pd.DataFrame | Mapping[str, Iterable[float]] | Iterable[float],
    y_true: Iterable[float] | float | None = None,
    *,
    channels: str | list[str] | None = None,
    pred_suffix: str | None = None,
    config: EvaluationConfig | None = None,
) -> AggregateEvaluation:
    """Evaluate the normality of residuals for various input types.

    Parameters
    ----------
    data:
        A :class:`pandas.DataFrame` (see :class:`DataFrameAnalyzer`), a
        mapping of channel name to residuals, or a single sequence of
        predictions (residuals when ``y_true`` is ``None``).
    y_true:
        Truth values matching a single prediction sequence, or a scalar
        baseline.  Only valid for sequence input.
    channels, pred_suffix:
        Forwarded to :class:`DataFrameAnalyzer`.  Only valid for DataFrame
        input.
    config:
        Significance level, benchmark and insufficient-data policy.

    Returns
    -------
    AggregateEvaluation
        The report; a single sequence is evaluated as one channel named
        ``"residual"``.

    Raises
    ------
    TypeError
        If an argument is given that does not apply to the type of *data*.
    """

    is_frame = isinstance(data, pd.DataFrame)
    if y_true is not None and (is_frame or isinstance(data, Mapping)):
        raise TypeError("y_true is only accepted with a single prediction sequence")
    if not is_frame and (channels is not None or pred_suffix is not None):
        raise TypeError("channels and pred_suffix are only accepted with DataFrame input")

    if is_frame:
        return DataFrameAnalyzer(data, channels, pred_suffix=pred_suffix).evaluate(config)

    if isinstance(data, Mapping):
        return ChannelAnalyzer(data, config).evaluate()

    y_pred = np.asarray(list(data), dtype=float)
    analyzer = ArrayAnalyzer(y_pred, 0.0 if y_true is None else y_true)
    return ChannelAnalyzer({"residual": analyzer.res}, config).evaluate()
