from __future__ import annotations

from collections.abc import Iterable
from typing import List

import numpy as np
import pandas as pd

from ..config import DEFAULT_CHANNELS, EvaluationConfig
from ..evaluation import AggregateEvaluation
from ..metrics import METRICS
from .channels import ChannelAnalyzer


class DataFrameAnalyzer:
    """Analyzer that builds per-channel residuals from a ``pandas.DataFrame``.

    Two layouts are understood:

    * residual columns: every column listed in ``channels`` already holds
      residuals (``pred_suffix`` is ``None``);
    * prediction/truth pairs: channel ``c`` is read from the columns
      ``c + pred_suffix`` and ``c + true_suffix`` and the residual is
      ``predicted - actual``.

    Rows where a channel has missing values are dropped for that channel
    only.

    Parameters
    ----------
    df : pd.DataFrame
        Source data.
    channels : str | list[str] | None
        Channel name(s).  Defaults to every column for residual columns and
        to ``DEFAULT_CHANNELS`` for prediction/truth pairs.
    pred_suffix, true_suffix : str | None
        Column suffixes of the prediction/truth layout.
    """

    def __init__(
        self,
        df: pd.DataFrame,
        channels: str | list[str] | None = None,
        *,
        pred_suffix: str | None = None,
        true_suffix: str = "_true",
    ) -> None:
        self.df = df
        self.pred_suffix = pred_suffix
        self.true_suffix = true_suffix
        if channels is None:
            default = list(df.columns) if pred_suffix is None else list(DEFAULT_CHANNELS)
            self.channels: List[str] = [str(c) for c in default]
        else:
            self.channels = [channels] if isinstance(channels, str) else list(channels)

        missing = [col for col in self._source_columns() if col not in df.columns]
        if missing:
            raise KeyError(f"columns not found in DataFrame: {missing}")

    def _source_columns(self) -> List[str]:
        if self.pred_suffix is None:
            return list(self.channels)
        cols: List[str] = []
        for ch in self.channels:
            cols += [ch + self.pred_suffix, ch + self.true_suffix]
        return cols

    def residuals(self) -> dict[str, np.ndarray]:
        """Return the residual array of every channel, NaN rows removed."""
        out: dict[str, np.ndarray] = {}
        for ch in self.channels:
            if self.pred_suffix is None:
                res = self.df[ch].to_numpy(dtype=float)
            else:
                y_pred = self.df[ch + self.pred_suffix].to_numpy(dtype=float)
                y_true = self.df[ch + self.true_suffix].to_numpy(dtype=float)
                res = y_pred - y_true
            out[ch] = res[~np.isnan(res)]
        return out

    def evaluate(self, config: EvaluationConfig | None = None) -> AggregateEvaluation:
        """Run the multi-channel normality evaluation."""
        return ChannelAnalyzer(self.residuals(), config).evaluate()

    def summary(self, metrics: Iterable[str] | None = None) -> pd.DataFrame:
        """Tabulate descriptive statistics, one row per channel.

        Parameters
        ----------
        metrics : Iterable[str] | None
            Metric names registered in ``METRICS``.  Defaults to all of them.
        """
        wanted = list(metrics) if metrics is not None else list(METRICS)
        unknown = [m for m in wanted if m not in METRICS]
        if unknown:
            raise KeyError(f"unknown metrics: {unknown}")

        rows = []
        for ch, res in self.residuals().items():
            row: dict[str, object] = {"channel": ch}
            for name in wanted:
                row[name] = METRICS[name](res) if res.size else np.nan
            rows.append(row)
        return pd.DataFrame(rows, columns=["channel"] + wanted)
