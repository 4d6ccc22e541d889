"""Multi-channel evaluation and benchmark comparison."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

import numpy as np

from ..config import EvaluationConfig
from ..errors import InsufficientDataError
from ..evaluation import (
    AggregateEvaluation,
    BenchmarkComparison,
    ChannelEvaluation,
    OverallEvaluation,
)
from ..metrics import residual_stats
from ..qq import qq_points
from ..residuals import as_residuals
from ..shapiro import MIN_SAMPLE_SIZE, shapiro_wilk
from ..stats import QQPoint

logger = logging.getLogger(__name__)


class ChannelAnalyzer:
    """Evaluate residuals of several named error channels together.

    Parameters
    ----------
    channels:
        Mapping of channel name to its residual series, e.g. ``{"x": ...,
        "y": ..., "z": ..., "clock": ...}``.  Order is preserved.
    config:
        Significance level, benchmark and insufficient-data policy.
    """

    def __init__(
        self,
        channels: Mapping[str, Iterable[float] | np.ndarray],
        config: EvaluationConfig | None = None,
    ) -> None:
        if not channels:
            raise ValueError("at least one channel is required")
        self.config = config or EvaluationConfig()
        self.channels: dict[str, np.ndarray] = {
            str(name): as_residuals(values, min_size=0) for name, values in channels.items()
        }
        # reports share these arrays
        for res in self.channels.values():
            res.flags.writeable = False

    def channel(self, name: str) -> ChannelEvaluation:
        """Evaluate a single channel; raises for insufficient data."""
        res = self.channels[name]
        return ChannelEvaluation(
            channel_name=name,
            normality=shapiro_wilk(res, alpha=self.config.alpha),
            stats=residual_stats(res),
            residuals=res,
        )

    def qq_points(self, name: str) -> tuple[QQPoint, ...]:
        """Return Q-Q plot coordinates for channel *name*."""
        return qq_points(self.channels[name])

    def evaluate(self) -> AggregateEvaluation:
        """Run the full evaluation and compare it with the benchmark."""
        per_channel: dict[str, ChannelEvaluation] = {}
        skipped: dict[str, str] = {}

        for name in self.channels:
            try:
                ev = self.channel(name)
            except InsufficientDataError as exc:
                if self.config.on_insufficient == "raise":
                    raise
                logger.warning("skipping channel %r: %s", name, exc)
                skipped[name] = str(exc)
                continue
            logger.debug(
                "channel %r: n=%d W=%.6f p=%.6f", name, ev.stats.count, ev.normality.w, ev.normality.p_value
            )
            per_channel[name] = ev

        if not per_channel:
            counts = [res.size for res in self.channels.values()]
            raise InsufficientDataError(max(counts), MIN_SAMPLE_SIZE, what="the channel evaluation")

        average_w = float(np.mean([ev.normality.w for ev in per_channel.values()]))
        average_p = float(np.mean([ev.normality.p_value for ev in per_channel.values()]))

        pooled = np.concatenate([ev.residuals for ev in per_channel.values()])
        overall = OverallEvaluation(
            normality=shapiro_wilk(pooled, alpha=self.config.alpha),
            stats=residual_stats(pooled),
            average_w=average_w,
            average_p_value=average_p,
        )

        bench = self.config.benchmark
        comparison = BenchmarkComparison.against(
            bench, average_w, average_p, overall.normality.hypothesis
        )
        logger.debug(
            "average W=%.6f vs target %.4f: %s",
            average_w,
            bench.target_w,
            "meets benchmark" if comparison.meets_benchmark else "below benchmark",
        )
        return AggregateEvaluation(
            per_channel=per_channel,
            overall=overall,
            benchmark=comparison,
            skipped=skipped,
        )
