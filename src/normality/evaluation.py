"""Result containers for single-channel and multi-channel evaluations."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any

import numpy as np
import pandas as pd

from .config import Benchmark
from .qq import qq_points
from .stats import NormalityTestResult, QQPoint, ResidualStats


@dataclass(frozen=True)
class ChannelEvaluation:
    """Normality test and statistics of one physical error channel.

    ``qq_points`` is built on first access and cached.
    """

    channel_name: str
    normality: NormalityTestResult
    stats: ResidualStats
    residuals: np.ndarray = field(repr=False, compare=False)

    @cached_property
    def qq_points(self) -> tuple[QQPoint, ...]:
        return qq_points(self.residuals)

    def as_dict(self, *, include_qq: bool = False) -> dict[str, Any]:
        out: dict[str, Any] = {
            "channelName": self.channel_name,
            "normality": self.normality.as_dict(),
            "stats": self.stats.as_dict(),
        }
        if include_qq:
            out["qqPoints"] = [pt.as_dict() for pt in self.qq_points]
        return out


@dataclass(frozen=True)
class OverallEvaluation:
    """Pooled test over all residuals plus the channel-averaged scores."""

    normality: NormalityTestResult
    stats: ResidualStats
    average_w: float
    average_p_value: float


@dataclass(frozen=True)
class BenchmarkComparison:
    """Verdict of an evaluation against a :class:`~normality.config.Benchmark`.

    ``meets_benchmark`` is the verdict; ``p_value_meets`` and
    ``hypothesis_matches`` are reported for information only.
    """

    target_w: float
    target_p_value: float
    target_hypothesis: int
    meets_benchmark: bool
    p_value_meets: bool
    hypothesis_matches: bool

    @classmethod
    def against(
        cls,
        benchmark: Benchmark,
        average_w: float,
        average_p_value: float,
        hypothesis: int,
    ) -> "BenchmarkComparison":
        """Compare channel-averaged scores and the pooled decision with *benchmark*."""
        return cls(
            target_w=benchmark.target_w,
            target_p_value=benchmark.target_p_value,
            target_hypothesis=benchmark.target_hypothesis,
            meets_benchmark=bool(average_w >= benchmark.target_w),
            p_value_meets=bool(average_p_value >= benchmark.target_p_value),
            hypothesis_matches=hypothesis == benchmark.target_hypothesis,
        )


@dataclass(frozen=True)
class AggregateEvaluation:
    """Complete report over several residual channels."""

    per_channel: Mapping[str, ChannelEvaluation]
    overall: OverallEvaluation
    benchmark: BenchmarkComparison
    skipped: Mapping[str, str] = field(default_factory=dict)

    def as_dict(self, *, include_qq: bool = False) -> dict[str, Any]:
        """Return a nested plain-dict view of the report."""
        return {
            "perChannel": {
                name: ev.as_dict(include_qq=include_qq) for name, ev in self.per_channel.items()
            },
            "overall": {
                "normality": self.overall.normality.as_dict(),
                "stats": self.overall.stats.as_dict(),
                "averageW": self.overall.average_w,
                "averagePValue": self.overall.average_p_value,
            },
            "benchmark": {
                "targetW": self.benchmark.target_w,
                "targetPValue": self.benchmark.target_p_value,
                "targetHypothesis": self.benchmark.target_hypothesis,
                "meetsBenchmark": self.benchmark.meets_benchmark,
                "pValueMeets": self.benchmark.p_value_meets,
                "hypothesisMatches": self.benchmark.hypothesis_matches,
            },
            "skipped": dict(self.skipped),
        }

    def to_frame(self) -> pd.DataFrame:
        """Tabulate the report: one row per channel, then ``AVERAGE`` and ``OVERALL``."""

        def row(name: str, sw: NormalityTestResult, st: ResidualStats) -> dict[str, Any]:
            return {
                "channel": name,
                "W": sw.w,
                "pValue": sw.p_value,
                "hypothesis": sw.hypothesis,
                "rejectNull": sw.reject_null,
                "mean": st.mean,
                "std": st.std,
                "min": st.min,
                "max": st.max,
                "count": st.count,
            }

        rows = [row(name, ev.normality, ev.stats) for name, ev in self.per_channel.items()]
        rows.append({"channel": "AVERAGE", "W": self.overall.average_w, "pValue": self.overall.average_p_value})
        rows.append(row("OVERALL", self.overall.normality, self.overall.stats))
        columns = ["channel", "W", "pValue", "hypothesis", "rejectNull", "mean", "std", "min", "max", "count"]
        return pd.DataFrame(rows, columns=columns)
