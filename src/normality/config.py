"""Configuration objects for residual normality evaluations."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any

DEFAULT_CHANNELS: tuple[str, ...] = ("x", "y", "z", "clock")

ON_INSUFFICIENT = ("skip", "raise")


@dataclass(frozen=True)
class Benchmark:
    """Reference scores an evaluation is compared against."""

    target_w: float = 0.9810
    target_p_value: float = 0.5840
    target_hypothesis: int = 0

    def __post_init__(self) -> None:
        if not 0.0 < self.target_w <= 1.0:
            raise ValueError(f"target_w must lie in (0, 1], got {self.target_w}")
        if not 0.0 <= self.target_p_value <= 1.0:
            raise ValueError(f"target_p_value must lie in [0, 1], got {self.target_p_value}")
        if self.target_hypothesis not in (0, 1):
            raise ValueError(f"target_hypothesis must be 0 or 1, got {self.target_hypothesis}")


@dataclass(frozen=True)
class EvaluationConfig:
    """Evaluation defaults.

    ``on_insufficient`` decides what happens to a channel with fewer than
    three residuals: ``"skip"`` records it in the report and leaves it out
    of the aggregate, ``"raise"`` propagates
    :class:`~normality.errors.InsufficientDataError`.
    """

    alpha: float = 0.05
    benchmark: Benchmark = field(default_factory=Benchmark)
    on_insufficient: str = "skip"

    def __post_init__(self) -> None:
        if not 0.0 < self.alpha < 1.0:
            raise ValueError(f"alpha must lie in (0, 1), got {self.alpha}")
        if self.on_insufficient not in ON_INSUFFICIENT:
            raise ValueError(f"on_insufficient must be one of {ON_INSUFFICIENT}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EvaluationConfig":
        """Build a configuration from plain data such as a parsed YAML/JSON file."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise KeyError(f"unknown configuration keys: {sorted(unknown)}")
        kwargs = dict(data)
        bench = kwargs.get("benchmark")
        if isinstance(bench, Mapping):
            kwargs["benchmark"] = Benchmark(**bench)
        return cls(**kwargs)
