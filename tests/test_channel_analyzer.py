import logging

import numpy as np
import pytest
from pytest import approx

from normality import (
    Benchmark,
    BenchmarkComparison,
    ChannelAnalyzer,
    DegenerateSampleWarning,
    EvaluationConfig,
    InsufficientDataError,
)


def make_channels(n: int = 200, seed: int = 0) -> dict[str, np.ndarray]:
    rng = np.random.default_rng(seed)
    return {
        "x": rng.normal(0.0, 1.0, n),
        "y": rng.normal(0.5, 2.0, n),
        "z": rng.normal(-0.2, 0.5, n),
        "clock": rng.normal(0.0, 0.1, n),
    }


def test_evaluate_per_channel_and_averages() -> None:
    channels = make_channels()
    report = ChannelAnalyzer(channels).evaluate()

    assert list(report.per_channel) == ["x", "y", "z", "clock"]
    ws = [ev.normality.w for ev in report.per_channel.values()]
    ps = [ev.normality.p_value for ev in report.per_channel.values()]
    assert report.overall.average_w == approx(np.mean(ws))
    assert report.overall.average_p_value == approx(np.mean(ps))
    assert report.overall.stats.count == 800
    assert report.overall.normality.n == 800
    assert report.skipped == {}
    for name, ev in report.per_channel.items():
        assert ev.channel_name == name
        assert ev.stats.mean == approx(np.mean(channels[name]))


def test_overall_pools_residuals() -> None:
    rng = np.random.default_rng(7)
    channels = {"a": rng.normal(0.0, 1.0, 300), "b": rng.normal(10.0, 1.0, 300)}
    report = ChannelAnalyzer(channels).evaluate()

    for ev in report.per_channel.values():
        assert ev.normality.w > 0.98
    assert report.overall.normality.reject_null is True
    assert report.overall.normality.w < report.overall.average_w - 0.05
    assert report.overall.stats.mean == approx(np.mean(np.concatenate(list(channels.values()))))


def test_channel_order_of_pooling_does_not_change_statistic() -> None:
    channels = make_channels(seed=3)
    forward = ChannelAnalyzer(channels).evaluate()
    backward = ChannelAnalyzer(dict(reversed(list(channels.items())))).evaluate()
    assert forward.overall.normality.w == approx(backward.overall.normality.w)


def test_benchmark_comparison() -> None:
    bench = Benchmark()
    assert bench.target_w == 0.981
    assert BenchmarkComparison.against(bench, 0.99, 0.6, 0).meets_benchmark is True
    below = BenchmarkComparison.against(bench, 0.95, 0.6, 1)
    assert below.meets_benchmark is False
    assert below.p_value_meets is True
    assert below.hypothesis_matches is False


def test_evaluate_with_custom_benchmark() -> None:
    channels = make_channels()
    lenient = EvaluationConfig(benchmark=Benchmark(target_w=0.5))
    strict = EvaluationConfig(benchmark=Benchmark(target_w=1.0))

    assert ChannelAnalyzer(channels, lenient).evaluate().benchmark.meets_benchmark is True
    report = ChannelAnalyzer(channels, strict).evaluate()
    assert report.benchmark.meets_benchmark is False
    assert report.benchmark.target_w == 1.0


def test_insufficient_channel_skipped(caplog: pytest.LogCaptureFixture) -> None:
    channels = make_channels(n=50)
    channels["clock"] = np.array([0.1, 0.2])

    with caplog.at_level(logging.WARNING, logger="normality.analyzer.channels"):
        report = ChannelAnalyzer(channels).evaluate()

    assert list(report.per_channel) == ["x", "y", "z"]
    assert "clock" in report.skipped
    assert "clock" in caplog.text
    assert report.overall.stats.count == 150


def test_insufficient_channel_raises_when_configured() -> None:
    channels = make_channels(n=50)
    channels["clock"] = []
    with pytest.raises(InsufficientDataError):
        ChannelAnalyzer(channels, EvaluationConfig(on_insufficient="raise")).evaluate()


def test_all_channels_insufficient() -> None:
    with pytest.raises(InsufficientDataError):
        ChannelAnalyzer({"x": [1.0], "y": [1.0, 2.0]}).evaluate()


def test_no_channels() -> None:
    with pytest.raises(ValueError):
        ChannelAnalyzer({})


def test_constant_channel_is_trivially_normal() -> None:
    channels = make_channels(n=30)
    channels["clock"] = np.full(30, 0.25)
    with pytest.warns(DegenerateSampleWarning):
        report = ChannelAnalyzer(channels).evaluate()
    clock = report.per_channel["clock"].normality
    assert (clock.w, clock.p_value, clock.reject_null) == (1.0, 1.0, False)


def test_qq_points_are_lazy_and_cached() -> None:
    report = ChannelAnalyzer(make_channels(n=40)).evaluate()
    ev = report.per_channel["x"]
    assert "qq_points" not in vars(ev)
    points = ev.qq_points
    assert len(points) == 40
    assert ev.qq_points is points


def test_analyzer_qq_points_for_short_channel() -> None:
    analyzer = ChannelAnalyzer({"x": [2.0, 1.0]})
    points = analyzer.qq_points("x")
    assert [pt.original_value for pt in points] == [1.0, 2.0]


def test_as_dict_and_frame() -> None:
    report = ChannelAnalyzer(make_channels(n=60)).evaluate()

    out = report.as_dict(include_qq=True)
    assert set(out) == {"perChannel", "overall", "benchmark", "skipped"}
    assert len(out["perChannel"]["x"]["qqPoints"]) == 60
    assert out["benchmark"]["targetW"] == 0.981
    assert out["overall"]["averageW"] == report.overall.average_w

    frame = report.to_frame()
    assert list(frame["channel"]) == ["x", "y", "z", "clock", "AVERAGE", "OVERALL"]
    assert frame.loc[4, "W"] == approx(report.overall.average_w)
    assert frame.loc[5, "count"] == 240


def test_report_residuals_cannot_be_changed_through_analyzer() -> None:
    channels = make_channels(n=30)
    analyzer = ChannelAnalyzer(channels)
    report = analyzer.evaluate()
    before = report.per_channel["x"].residuals.copy()

    with pytest.raises(ValueError):
        analyzer.channels["x"][0] = 100.0
    channels["x"][0] = 100.0
    np.testing.assert_array_equal(report.per_channel["x"].residuals, before)
