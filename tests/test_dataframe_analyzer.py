import numpy as np
import pandas as pd
import pytest
from pytest import approx

from normality import DataFrameAnalyzer


def make_pairs(n: int = 40) -> pd.DataFrame:
    rng = np.random.default_rng(4)
    data = {}
    for ch in ("x", "y", "z", "clock"):
        truth = rng.normal(size=n)
        data[f"{ch}_pred"] = truth + rng.normal(0.0, 0.2, size=n)
        data[f"{ch}_true"] = truth
    return pd.DataFrame(data)


def test_pair_layout_residuals() -> None:
    df = make_pairs()
    analyzer = DataFrameAnalyzer(df, pred_suffix="_pred")

    res = analyzer.residuals()
    assert list(res) == ["x", "y", "z", "clock"]
    np.testing.assert_allclose(res["y"], df["y_pred"] - df["y_true"])


def test_pair_layout_evaluate() -> None:
    report = DataFrameAnalyzer(make_pairs(), ["x", "clock"], pred_suffix="_pred").evaluate()
    assert list(report.per_channel) == ["x", "clock"]
    assert report.overall.stats.count == 80


def test_residual_columns_drop_nan_per_channel() -> None:
    df = pd.DataFrame(
        {
            "radial": [0.1, -0.2, np.nan, 0.3, 0.0],
            "along": [0.2, 0.1, -0.1, 0.05, -0.3],
        }
    )
    analyzer = DataFrameAnalyzer(df)
    res = analyzer.residuals()
    assert res["radial"].size == 4
    assert res["along"].size == 5

    out = analyzer.summary(metrics=("mean", "std", "count"))
    assert list(out.columns) == ["channel", "mean", "std", "count"]
    assert out.loc[0, "mean"] == approx(0.05)
    assert out.loc[0, "std"] == approx(np.nanstd(df["radial"], ddof=0))
    assert out.loc[1, "count"] == 5


def test_summary_all_metrics() -> None:
    out = DataFrameAnalyzer(make_pairs(), pred_suffix="_pred").summary()
    assert {"skewness", "kurtosis", "rms"} <= set(out.columns)
    assert len(out) == 4


def test_missing_columns() -> None:
    with pytest.raises(KeyError):
        DataFrameAnalyzer(make_pairs(), ["radial"], pred_suffix="_pred")


def test_unknown_metric() -> None:
    with pytest.raises(KeyError):
        DataFrameAnalyzer(make_pairs(), pred_suffix="_pred").summary(metrics=("r2",))
