from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from tse_evaluation.metrics import MetricKind
from tse_evaluation.report import (
    MetricResult,
    SchemeEvaluation,
    scheme_label,
    statistic_labels,
)


def _evaluation(index: int, mae: float) -> SchemeEvaluation:
    return SchemeEvaluation(
        index=index,
        values={"aMAE": mae, "aMSE": 3.0 * mae, "aBias^2": mae, "aVar": 2.0 * mae},
        column_values={
            "aMAE": np.array([mae, mae]),
            "aMSE": np.array([3.0 * mae, 3.0 * mae]),
            "aBias^2": np.array([mae, mae]),
            "aVar": np.array([2.0 * mae, 2.0 * mae]),
        },
    )


@pytest.fixture
def result() -> MetricResult:
    # Deliberately out of order: assembly must sort by scheme index.
    return MetricResult.from_schemes(
        metrics=(MetricKind.MAE, MetricKind.MSE),
        evaluations=[_evaluation(2, 0.3), _evaluation(0, 0.1), _evaluation(1, 0.2)],
        variable_labels=("Q1", "Q2"),
    )


def test_scheme_labels():
    assert scheme_label(0) == "unweighted"
    assert scheme_label(3) == "weighting scheme 3"


def test_statistic_labels_expand_mse():
    assert statistic_labels((MetricKind.MSE, MetricKind.RMSE)) == (
        "aMSE",
        "aBias^2",
        "aVar",
        "aRMSE",
    )


def test_from_schemes_orders_rows_by_scheme_index(result):
    assert result.scheme_labels == ("unweighted", "weighting scheme 1", "weighting scheme 2")
    np.testing.assert_allclose(result.values["aMAE"], [0.1, 0.2, 0.3])
    assert result.column_values["aMAE"].shape == (3, 2)


def test_value_lookup_by_kind_label_or_component(result):
    assert result.value(1, MetricKind.MAE) == pytest.approx(0.2)
    assert result.value(1, "aMAE") == pytest.approx(0.2)
    assert result.value(1, "mae") == pytest.approx(0.2)
    assert result.value(2, "aVar") == pytest.approx(0.6)
    assert result.decomposition(0) == pytest.approx((0.3, 0.1, 0.2))


def test_value_lookup_errors(result):
    with pytest.raises(KeyError):
        result.value(0, "aRMSE")
    with pytest.raises(KeyError):
        result.value(0, "not-a-metric")
    with pytest.raises(IndexError):
        result.value(3, "aMAE")


def test_to_frame_is_numeric(result):
    df = result.to_frame()

    assert list(df.columns) == ["aMAE", "aMSE", "aBias^2", "aVar"]
    assert df.index.name == "scheme"
    assert all(pd.api.types.is_float_dtype(t) for t in df.dtypes)
    assert df.loc["weighting scheme 2", "aMSE"] == pytest.approx(0.9)


def test_column_frame_has_one_column_per_variable(result):
    df = result.column_frame(MetricKind.MAE)

    assert list(df.columns) == ["Q1", "Q2"]
    assert df.loc["unweighted", "Q2"] == pytest.approx(0.1)


def test_to_dict_is_json_friendly(result):
    d = result.to_dict()

    assert d["metrics"] == ["aMAE", "aMSE"]
    assert d["schemes"][0] == "unweighted"
    assert d["variables"] == ["Q1", "Q2"]
    assert isinstance(d["values"]["aBias^2"][0], float)
