"""
Unit tests for named metric sets.

These tests validate registry wiring only. We do NOT re-test formula math
here (see test_formulas.py).
"""

from __future__ import annotations

import pytest

from tse_evaluation.metrics import (
    FULL_SCALE_DEPENDENT,
    FULL_SCALE_INDEPENDENT,
    METRIC_FORMULAS,
    METRIC_SET_NAMES,
    MetricKind,
    MetricSet,
    get_metric_set,
    list_metric_sets,
    resolve_metrics,
)


def test_full_sets_cover_the_two_metric_families() -> None:
    assert FULL_SCALE_DEPENDENT.metrics == (
        MetricKind.MAE,
        MetricKind.MSE,
        MetricKind.RMSE,
        MetricKind.MSLE,
        MetricKind.RMSLE,
    )
    assert FULL_SCALE_INDEPENDENT.metrics == (
        MetricKind.MAPE,
        MetricKind.SMAPE,
        MetricKind.RAE,
        MetricKind.RSE,
        MetricKind.RRSE,
    )
    assert all(METRIC_FORMULAS[k].scale_dependent for k in FULL_SCALE_DEPENDENT.metrics)
    assert not any(METRIC_FORMULAS[k].scale_dependent for k in FULL_SCALE_INDEPENDENT.metrics)


def test_there_is_one_metric_set_per_operation() -> None:
    operations = [s.operation for s in list_metric_sets()]

    assert operations == [
        "AVEMAE",
        "AVEMSE",
        "AVERMSE",
        "AVEMSLE",
        "AVERMSLE",
        "FullScaleDependent",
        "AVEMAPE",
        "AVESMAPE",
        "AVERAE",
        "AVERSE",
        "AVERRSE",
        "FullScaleIndependent",
    ]
    assert len(METRIC_SET_NAMES) == 12


@pytest.mark.parametrize("name", ["avemae", "AVEMAE", "  AveMae "])
def test_get_metric_set_is_case_insensitive(name) -> None:
    assert get_metric_set(name).metrics == (MetricKind.MAE,)


def test_get_metric_set_accepts_operation_names() -> None:
    assert get_metric_set("FullScaleIndependent") is FULL_SCALE_INDEPENDENT


def test_get_metric_set_unknown_name_lists_valid_sets() -> None:
    with pytest.raises(KeyError) as excinfo:
        get_metric_set("everything")

    assert "full_scale_dependent" in str(excinfo.value)


def test_resolve_metrics_accepts_every_form() -> None:
    assert resolve_metrics("full_scale_independent") == FULL_SCALE_INDEPENDENT.metrics
    assert resolve_metrics(FULL_SCALE_DEPENDENT) == FULL_SCALE_DEPENDENT.metrics
    assert resolve_metrics(MetricKind.RSE) == (MetricKind.RSE,)
    assert resolve_metrics("aRRSE") == (MetricKind.RRSE,)
    assert resolve_metrics(["aMAE", "mse", "aMAE"]) == (MetricKind.MAE, MetricKind.MSE)


def test_resolve_metrics_rejects_bad_selections() -> None:
    with pytest.raises(ValueError):
        resolve_metrics("nonsense")
    with pytest.raises(ValueError):
        resolve_metrics([])
    with pytest.raises(TypeError):
        resolve_metrics(3)  # type: ignore[arg-type]


def test_metric_set_is_a_plain_value_object() -> None:
    custom = MetricSet(
        name="abs_only",
        operation="ABSONLY",
        description="Absolute errors only.",
        metrics=(MetricKind.MAE, MetricKind.RAE),
    )

    assert resolve_metrics(custom) == (MetricKind.MAE, MetricKind.RAE)
