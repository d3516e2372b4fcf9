"""
Public report operations.

Each operation evaluates one named metric set and returns a
:class:`ResultTable` (display strings, unweighted row first). The numeric
values remain available as ``table.result``.

Usage
-----
>>> from tse_evaluation import ave_mae, load_testwgt, schemes_from_columns
>>> df = load_testwgt()
>>> table = ave_mae(df[["A1", "A2"]], df[["Q1", "Q2"]], schemes_from_columns(df[["W1", "W2"]]))
>>> table.row_labels
('unweighted', 'weighting scheme 1', 'weighting scheme 2')
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any, Final

from .engine import EngineOptions, compute_metrics
from .metrics import presets
from .metrics.presets import MetricSet
from .report.table import ResultTable

Operation = Callable[..., ResultTable]


def run_metric_set(
    metric_set: str | MetricSet,
    actual: Any,
    survey: Any,
    weights: Sequence[Any] | None = None,
    *,
    options: EngineOptions | None = None,
) -> ResultTable:
    """
    Evaluate a metric set (by name or instance) and render it as a table.
    """
    ms = presets.get_metric_set(metric_set) if isinstance(metric_set, str) else metric_set
    result = compute_metrics(actual, survey, weights, metrics=ms, options=options)
    return ResultTable.from_result(result)


def _operation(metric_set: MetricSet) -> Operation:
    def op(
        actual: Any,
        survey: Any,
        weights: Sequence[Any] | None = None,
        *,
        options: EngineOptions | None = None,
    ) -> ResultTable:
        return run_metric_set(metric_set, actual, survey, weights, options=options)

    op.__doc__ = (
        f"{metric_set.operation}: {metric_set.description}\n\n"
        "Returns a ResultTable with one row per scheme (unweighted first)."
    )
    return op


ave_mae = _operation(presets.AVEMAE)
ave_mse = _operation(presets.AVEMSE)
ave_rmse = _operation(presets.AVERMSE)
ave_msle = _operation(presets.AVEMSLE)
ave_rmsle = _operation(presets.AVERMSLE)
full_scale_dependent = _operation(presets.FULL_SCALE_DEPENDENT)

ave_mape = _operation(presets.AVEMAPE)
ave_smape = _operation(presets.AVESMAPE)
ave_rae = _operation(presets.AVERAE)
ave_rse = _operation(presets.AVERSE)
ave_rrse = _operation(presets.AVERRSE)
full_scale_independent = _operation(presets.FULL_SCALE_INDEPENDENT)

for _name, _fn in (
    ("ave_mae", ave_mae),
    ("ave_mse", ave_mse),
    ("ave_rmse", ave_rmse),
    ("ave_msle", ave_msle),
    ("ave_rmsle", ave_rmsle),
    ("full_scale_dependent", full_scale_dependent),
    ("ave_mape", ave_mape),
    ("ave_smape", ave_smape),
    ("ave_rae", ave_rae),
    ("ave_rse", ave_rse),
    ("ave_rrse", ave_rrse),
    ("full_scale_independent", full_scale_independent),
):
    _fn.__name__ = _fn.__qualname__ = _name
del _name, _fn

OPERATIONS: Final[Mapping[str, Operation]] = {
    "AVEMAE": ave_mae,
    "AVEMSE": ave_mse,
    "AVERMSE": ave_rmse,
    "AVEMSLE": ave_msle,
    "AVERMSLE": ave_rmsle,
    "FullScaleDependent": full_scale_dependent,
    "AVEMAPE": ave_mape,
    "AVESMAPE": ave_smape,
    "AVERAE": ave_rae,
    "AVERSE": ave_rse,
    "AVERRSE": ave_rrse,
    "FullScaleIndependent": full_scale_independent,
}
