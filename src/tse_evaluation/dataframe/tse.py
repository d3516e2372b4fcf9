from __future__ import annotations

from typing import Optional, Sequence, Union

import pandas as pd

from ..engine import EngineOptions, compute_metrics
from ..metrics.formulas import MetricKind
from ..metrics.presets import MetricSet

WeightSpec = Union[str, Sequence[str]]


def evaluate_tse_df(
    df: pd.DataFrame,
    actual_cols: Sequence[str],
    survey_cols: Sequence[str],
    weight_cols: Optional[Sequence[WeightSpec]] = None,
    *,
    metrics: Union[str, MetricSet, MetricKind, Sequence[Union[str, MetricKind]]] = (
        "full_scale_dependent"
    ),
    options: Optional[EngineOptions] = None,
) -> pd.DataFrame:
    """
    Compute averaged TSE metrics from columns of a single DataFrame.

    This is a convenience wrapper around :func:`tse_evaluation.compute_metrics`
    for data laid out as one wide table (e.g. the ``TESTWGT`` example).

    Parameters
    ----------
    df : pandas.DataFrame
        Input table containing actual, survey and weight columns.

    actual_cols : sequence of str
        Reference ("gold standard") columns, in pairing order.

    survey_cols : sequence of str
        Survey columns, paired with ``actual_cols`` by position.

    weight_cols : sequence, optional
        One entry per weighting scheme, in scheme order. Each entry is either:
        * a column name: that single weight column is applied to every
          survey column, OR
        * a sequence of column names, one per survey column.

    metrics : str, MetricSet, MetricKind or sequence, default "full_scale_dependent"
        Metric set name, MetricSet, single metric, or explicit metric list.

    options : EngineOptions, optional
        Engine configuration.

    Returns
    -------
    pandas.DataFrame
        Numeric table indexed by scheme label ("unweighted",
        "weighting scheme 1", ...), one column per statistic.
    """
    weight_cols = list(weight_cols) if weight_cols is not None else []

    referenced: list[str] = list(actual_cols) + list(survey_cols)
    for spec in weight_cols:
        referenced.extend([spec] if isinstance(spec, str) else list(spec))

    missing = [c for c in referenced if c not in df.columns]
    if missing:
        raise KeyError(f"Missing required columns in df: {missing}")

    schemes = [df[spec] if isinstance(spec, str) else df[list(spec)] for spec in weight_cols]

    result = compute_metrics(
        df[list(actual_cols)],
        df[list(survey_cols)],
        schemes,
        metrics=metrics,
        options=options,
    )
    return result.to_frame()
