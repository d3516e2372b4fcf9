"""
Metric engine: the single choke point that turns (Actual, Survey, Weights)
into a :class:`MetricResult`.

For each scheme (unweighted first, then the supplied schemes in order) the
engine

1. derives the weighted survey exactly once,
2. runs every requested formula against that one weighted array,
3. records averaged and per-column values.

The unweighted baseline is the same pipeline invoked with all-ones weights.
Schemes are independent of each other, so they may be evaluated on a thread
pool; the result is always ordered by scheme index.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any

import numpy as np

from .metrics.formulas import (
    BIAS2_LABEL,
    METRIC_FORMULAS,
    VARIANCE_LABEL,
    MetricKind,
    ZeroDivisionPolicy,
    mse_decomposition,
)
from .metrics.presets import MetricSet, resolve_metrics
from .report.results import MetricResult, SchemeEvaluation
from .utils.columns import as_column_set
from .utils.validation import ensure_same_shape
from .weighting.schemes import apply_weights, iter_schemes, normalize_schemes

logger = logging.getLogger(__name__)

_ZERO_DIVISION_POLICIES = ("raise", "propagate")


@dataclass(frozen=True)
class EngineOptions:
    """
    Engine configuration.

    Parameters
    ----------
    zero_division:
        ``"raise"`` (default) raises DivisionByZeroError on a zero
        denominator in aMAPE / aRAE / aRSE / aRRSE. ``"propagate"`` lets
        IEEE inf / nan flow into the result and logs a warning.
    max_workers:
        If set to an integer > 1, schemes are evaluated on a thread pool of
        that size. ``None`` evaluates serially.
    decomposition_rtol, decomposition_atol:
        Tolerances for the per-column check ``MSE == Bias^2 + Var``.
    """

    zero_division: ZeroDivisionPolicy = "raise"
    max_workers: int | None = None
    decomposition_rtol: float = 1e-9
    decomposition_atol: float = 1e-9

    def __post_init__(self) -> None:
        if self.zero_division not in _ZERO_DIVISION_POLICIES:
            raise ValueError(
                f"zero_division must be one of {_ZERO_DIVISION_POLICIES}; "
                f"got {self.zero_division!r}."
            )
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1 or None; got {self.max_workers}.")
        if self.decomposition_rtol < 0 or self.decomposition_atol < 0:
            raise ValueError("Decomposition tolerances must be non-negative.")


def evaluate_scheme(
    index: int,
    actual: np.ndarray,
    survey: np.ndarray,
    weights: np.ndarray,
    metrics: Sequence[MetricKind],
    options: EngineOptions,
) -> SchemeEvaluation:
    """
    Evaluate all ``metrics`` for one scheme against one weighted survey.
    """
    weighted = apply_weights(survey, weights, context=f"scheme {index}")

    values: dict[str, float] = {}
    column_values: dict[str, np.ndarray] = {}

    for kind in metrics:
        if kind is MetricKind.MSE:
            dec = mse_decomposition(
                actual,
                weighted,
                rtol=options.decomposition_rtol,
                atol=options.decomposition_atol,
            )
            for label, per_column in (
                (kind.value, dec.mse),
                (BIAS2_LABEL, dec.bias2),
                (VARIANCE_LABEL, dec.variance),
            ):
                column_values[label] = per_column
                values[label] = float(np.mean(per_column))
            continue

        per_column = METRIC_FORMULAS[kind].column_values(
            actual, weighted, zero_division=options.zero_division
        )
        column_values[kind.value] = per_column
        values[kind.value] = float(np.mean(per_column))

    logger.debug("Scheme %d evaluated: %s", index, values)
    return SchemeEvaluation(index=index, values=values, column_values=column_values)


def compute_metrics(
    actual: Any,
    survey: Any,
    weights: Sequence[Any] | None = None,
    *,
    metrics: str | MetricSet | MetricKind | Sequence[str | MetricKind],
    options: EngineOptions | None = None,
) -> MetricResult:
    """
    Compute averaged TSE metrics for the unweighted baseline and every
    weighting scheme.

    Parameters
    ----------
    actual : ColumnSet-like
        Reference ("gold standard") columns.

    survey : ColumnSet-like
        Survey columns, paired with ``actual`` by position.

    weights : sequence of schemes, optional
        Ordered weighting schemes. Each is either a 2-D ColumnSet with one
        weight column per survey column, or a 1-D weight column applied to
        every survey column. ``None`` or ``[]`` yields only the unweighted
        row.

    metrics : str, MetricSet, MetricKind or sequence
        A metric-set name ("full_scale_dependent", "avemae", ...), a
        MetricSet, a single metric or an explicit list of metrics.

    options : EngineOptions, optional
        Engine configuration. Defaults are used when omitted.

    Returns
    -------
    MetricResult
        One row per scheme (unweighted first), one value per statistic.

    Raises
    ------
    DimensionMismatchError
        If Actual / Survey / a scheme disagree in column or row counts.
    InputValidationError
        If any input is empty, non-numeric or non-finite.
    DomainError
        If aMSLE / aRMSLE meet a value <= -1.
    DivisionByZeroError
        If a relative metric meets a zero denominator and
        ``options.zero_division == "raise"``.
    """
    opts = options or EngineOptions()
    kinds = resolve_metrics(metrics)
    context = "compute_metrics"

    a = as_column_set(actual, name="Actual", label_prefix="A", context=context)
    s = as_column_set(survey, name="Survey", label_prefix="Q", context=context)
    ensure_same_shape(a.values, s.values, names=("Actual", "Survey"), context=context)

    schemes = normalize_schemes(weights, s, context=context)
    jobs = list(iter_schemes(s, schemes))

    logger.debug(
        "Evaluating %d metric(s) over %d scheme(s) (%d variables x %d rows).",
        len(kinds),
        len(jobs),
        s.n_columns,
        s.n_rows,
    )

    def _run(job: tuple[int, np.ndarray]) -> SchemeEvaluation:
        index, w = job
        return evaluate_scheme(index, a.values, s.values, w, kinds, opts)

    if opts.max_workers is not None and opts.max_workers > 1 and len(jobs) > 1:
        with ThreadPoolExecutor(max_workers=opts.max_workers) as pool:
            evaluations = list(pool.map(_run, jobs))
    else:
        evaluations = [_run(job) for job in jobs]

    return MetricResult.from_schemes(
        metrics=kinds,
        evaluations=evaluations,
        variable_labels=s.labels,
    )
