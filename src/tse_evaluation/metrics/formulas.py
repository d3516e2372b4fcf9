"""
Total Survey Error metric formula library.

Every averaged TSE metric follows the same three-step shape:

1. an elementwise error transform of ``(actual, weighted)``,
2. a per-column reduction over rows (mean or sum), optionally divided by a
   per-column baseline derived from ``actual`` only and optionally square
   rooted,
3. a mean across columns.

Each metric is therefore described by a :class:`MetricFormula` record rather
than its own function, and the records live in :data:`METRIC_FORMULAS`.

Conventions
-----------
- ``actual`` and ``weighted`` are float arrays of shape (n_rows, n_columns).
- ``d = actual - weighted``.
- The naive predictor baseline of the relative metrics (aRAE, aRSE, aRRSE)
  is the column mean of ``actual``, never of ``weighted``.
- Roots (aRMSE, aRMSLE, aRRSE) are taken per column *before* averaging, so
  aRMSE equals sqrt(aMSE) only when every column has the same MSE.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Final, Literal

import numpy as np

from ..utils.validation import DecompositionError, DivisionByZeroError, DomainError

logger = logging.getLogger(__name__)

ZeroDivisionPolicy = Literal["raise", "propagate"]

ElementwiseFn = Callable[[np.ndarray, np.ndarray], np.ndarray]
BaselineFn = Callable[[np.ndarray], np.ndarray]


class MetricKind(str, Enum):
    """Averaged TSE metrics; values double as report column labels."""

    MAE = "aMAE"
    MSE = "aMSE"
    RMSE = "aRMSE"
    MSLE = "aMSLE"
    RMSLE = "aRMSLE"
    MAPE = "aMAPE"
    SMAPE = "aSMAPE"
    RAE = "aRAE"
    RSE = "aRSE"
    RRSE = "aRRSE"

    @classmethod
    def parse(cls, value: str | MetricKind) -> MetricKind:
        """
        Resolve a metric from an enum member, its label ("aMAE") or its bare
        name ("MAE"), case-insensitively.

        Raises
        ------
        ValueError
            If the name is not a known metric.
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        for kind in cls:
            if key in (kind.value.lower(), kind.name.lower()):
                return kind
        valid = ", ".join(k.value for k in cls)
        raise ValueError(f"Unknown metric '{value}'. Valid metrics: {valid}.")


class Reduction(str, Enum):
    """Per-column reduction over rows."""

    MEAN = "mean"
    SUM = "sum"


# Labels of the aMSE decomposition components.
BIAS2_LABEL: Final[str] = "aBias^2"
VARIANCE_LABEL: Final[str] = "aVar"


# ---------------------------------------------------------------------------
# Elementwise transforms and baselines
# ---------------------------------------------------------------------------

def _error(actual: np.ndarray, weighted: np.ndarray) -> np.ndarray:
    return actual - weighted


def _absolute_error(actual: np.ndarray, weighted: np.ndarray) -> np.ndarray:
    return np.abs(actual - weighted)


def _squared_error(actual: np.ndarray, weighted: np.ndarray) -> np.ndarray:
    return (actual - weighted) ** 2


def _squared_log_error(actual: np.ndarray, weighted: np.ndarray) -> np.ndarray:
    for name, values in (("Actual", actual), ("WeightedSurvey", weighted)):
        bad = values + 1.0 <= 0.0
        if bad.any():
            rows, cols = np.nonzero(bad)
            raise DomainError(
                f"Logarithmic error is undefined: {name} + 1 <= 0 at "
                f"{bad.sum()} element(s) (first at row {rows[0]}, column {cols[0]})."
            )
    return (np.log1p(actual) - np.log1p(weighted)) ** 2


def _symmetric_percentage_error(actual: np.ndarray, weighted: np.ndarray) -> np.ndarray:
    # 0/0 (both values zero) is defined as a perfect match.
    num = 2.0 * np.abs(actual - weighted)
    den = np.abs(actual) + np.abs(weighted)
    return np.divide(num, den, out=np.zeros_like(num), where=den != 0)


def _actual_scale(actual: np.ndarray, weighted: np.ndarray) -> np.ndarray:
    return actual


def _absolute_deviation_baseline(actual: np.ndarray) -> np.ndarray:
    return np.abs(actual - actual.mean(axis=0)).sum(axis=0)


def _squared_deviation_baseline(actual: np.ndarray) -> np.ndarray:
    return ((actual - actual.mean(axis=0)) ** 2).sum(axis=0)


def _divide(
    num: np.ndarray,
    den: np.ndarray,
    *,
    metric: MetricKind,
    what: str,
    zero_division: ZeroDivisionPolicy,
) -> np.ndarray:
    zero = den == 0
    if not zero.any():
        return num / den

    if zero_division == "raise":
        raise DivisionByZeroError(
            f"{metric.value} is undefined: {what} is zero at {int(zero.sum())} position(s)."
        )

    logger.warning(
        "%s: %s is zero at %d position(s); propagating inf/nan.",
        metric.value,
        what,
        int(zero.sum()),
    )
    with np.errstate(divide="ignore", invalid="ignore"):
        return num / den


# ---------------------------------------------------------------------------
# Formula descriptor
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MetricFormula:
    """
    Descriptor for one averaged TSE metric.

    Fields
    ------
    kind:
        Which metric this formula computes.
    transform:
        Elementwise error of ``(actual, weighted)``.
    reduction:
        Per-column reduction over rows.
    scale:
        Optional elementwise divisor applied before the reduction (aMAPE).
    baseline:
        Optional per-column divisor computed from ``actual`` only, applied
        after the reduction (aRAE, aRSE, aRRSE).
    root:
        Take the square root of each per-column value before averaging.
    scale_dependent:
        Whether the metric is expressed in the units of the variable.
    """

    kind: MetricKind
    transform: ElementwiseFn
    reduction: Reduction
    scale: ElementwiseFn | None = None
    baseline: BaselineFn | None = None
    root: bool = False
    scale_dependent: bool = True

    def column_values(
        self,
        actual: np.ndarray,
        weighted: np.ndarray,
        *,
        zero_division: ZeroDivisionPolicy = "raise",
    ) -> np.ndarray:
        """
        Per-column statistic, before the across-column mean.

        Returns
        -------
        numpy.ndarray of shape (n_columns,)
        """
        errors = self.transform(actual, weighted)

        if self.scale is not None:
            errors = _divide(
                errors,
                self.scale(actual, weighted),
                metric=self.kind,
                what="Actual",
                zero_division=zero_division,
            )

        if self.reduction is Reduction.MEAN:
            per_column = errors.mean(axis=0)
        else:
            per_column = errors.sum(axis=0)

        if self.baseline is not None:
            per_column = _divide(
                per_column,
                self.baseline(actual),
                metric=self.kind,
                what="naive predictor deviation of Actual",
                zero_division=zero_division,
            )

        if self.root:
            per_column = np.sqrt(per_column)

        return per_column

    def evaluate(
        self,
        actual: np.ndarray,
        weighted: np.ndarray,
        *,
        zero_division: ZeroDivisionPolicy = "raise",
    ) -> float:
        """Averaged metric: mean over columns of :meth:`column_values`."""
        return float(np.mean(self.column_values(actual, weighted, zero_division=zero_division)))


METRIC_FORMULAS: Final[Mapping[MetricKind, MetricFormula]] = {
    f.kind: f
    for f in (
        MetricFormula(MetricKind.MAE, _absolute_error, Reduction.MEAN),
        MetricFormula(MetricKind.MSE, _squared_error, Reduction.MEAN),
        MetricFormula(MetricKind.RMSE, _squared_error, Reduction.MEAN, root=True),
        MetricFormula(MetricKind.MSLE, _squared_log_error, Reduction.MEAN),
        MetricFormula(MetricKind.RMSLE, _squared_log_error, Reduction.MEAN, root=True),
        MetricFormula(
            MetricKind.MAPE,
            _absolute_error,
            Reduction.MEAN,
            scale=_actual_scale,
            scale_dependent=False,
        ),
        MetricFormula(
            MetricKind.SMAPE,
            _symmetric_percentage_error,
            Reduction.MEAN,
            scale_dependent=False,
        ),
        MetricFormula(
            MetricKind.RAE,
            _absolute_error,
            Reduction.SUM,
            baseline=_absolute_deviation_baseline,
            scale_dependent=False,
        ),
        MetricFormula(
            MetricKind.RSE,
            _squared_error,
            Reduction.SUM,
            baseline=_squared_deviation_baseline,
            scale_dependent=False,
        ),
        MetricFormula(
            MetricKind.RRSE,
            _squared_error,
            Reduction.SUM,
            baseline=_squared_deviation_baseline,
            root=True,
            scale_dependent=False,
        ),
    )
}


def get_formula(metric: str | MetricKind) -> MetricFormula:
    """Look up the formula for a metric given as enum, label or bare name."""
    return METRIC_FORMULAS[MetricKind.parse(metric)]


# ---------------------------------------------------------------------------
# aMSE bias / variance decomposition
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MSEDecomposition:
    """
    Per-column MSE split into squared bias and variance of the error.

    All fields have shape (n_columns,). ``mse == bias2 + variance`` holds in
    every column where the MSE is finite.
    """

    mse: np.ndarray
    bias2: np.ndarray
    variance: np.ndarray


def mse_decomposition(
    actual: np.ndarray,
    weighted: np.ndarray,
    *,
    rtol: float = 1e-9,
    atol: float = 1e-9,
) -> MSEDecomposition:
    """
    Decompose per-column MSE into Bias^2 + Var and verify the identity.

    Bias is the column mean of ``d = actual - weighted``; Var is the
    population variance of ``d`` (divisor n).

    Columns whose errors overflow float64 carry inf / nan through to the
    result, like every other metric, and are excluded from the identity
    check.

    Raises
    ------
    DecompositionError
        If ``mse`` and ``bias2 + variance`` disagree beyond tolerance in any
        column with a finite MSE.
    """
    with np.errstate(over="ignore", invalid="ignore"):
        d = _error(actual, weighted)
        mse = METRIC_FORMULAS[MetricKind.MSE].column_values(actual, weighted)
        bias = d.mean(axis=0)
        bias2 = bias**2
        variance = ((d - bias) ** 2).mean(axis=0)
        total = bias2 + variance

    finite = np.isfinite(mse)
    if not finite.all():
        logger.warning(
            "aMSE overflowed in column(s) %s; propagating inf/nan.",
            np.flatnonzero(~finite).tolist(),
        )

    ok = ~finite | np.isclose(mse, total, rtol=rtol, atol=atol)
    if not ok.all():
        cols = np.flatnonzero(~ok).tolist()
        raise DecompositionError(
            f"MSE != Bias^2 + Var in column(s) {cols} beyond tolerance (rtol={rtol}, atol={atol})."
        )

    return MSEDecomposition(mse=mse, bias2=bias2, variance=variance)
