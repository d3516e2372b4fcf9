"""
Named metric sets for Total Survey Error reports.

Each public operation (AVEMAE, ..., FullScaleIndependent) is a named bundle of
metrics evaluated together against one weighted survey per scheme. Metric sets
are intended to be:

- stable (referenced by name from notebooks and reports),
- explicit (the metric order is the report column order),
- lightweight (pure configuration; no computation).
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Final

from .formulas import METRIC_FORMULAS, MetricKind


@dataclass(frozen=True)
class MetricSet:
    """
    Named, ordered bundle of metrics.

    Parameters
    ----------
    name:
        Stable identifier (e.g., "avemae", "full_scale_dependent").
    operation:
        Upper-case operation name (e.g., "AVEMAE", "FullScaleDependent").
    description:
        Short human-readable summary.
    metrics:
        Metrics in report column order.
    """

    name: str
    operation: str
    description: str
    metrics: tuple[MetricKind, ...]


def _single(kind: MetricKind, description: str) -> MetricSet:
    return MetricSet(
        name=f"ave{kind.name.lower()}",
        operation=f"AVE{kind.name}",
        description=description,
        metrics=(kind,),
    )


AVEMAE: Final[MetricSet] = _single(MetricKind.MAE, "Average mean absolute error.")
AVEMSE: Final[MetricSet] = _single(
    MetricKind.MSE, "Average mean squared error with its Bias^2 + Var decomposition."
)
AVERMSE: Final[MetricSet] = _single(MetricKind.RMSE, "Average root mean squared error.")
AVEMSLE: Final[MetricSet] = _single(MetricKind.MSLE, "Average mean squared log error.")
AVERMSLE: Final[MetricSet] = _single(MetricKind.RMSLE, "Average root mean squared log error.")
AVEMAPE: Final[MetricSet] = _single(MetricKind.MAPE, "Average mean absolute percentage error.")
AVESMAPE: Final[MetricSet] = _single(
    MetricKind.SMAPE, "Average symmetric mean absolute percentage error."
)
AVERAE: Final[MetricSet] = _single(MetricKind.RAE, "Average relative absolute error.")
AVERSE: Final[MetricSet] = _single(MetricKind.RSE, "Average relative squared error.")
AVERRSE: Final[MetricSet] = _single(MetricKind.RRSE, "Average root relative squared error.")

FULL_SCALE_DEPENDENT: Final[MetricSet] = MetricSet(
    name="full_scale_dependent",
    operation="FullScaleDependent",
    description="All scale-dependent metrics: aMAE, aMSE (decomposed), aRMSE, aMSLE, aRMSLE.",
    metrics=tuple(k for k, f in METRIC_FORMULAS.items() if f.scale_dependent),
)

FULL_SCALE_INDEPENDENT: Final[MetricSet] = MetricSet(
    name="full_scale_independent",
    operation="FullScaleIndependent",
    description="All scale-independent metrics: aMAPE, aSMAPE, aRAE, aRSE, aRRSE.",
    metrics=tuple(k for k, f in METRIC_FORMULAS.items() if not f.scale_dependent),
)

# Public mapping for lookup by name, in operation order.
METRIC_SETS: Final[Mapping[str, MetricSet]] = {
    s.name: s
    for s in (
        AVEMAE,
        AVEMSE,
        AVERMSE,
        AVEMSLE,
        AVERMSLE,
        FULL_SCALE_DEPENDENT,
        AVEMAPE,
        AVESMAPE,
        AVERAE,
        AVERSE,
        AVERRSE,
        FULL_SCALE_INDEPENDENT,
    )
}

METRIC_SET_NAMES: Final[Sequence[str]] = tuple(METRIC_SETS.keys())


def list_metric_sets() -> tuple[MetricSet, ...]:
    """List all metric sets in operation order."""
    return tuple(METRIC_SETS.values())


def get_metric_set(name: str) -> MetricSet:
    """
    Retrieve a metric set by name or operation name, case-insensitively.

    Parameters
    ----------
    name:
        Set name ("avemae", "full_scale_dependent", ...) or operation name
        ("AVEMAE", "FullScaleDependent", ...).

    Raises
    ------
    KeyError
        If the name is unknown.
    """
    key = name.strip().lower()
    for s in METRIC_SETS.values():
        if key in (s.name, s.operation.lower()):
            return s
    valid = ", ".join(METRIC_SET_NAMES)
    raise KeyError(f"Unknown metric set '{name}'. Valid metric sets: {valid}.")


def resolve_metrics(
    metrics: str | MetricSet | MetricKind | Sequence[str | MetricKind],
) -> tuple[MetricKind, ...]:
    """
    Resolve a metric-set name, a MetricSet, or an explicit list of metrics
    into an ordered, de-duplicated tuple of :class:`MetricKind`.

    Raises
    ------
    TypeError
        If ``metrics`` has an unsupported type.
    ValueError
        If a name is unknown or the selection is empty.
    """
    if isinstance(metrics, MetricSet):
        kinds: Sequence[MetricKind] = metrics.metrics
    elif isinstance(metrics, MetricKind):
        kinds = (metrics,)
    elif isinstance(metrics, str):
        try:
            kinds = get_metric_set(metrics).metrics
        except KeyError:
            try:
                kinds = (MetricKind.parse(metrics),)
            except ValueError as e:
                raise ValueError(
                    f"'{metrics}' is neither a metric set nor a metric. "
                    f"Valid metric sets: {', '.join(METRIC_SET_NAMES)}."
                ) from e
    elif isinstance(metrics, Sequence):
        kinds = [MetricKind.parse(m) for m in metrics]
    else:
        raise TypeError(
            "`metrics` must be a metric-set name, MetricSet, MetricKind or a sequence "
            f"of metrics, got {type(metrics).__name__}."
        )

    resolved = tuple(dict.fromkeys(kinds))
    if not resolved:
        raise ValueError("No metrics requested; provide at least one metric.")
    return resolved
