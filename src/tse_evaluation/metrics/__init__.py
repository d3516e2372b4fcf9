"""
Metric formula library for averaged Total Survey Error metrics.

Public API
----------
MetricKind
    Enumeration of the ten averaged metrics (aMAE ... aRRSE).
MetricFormula
    Descriptor: elementwise transform, per-column reduction, optional
    baseline and root.
METRIC_FORMULAS
    Registry mapping each MetricKind to its formula.
mse_decomposition
    Per-column aMSE = aBias^2 + aVar split with a numerical identity check.
MetricSet
    Named, ordered bundle of metrics (one per public operation).
get_metric_set / list_metric_sets / resolve_metrics
    Lookup helpers over the metric-set registry.
"""

from .formulas import (
    BIAS2_LABEL,
    METRIC_FORMULAS,
    VARIANCE_LABEL,
    MetricFormula,
    MetricKind,
    MSEDecomposition,
    Reduction,
    ZeroDivisionPolicy,
    get_formula,
    mse_decomposition,
)
from .presets import (
    FULL_SCALE_DEPENDENT,
    FULL_SCALE_INDEPENDENT,
    METRIC_SET_NAMES,
    METRIC_SETS,
    MetricSet,
    get_metric_set,
    list_metric_sets,
    resolve_metrics,
)

__all__ = [
    "BIAS2_LABEL",
    "VARIANCE_LABEL",
    "METRIC_FORMULAS",
    "MetricFormula",
    "MetricKind",
    "MSEDecomposition",
    "Reduction",
    "ZeroDivisionPolicy",
    "get_formula",
    "mse_decomposition",
    "FULL_SCALE_DEPENDENT",
    "FULL_SCALE_INDEPENDENT",
    "METRIC_SET_NAMES",
    "METRIC_SETS",
    "MetricSet",
    "get_metric_set",
    "list_metric_sets",
    "resolve_metrics",
]
