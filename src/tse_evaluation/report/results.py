"""
Numeric result containers for Total Survey Error evaluation.

This module is a *representation* layer only: the engine fills these
containers and the table layer renders them. Values stay plain floats /
numpy arrays so tests and downstream code never parse display strings.

Scheme indexing
---------------
- scheme 0 is the unweighted baseline,
- schemes 1..K follow the input order of the weighting schemes.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Final

import numpy as np
import pandas as pd

from ..metrics.formulas import BIAS2_LABEL, VARIANCE_LABEL, MetricKind

UNWEIGHTED_LABEL: Final[str] = "unweighted"


def scheme_label(index: int) -> str:
    """Row label for a scheme index (0 = unweighted)."""
    if index == 0:
        return UNWEIGHTED_LABEL
    return f"weighting scheme {index}"


def statistic_labels(metrics: Sequence[MetricKind]) -> tuple[str, ...]:
    """
    Statistic labels in report order; aMSE is followed by its components.
    """
    labels: list[str] = []
    for kind in metrics:
        labels.append(kind.value)
        if kind is MetricKind.MSE:
            labels.extend([BIAS2_LABEL, VARIANCE_LABEL])
    return tuple(labels)


def _statistic_key(statistic: str | MetricKind) -> str:
    if isinstance(statistic, MetricKind):
        return statistic.value
    if statistic in (BIAS2_LABEL, VARIANCE_LABEL):
        return statistic
    try:
        return MetricKind.parse(statistic).value
    except ValueError as e:
        raise KeyError(str(e)) from e


@dataclass(frozen=True)
class SchemeEvaluation:
    """
    All requested statistics for one scheme, computed against a single
    weighted survey.

    Fields
    ------
    index:
        Scheme index (0 = unweighted).
    values:
        Statistic label -> averaged value.
    column_values:
        Statistic label -> per-column values (before the across-column mean).
    """

    index: int
    values: Mapping[str, float]
    column_values: Mapping[str, np.ndarray] = field(default_factory=dict)


@dataclass(frozen=True, eq=False)
class MetricResult:
    """
    Mapping (scheme, statistic) -> float for one engine invocation.

    Fields
    ------
    metrics:
        Requested metrics in report order.
    scheme_labels:
        One label per scheme, unweighted first.
    variable_labels:
        Survey column labels (used for per-column views).
    values:
        Statistic label -> array of shape (n_schemes,).
    column_values:
        Statistic label -> array of shape (n_schemes, n_variables).
    """

    metrics: tuple[MetricKind, ...]
    scheme_labels: tuple[str, ...]
    variable_labels: tuple[str, ...]
    values: Mapping[str, np.ndarray]
    column_values: Mapping[str, np.ndarray]

    @classmethod
    def from_schemes(
        cls,
        *,
        metrics: Sequence[MetricKind],
        evaluations: Sequence[SchemeEvaluation],
        variable_labels: Sequence[str],
    ) -> MetricResult:
        """
        Assemble a result from per-scheme evaluations.

        Evaluations are ordered by scheme index regardless of the order in
        which they were computed.
        """
        ordered = sorted(evaluations, key=lambda e: e.index)
        labels = statistic_labels(metrics)

        values = {
            lab: np.array([e.values[lab] for e in ordered], dtype=float) for lab in labels
        }
        column_values = {
            lab: np.vstack([e.column_values[lab] for e in ordered])
            for lab in labels
            if all(lab in e.column_values for e in ordered)
        }

        return cls(
            metrics=tuple(metrics),
            scheme_labels=tuple(scheme_label(e.index) for e in ordered),
            variable_labels=tuple(variable_labels),
            values=values,
            column_values=column_values,
        )

    @property
    def n_schemes(self) -> int:
        """Number of result rows, including the unweighted baseline."""
        return len(self.scheme_labels)

    @property
    def statistics(self) -> tuple[str, ...]:
        return statistic_labels(self.metrics)

    def value(self, scheme: int, statistic: str | MetricKind) -> float:
        """
        Scalar value for one scheme and statistic.

        ``statistic`` may be a MetricKind, a metric label ("aMAE") or a
        decomposition label ("aBias^2", "aVar").

        Raises
        ------
        KeyError
            If the statistic was not computed.
        IndexError
            If the scheme index is out of range.
        """
        key = _statistic_key(statistic)
        if key not in self.values:
            raise KeyError(f"Statistic '{key}' was not computed; available: {list(self.values)}")
        if not 0 <= scheme < self.n_schemes:
            raise IndexError(f"Scheme index {scheme} out of range [0, {self.n_schemes - 1}].")
        return float(self.values[key][scheme])

    def decomposition(self, scheme: int) -> tuple[float, float, float]:
        """(aMSE, aBias^2, aVar) for one scheme."""
        return (
            self.value(scheme, MetricKind.MSE),
            self.value(scheme, BIAS2_LABEL),
            self.value(scheme, VARIANCE_LABEL),
        )

    def to_frame(self) -> pd.DataFrame:
        """
        Numeric DataFrame: one row per scheme, one column per statistic.
        """
        df = pd.DataFrame(
            {lab: self.values[lab] for lab in self.statistics},
            index=list(self.scheme_labels),
        )
        df.index.name = "scheme"
        return df

    def column_frame(self, statistic: str | MetricKind) -> pd.DataFrame:
        """
        Per-variable values (before averaging): one row per scheme, one
        column per survey variable.
        """
        key = _statistic_key(statistic)
        if key not in self.column_values:
            raise KeyError(f"No per-column values for '{key}'.")
        df = pd.DataFrame(
            self.column_values[key],
            index=list(self.scheme_labels),
            columns=list(self.variable_labels),
        )
        df.index.name = "scheme"
        return df

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to a JSON-friendly dict (plain floats and strings).
        """
        return {
            "metrics": [m.value for m in self.metrics],
            "schemes": list(self.scheme_labels),
            "variables": list(self.variable_labels),
            "values": {lab: [float(v) for v in self.values[lab]] for lab in self.statistics},
        }
