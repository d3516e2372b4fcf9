"""
Presentation layer: render a MetricResult as a fixed-precision text table.

The table is a terminal/report artifact. Cells are display strings rendered
to a fixed number of significant digits and are not meant to be parsed back
into numbers; use :class:`~tse_evaluation.report.results.MetricResult` for
computation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

import pandas as pd

from ..metrics.formulas import BIAS2_LABEL, VARIANCE_LABEL, MetricKind
from .results import MetricResult

SIGNIFICANT_DIGITS: Final[int] = 7

# aMSE renders as "aMSE => aBias^2 + aVar".
EQUALS_SEPARATOR: Final[str] = "=>"
PLUS_SEPARATOR: Final[str] = "+"


def format_value(value: float, digits: int = SIGNIFICANT_DIGITS) -> str:
    """Render a float with ``digits`` significant digits."""
    return format(float(value), f".{digits}g")


@dataclass(frozen=True)
class ResultTable:
    """
    Immutable display table over a MetricResult.

    Fields
    ------
    row_labels:
        "unweighted", then "weighting scheme 1" ... in input order.
    column_labels:
        Metric labels in requested order; aMSE expands to
        ``aMSE, =>, aBias^2, +, aVar``.
    cells:
        Display strings, one tuple per row.
    result:
        The numeric result the table was rendered from.
    """

    row_labels: tuple[str, ...]
    column_labels: tuple[str, ...]
    cells: tuple[tuple[str, ...], ...]
    result: MetricResult = field(repr=False, compare=False)

    @classmethod
    def from_result(
        cls,
        result: MetricResult,
        *,
        digits: int = SIGNIFICANT_DIGITS,
    ) -> ResultTable:
        columns: list[str] = []
        for kind in result.metrics:
            if kind is MetricKind.MSE:
                columns.extend(
                    [kind.value, EQUALS_SEPARATOR, BIAS2_LABEL, PLUS_SEPARATOR, VARIANCE_LABEL]
                )
            else:
                columns.append(kind.value)

        separators = {EQUALS_SEPARATOR, PLUS_SEPARATOR}
        rows = tuple(
            tuple(
                col if col in separators else format_value(result.values[col][i], digits)
                for col in columns
            )
            for i in range(result.n_schemes)
        )

        return cls(
            row_labels=result.scheme_labels,
            column_labels=tuple(columns),
            cells=rows,
            result=result,
        )

    @property
    def n_rows(self) -> int:
        return len(self.row_labels)

    def cell(self, row: str | int, column: str) -> str:
        """Display string at (row label or index, column label)."""
        i = row if isinstance(row, int) else self.row_labels.index(row)
        j = self.column_labels.index(column)
        return self.cells[i][j]

    def to_frame(self) -> pd.DataFrame:
        """String DataFrame indexed by row label."""
        df = pd.DataFrame(
            [list(r) for r in self.cells],
            index=list(self.row_labels),
            columns=list(self.column_labels),
            dtype=object,
        )
        df.index.name = "scheme"
        return df

    def to_string(self) -> str:
        return self.to_frame().to_string()

    def __str__(self) -> str:
        return self.to_string()
